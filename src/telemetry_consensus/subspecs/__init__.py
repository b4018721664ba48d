"""Components of the telemetry finality tracker."""
