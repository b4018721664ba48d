"""Primitive identifiers carried by the telemetry feed."""

from __future__ import annotations

from typing import Any, NewType, SupportsInt

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self

from .exceptions import TrackerValueError

Address = NewType("Address", str)
"""Opaque validator or reporter identity (an SS58 string on Substrate chains)."""

BlockHash = NewType("BlockHash", str)
"""Opaque block hash, usually 0x-prefixed hex."""

AuthoritySetId = NewType("AuthoritySetId", int)
"""Version token of the authority set that votes are scoped to."""


class BlockNumber(int):
    """
    Height of a block, assigned monotonically by the chain.

    Telemetry nodes report heights either as JSON numbers or as decimal
    strings, so both are accepted on construction.
    """

    def __new__(cls, value: SupportsInt | str) -> Self:
        """
        Create and validate a new block number.

        Raises:
            TrackerValueError: If `value` is not a non-negative integer.
        """
        if isinstance(value, bool):
            raise TrackerValueError(cls.__name__, value, detail="booleans are not heights")
        if isinstance(value, float) and not value.is_integer():
            raise TrackerValueError(cls.__name__, value, detail="heights are integral")

        try:
            int_value = int(value)
        except (TypeError, ValueError) as e:
            raise TrackerValueError(cls.__name__, value, detail="not an integer") from e

        if int_value < 0:
            raise TrackerValueError(cls.__name__, value, detail="heights are non-negative")
        return super().__new__(cls, int_value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Hook into Pydantic's validation system."""

        def validate(value: Any) -> BlockNumber:
            """Pydantic validation function that calls the class constructor."""
            try:
                return cls(value)
            except TrackerValueError as e:
                raise ValueError(e.message) from e

        return core_schema.no_info_plain_validator_function(
            validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda instance: int(instance)
            ),
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({int(self)})"
