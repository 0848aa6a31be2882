"""
Shared Pydantic types for schema validation.

Money values are Decimal inside the application (exact arithmetic) and plain
JSON numbers on the wire. Invoice dates are normalized to UTC on the way in
and on the way out.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated
from pydantic import AfterValidator, Field, PlainSerializer

_as_json_number = PlainSerializer(float, return_type=float, when_used="json")

# Output side: whatever the store or the invoice arithmetic produced
Money = Annotated[Decimal, _as_json_number]

# Input side: fits a NUMERIC(10, 2) column
NonNegativeMoney = Annotated[
    Decimal,
    Field(ge=0, max_digits=10, decimal_places=2),
    _as_json_number,
]


def _as_utc(value: datetime) -> datetime:
    # Naive values are taken as UTC; the store keeps UTC only
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Offsets are folded into the instant, so the same moment reads back as UTC
UTCDateTime = Annotated[datetime, AfterValidator(_as_utc)]
