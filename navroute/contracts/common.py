"""Base classes and shared types for navroute contracts.

Unit conventions (all contracts and wire payloads):
- **Distances**: nautical miles (NM)
- **Speeds**: knots (kt)
- **Altitudes**: feet MSL
- **Fuel volumes**: US gallons
- **Headings/courses**: degrees true unless named ``magnetic_*``
- **Datetimes**: always UTC, ISO 8601 in serialized form
- **Coordinates**: WGS84 decimal degrees

The nav-log API speaks camelCase JSON; models accept both the camelCase
alias and the snake_case field name.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class NavModel(BaseModel):
    """Base model with nav-log API friendly serialization.

    - Field names are snake_case in Python, camelCase on the wire.
    - Enums serialize as string values.
    - ``to_wire()`` produces a JSON-safe dict (datetimes as ISO 8601).
    - ``from_wire()`` hydrates from an API payload dict.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump to an API-compatible dict."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> "NavModel":
        """Create model instance from an API payload dict."""
        return cls.model_validate(data)


class GeoPoint(BaseModel):
    """WGS84 geographic coordinate."""

    latitude: float
    longitude: float

    model_config = ConfigDict(frozen=True)
