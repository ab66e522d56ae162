from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel
from typing import Any, Optional


class BaseGolfModel(BaseModel):
    """Shared configuration and methods.

    Fields are snake_case in Python and camelCase in persisted records.
    """
    model_config = ConfigDict(
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def update_field(self, field_name: str, value: Any) -> Optional[str]:
        """Update a field with a correction. Returns error message if validation fails."""
        try:
            setattr(self, field_name, value)
            return None
        except ValidationError as e:
            return e.errors()[0]['msg']


class GeoPoint(BaseGolfModel):
    """A bare latitude/longitude pair in decimal degrees."""
    lat: float
    lon: float
