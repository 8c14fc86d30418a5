from pydantic import BaseModel, ConfigDict, ValidationError
from typing import Any, Optional, TypeVar

M = TypeVar("M", bound="BaseGolfModel")


class BaseGolfModel(BaseModel):
    """Shared configuration and methods for round data."""
    model_config = ConfigDict(validate_assignment=True)

    def update_field(self, field_name: str, value: Any) -> Optional[str]:
        """Update a field with user correction. Returns error message if validation fails."""
        try:
            setattr(self, field_name, value)
            return None
        except ValidationError as e:
            return e.errors()[0]['msg']

    def copy_with(self: M, **changes: Any) -> M:
        """Validated deep copy with some fields replaced. The original is untouched.

        Unlike model_copy(update=...), the result goes through validation.
        """
        data = self.model_dump()
        data.update(changes)
        return type(self).model_validate(data)
