"""Base model class for all deemodel models with serialization support."""

from typing import Any, Dict
from pydantic import BaseModel, ConfigDict


class DeeBaseModel(BaseModel):
    """Base model for all deemodel models with built-in serialization.

    Models are frozen: a schema or snapshot never changes once built, so
    one instance can be shared freely between concurrent fetches.
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        use_enum_values=True,
        frozen=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary for serialization.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return self.model_dump(mode="json", by_alias=False)
