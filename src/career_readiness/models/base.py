"""Shared pydantic base for models that serialise with camelCase keys."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    def to_json_dict(self) -> dict:
        """Dump with the external camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
