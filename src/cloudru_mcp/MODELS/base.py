"""
Base model shared by every upstream entity.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class CloudruModel(BaseModel):
    """
    Upstream APIs speak camelCase JSON; attributes are snake_case.
    Explicit nulls fall back to the field default, unknown keys are ignored.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def to_json_dict(self) -> dict:
        """Dumps the model using the upstream (camelCase) key names."""
        return self.model_dump(by_alias=True)
