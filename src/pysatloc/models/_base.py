"""Base model for records produced by the stream.

Every record inherits from :class:`SatLocBaseModel` which provides:

* ``alias_generator=to_camel`` so records serialize to the camelCase
  shape consumers of the position feed expect (``model_dump(by_alias=True)``).
* ``populate_by_name`` so both spellings are accepted on input.
* A ``model_validator(mode="before")`` that drops ``None`` values and
  NaN floats of *declared* fields so the field default is used.
  Extra (passthrough) keys are kept exactly as received.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class SatLocBaseModel(BaseModel):
    """Base for pysatloc record models."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @classmethod
    def _declared_keys(cls) -> set[str]:
        keys: set[str] = set()
        for name, field in cls.model_fields.items():
            keys.add(name)
            if field.alias:
                keys.add(field.alias)
        return keys

    @model_validator(mode="before")
    @classmethod
    def _drop_missing_values(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        declared = cls._declared_keys()
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if key in declared:
                if value is None:
                    continue
                if isinstance(value, float) and math.isnan(value):
                    continue
            cleaned[key] = value
        return cleaned

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, omitting unset optional fields.

        Extra keys are always included, ``None`` values too.
        """
        data = self.model_dump(by_alias=True)
        for name, field in type(self).model_fields.items():
            key = field.alias or name
            if key in data and data[key] is None:
                del data[key]
        return data
