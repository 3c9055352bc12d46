"""Typed records returned by the patients endpoint.

The endpoint returns a JSON array of loosely structured objects.  Each one
is validated into a :class:`Record` at the fetch boundary so downstream code
never has to deal with missing keys: absent or null categorical values are
replaced with :data:`UNDEFINED_LABEL` and numbers are stringified.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

UNDEFINED_LABEL = "undefined"


class Record(BaseModel):
    """One patient observation."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    disease: str = Field(
        default=UNDEFINED_LABEL, validation_alias=AliasChoices("Disease", "disease")
    )
    gender: str = Field(
        default=UNDEFINED_LABEL, validation_alias=AliasChoices("Gender", "gender")
    )
    latitude: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("Latitude", "latitude", "lat")
    )
    longitude: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("Longitude", "longitude", "lon", "lng")
    )

    @field_validator("disease", "gender", mode="before")
    @classmethod
    def _categorical(cls, value: Any) -> str:
        if value is None:
            return UNDEFINED_LABEL
        return str(value)

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coordinate(cls, value: Any) -> Optional[float]:
        if value is None or value == "":
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def category(self, field: str) -> str:
        """Return the categorical value stored under ``field``.

        Only declared fields and pass-through extras are looked up; anything
        else falls into the undefined bucket.
        """
        if field in type(self).model_fields:
            value = getattr(self, field)
        else:
            value = (self.model_extra or {}).get(field)
        return UNDEFINED_LABEL if value is None else str(value)


RecordSet = List[Record]
