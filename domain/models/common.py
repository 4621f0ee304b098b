"""Shared field types and base configuration for dashboard models."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from utils.dates import coerce_datetime


def _id_to_str(value: object) -> Optional[str]:
    if value is None:
        return None
    return str(value)


# Unparseable dates become None instead of failing validation.
LenientDatetime = Annotated[Optional[datetime], BeforeValidator(coerce_datetime)]
DocumentId = Annotated[Optional[str], BeforeValidator(_id_to_str)]


def id_field():
    return Field(default=None, validation_alias=AliasChoices("id", "_id"))


class DashboardModel(BaseModel):
    """Accepts camelCase (API) and snake_case (Mongo) keys; dumps camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
    )

    def to_dict(self) -> dict:
        """JSON-safe camelCase representation."""
        return self.model_dump(mode="json", by_alias=True)
