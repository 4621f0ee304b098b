from __future__ import annotations

from enum import StrEnum
from typing import Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class AdminRole(StrEnum):
    SUPER_ADMIN = "super_admin"
    CONSULTANT = "consultant"


class AdminUser(BaseModel):
    """Back-office account allowed to read the dashboard."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: Optional[str] = Field(default=None, alias="_id", description="MongoDB identifier")
    username: str = Field(..., min_length=2, description="Unique login name")
    password_hash: str = Field(..., min_length=8, description="Hashed password")
    email: Optional[EmailStr] = Field(default=None, description="Email address")
    role: AdminRole = AdminRole.CONSULTANT
    is_active: bool = True

    def to_mongo(self) -> dict:
        data = self.model_dump(exclude_none=True, by_alias=True)
        if isinstance(data.get("_id"), str):
            data["_id"] = ObjectId(data["_id"])
        return data

    def to_public_dict(self) -> dict:
        return self.model_dump(exclude={"password_hash"}, mode="json")

    @classmethod
    def from_mongo(cls, doc: dict | None) -> "AdminUser | None":
        if not doc:
            return None
        if doc.get("_id") is not None:
            doc = {**doc, "_id": str(doc["_id"])}
        return cls(**doc)
