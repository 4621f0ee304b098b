from __future__ import annotations

from enum import StrEnum
from typing import List, Optional

from pydantic import Field, field_validator

from domain.models.common import DashboardModel, DocumentId, LenientDatetime, id_field


class ApplicationSource(StrEnum):
    PORTAL_REGISTRATION = "portal_registration"
    QUICK_APPLICATION = "quick_application"
    GOOGLE_OAUTH = "google_oauth"
    FACEBOOK_OAUTH = "facebook_oauth"
    LINKEDIN_OAUTH = "linkedin_oauth"


class CrmSyncStatus(StrEnum):
    PENDING = "pending"
    SYNCED = "synced"
    FAILED = "failed"


class CvHistoryEntry(DashboardModel):
    """One uploaded CV and its CRM propagation state."""

    id: DocumentId = id_field()
    file_name: str = ""
    crm_sync_status: CrmSyncStatus = CrmSyncStatus.PENDING
    uploaded_at: LenientDatetime = None

    @field_validator("crm_sync_status", mode="before")
    @classmethod
    def _unknown_status_is_pending(cls, v):
        text = str(v or "").strip().lower()
        return text if text in {s.value for s in CrmSyncStatus} else CrmSyncStatus.PENDING


class Candidate(DashboardModel):
    """Registrant profile with its CV history."""

    id: DocumentId = id_field()
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    source: str = ApplicationSource.PORTAL_REGISTRATION.value
    created_at: LenientDatetime = None

    job_title: Optional[str] = None
    nationality: Optional[str] = None
    gender: Optional[str] = None
    biography: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    marital_status: Optional[str] = None
    education_level: Optional[str] = None
    expertise_level: Optional[str] = None
    professional_experience: Optional[str] = None
    profile_photo_url: Optional[str] = None

    cv_histories: List[CvHistoryEntry] = Field(default_factory=list)

    @field_validator(
        "email", "phone", "gender", "country", "city", "education_level", mode="before"
    )
    @classmethod
    def empty_to_none(cls, v):
        if v is None:
            return None
        s = str(v).strip()
        return s or None

    @field_validator("cv_histories", mode="before")
    @classmethod
    def _none_to_list(cls, v):
        return v or []

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def has_cv(self) -> bool:
        return bool(self.cv_histories)

    @classmethod
    def from_mongo(cls, doc: dict | None) -> "Candidate | None":
        if not doc:
            return None
        return cls.model_validate(doc)
