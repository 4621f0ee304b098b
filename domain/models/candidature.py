from __future__ import annotations

from enum import StrEnum
from typing import Optional

from pydantic import field_validator

from domain.models.common import DashboardModel, DocumentId, LenientDatetime, id_field


class CandidatureStatus(StrEnum):
    EN_ATTENTE = "en_attente"
    EN_COURS = "en_cours"
    ACCEPTE = "accepte"
    REFUSE = "refuse"
    ARCHIVE = "archive"


CLOSED_STATUSES = frozenset({CandidatureStatus.ACCEPTE, CandidatureStatus.REFUSE})


class Candidature(DashboardModel):
    """A job application as served to the admin dashboard."""

    id: DocumentId = id_field()
    candidate_id: DocumentId = None
    date_postulation: LenientDatetime = None
    candidate_source: str = "unknown"
    candidate_gender: Optional[str] = None
    type_de_mission: Optional[str] = None
    sent_to_crm: bool = False
    statut: Optional[str] = None
    updated_at: LenientDatetime = None
    categorie_id: DocumentId = None

    @field_validator("candidate_source", mode="before")
    @classmethod
    def _default_source(cls, v):
        return v or "unknown"

    @field_validator("sent_to_crm", mode="before")
    @classmethod
    def _coerce_flag(cls, v):
        return bool(v)

    @classmethod
    def from_mongo(cls, doc: dict | None) -> "Candidature | None":
        if not doc:
            return None
        return cls.model_validate(doc)
