"""Inbound messages from the public site: contact form and company requests."""

from __future__ import annotations

from typing import Optional

from domain.models.common import DashboardModel, DocumentId, LenientDatetime, id_field


class ContactMessage(DashboardModel):
    id: DocumentId = id_field()
    created_at: LenientDatetime = None

    @classmethod
    def from_mongo(cls, doc: dict | None) -> "ContactMessage | None":
        if not doc:
            return None
        return cls.model_validate(doc)


class CompanyRequest(DashboardModel):
    """A company asking for recruitment support."""

    id: DocumentId = id_field()
    contact_person: str = ""
    email: str = ""
    phone: str = ""
    company: str = ""
    company_size: str = ""
    sector: str = ""
    position: Optional[str] = None
    location: Optional[str] = None
    urgency: str = ""
    message: str = ""
    status: str = "nouveau"
    created_at: LenientDatetime = None

    @classmethod
    def from_mongo(cls, doc: dict | None) -> "CompanyRequest | None":
        if not doc:
            return None
        return cls.model_validate(doc)
