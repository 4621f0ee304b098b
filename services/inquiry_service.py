"""Contact messages and company requests received through the public site."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from repositories.inquiry_repository import CompanyRequestRepository, ContactMessageRepository

logger = logging.getLogger(__name__)

_contact_repo = ContactMessageRepository()
_company_repo = CompanyRequestRepository()


def list_company_requests() -> List[Dict[str, Any]]:
    """Company requests, newest first; empty when the datastore is unreachable."""
    try:
        company_requests = _company_repo.find_all()
    except Exception as exc:
        logger.error("Failed to load company requests: %s", exc)
        return []
    logger.info("Loaded %d company request(s)", len(company_requests))
    return [r.to_dict() for r in company_requests]


def list_contact_messages() -> List[Dict[str, Any]]:
    try:
        messages = _contact_repo.find_all()
    except Exception as exc:
        logger.error("Failed to load contact messages: %s", exc)
        return []
    return [m.to_dict() for m in messages]


def count_contact_messages() -> int:
    try:
        return _contact_repo.count()
    except Exception as exc:
        logger.error("Failed to count contact messages: %s", exc)
        return 0
