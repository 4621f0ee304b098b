"""Normalization of free-form categorical fields into dashboard buckets."""

from __future__ import annotations

import re
from typing import Optional

MISSION_TYPES: tuple[str, ...] = ("CDI", "CDD", "FREELANCE", "STAGE")
OTHER_MISSION_TYPE = "AUTRE"

DEFAULT_STATUS = "en_attente"
UNSPECIFIED_LOCATION = "Non spécifié"

FEMALE = "femme"
MALE = "homme"

_GENDER_ALIASES = {
    "femme": FEMALE,
    "female": FEMALE,
    "f": FEMALE,
    "homme": MALE,
    "male": MALE,
    "m": MALE,
    "masculin": MALE,
}


def _normalize(s: Optional[str]) -> str:
    """Normalize whitespace and coerce None to an empty string."""

    return re.sub(r"\s+", " ", (s or "").strip())


def _as_str_or_empty(obj: object) -> str:
    return str(obj).strip() if obj is not None else ""


def normalize_mission_type(value: object) -> str:
    """Map a raw mission type to CDI/CDD/FREELANCE/STAGE, else ``AUTRE``."""

    normalized = _as_str_or_empty(value).upper()
    if normalized in MISSION_TYPES:
        return normalized
    return OTHER_MISSION_TYPE


def normalize_gender(value: object) -> Optional[str]:
    """Return ``femme`` / ``homme`` for recognised spellings, else ``None``."""

    return _GENDER_ALIASES.get(_as_str_or_empty(value).lower())


def normalize_status(value: object) -> str:
    return _normalize(_as_str_or_empty(value)).lower() or DEFAULT_STATUS


def normalize_location(value: object) -> str:
    return _normalize(_as_str_or_empty(value)) or UNSPECIFIED_LOCATION


__all__ = [
    "DEFAULT_STATUS",
    "FEMALE",
    "MALE",
    "MISSION_TYPES",
    "OTHER_MISSION_TYPE",
    "UNSPECIFIED_LOCATION",
    "normalize_gender",
    "normalize_location",
    "normalize_mission_type",
    "normalize_status",
]
