import os
import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure project root is on sys.path
sys.path.append(str(Path(__file__).resolve().parents[1]))

# Keep test runs from writing log files or reaching an upstream API.
os.environ["LOG_TO_FILE"] = "0"
os.environ.pop("STATS_API_URL", None)

from domain.models.candidate import Candidate  # noqa: E402
from domain.models.candidature import Candidature  # noqa: E402


# Wednesday; this week runs Mon 2026-10-12 .. Sun 2026-10-18.
FIXED_NOW = datetime(2026, 10, 14, 15, 30)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_candidature():
    counter = {"n": 0}

    def _make(**fields) -> Candidature:
        counter["n"] += 1
        payload = {"id": f"C{counter['n']}", "candidateId": "P1"}
        payload.update(fields)
        return Candidature.model_validate(payload)

    return _make


@pytest.fixture
def make_candidate():
    counter = {"n": 0}

    def _make(**fields) -> Candidate:
        counter["n"] += 1
        payload = {
            "id": f"P{counter['n']}",
            "firstName": "Awa",
            "lastName": f"Diallo{counter['n']}",
            "email": f"awa{counter['n']}@example.com",
        }
        payload.update(fields)
        return Candidate.model_validate(payload)

    return _make


class DummyCandidatureRepo:
    def __init__(self, items=None, error=None):
        self.items = list(items or [])
        self.error = error

    def find_all_with_source(self):
        if self.error:
            raise self.error
        return list(self.items)


class DummyCandidateRepo:
    def __init__(self, items=None, error=None):
        self.items = list(items or [])
        self.error = error

    def find_all(self):
        if self.error:
            raise self.error
        return list(self.items)


class DummyCountRepo:
    def __init__(self, count=0, items=None, error=None):
        self._count = count
        self.items = list(items or [])
        self.error = error

    def count(self, *_):
        if self.error:
            raise self.error
        return self._count

    def find_all(self):
        return list(self.items)


@pytest.fixture
def dummy_repos():
    return {
        "candidatures": DummyCandidatureRepo,
        "candidates": DummyCandidateRepo,
        "counts": DummyCountRepo,
    }
