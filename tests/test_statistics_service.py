from datetime import datetime

import pytest

import services.statistics_service as svc
from middleware.errors import RemoteStatisticsError


def test_three_candidatures_today_by_mission_type(now, make_candidature):
    candidatures = [
        make_candidature(datePostulation="2026-10-14T09:00:00", typeDeMission="CDI"),
        make_candidature(datePostulation="2026-10-14T10:00:00", typeDeMission="cdi"),
        make_candidature(datePostulation="2026-10-14T11:00:00", typeDeMission="stage"),
    ]

    stats = svc.compute_advanced_statistics(candidatures, [], now=now).to_dict()

    assert stats["byCategory"] == [
        {"name": "CDI", "count": 2, "percentage": 66.67},
        {"name": "STAGE", "count": 1, "percentage": 33.33},
    ]
    assert stats["global"]["candidaturesByPeriod"] == {"today": 3, "thisWeek": 3, "thisMonth": 3}
    assert stats["activity"]["recentCandidatures"] == 3


def test_period_counts(now, make_candidature):
    candidatures = [
        make_candidature(datePostulation="2026-10-14T00:00:00"),  # today
        make_candidature(datePostulation="2026-10-07T23:00:00"),  # 7 days back
        make_candidature(datePostulation="2026-10-06T12:00:00"),  # within a month
        make_candidature(datePostulation="2026-09-14T08:00:00"),  # month boundary
        make_candidature(datePostulation="2026-09-13T08:00:00"),  # older
        make_candidature(datePostulation=None),
    ]

    period = svc.compute_advanced_statistics(candidatures, [], now=now).global_.candidatures_by_period

    assert (period.today, period.this_week, period.this_month) == (1, 2, 4)


def test_unparseable_dates_give_zero_periods(now, make_candidature):
    candidatures = [make_candidature(datePostulation="n/a") for _ in range(4)]

    stats = svc.compute_advanced_statistics(candidatures, [], now=now).to_dict()

    assert stats["global"]["candidaturesByPeriod"] == {"today": 0, "thisWeek": 0, "thisMonth": 0}
    assert sum(item["count"] for item in stats["activity"]["candidaturesByHour"]) == 0
    assert stats["byCategory"] == [{"name": "AUTRE", "count": 4, "percentage": 100.0}]


@pytest.mark.parametrize("size", [0, 1, 7])
def test_hourly_activity_always_has_24_hours(now, make_candidature, size):
    candidatures = [
        make_candidature(datePostulation=datetime(2026, 10, 14, hour % 24, 5)) for hour in range(size)
    ]

    hours = svc.compute_advanced_statistics(candidatures, [], now=now).to_dict()["activity"][
        "candidaturesByHour"
    ]

    assert [item["hour"] for item in hours] == list(range(24))
    assert sum(item["count"] for item in hours) == size


def test_empty_inputs_give_all_zero_view(now):
    stats = svc.compute_advanced_statistics([], [], now=now).to_dict()

    assert stats["global"] == {
        "totalCandidates": 0,
        "totalCategories": 4,
        "candidaturesByPeriod": {"today": 0, "thisWeek": 0, "thisMonth": 0},
    }
    assert stats["byCategory"] == []
    assert stats["tracking"] == {"byStatus": [], "avgProcessingTimeDays": 0.0}
    assert stats["location"] == []
    assert stats["activity"]["newVsOldCandidates"] == {"new": 0, "old": 0}


def test_new_vs_old_candidates_and_location(now, make_candidate):
    candidates = [
        make_candidate(createdAt="2026-10-01", country="Sénégal"),
        make_candidate(createdAt="2026-04-14", country="France"),
        make_candidate(createdAt="2026-04-13", country="Sénégal"),
        make_candidate(createdAt=None),
    ]

    stats = svc.compute_advanced_statistics([], candidates, now=now).to_dict()

    assert stats["global"]["totalCandidates"] == 4
    assert stats["activity"]["newVsOldCandidates"] == {"new": 2, "old": 2}
    assert stats["location"] == [
        {"location": "Sénégal", "count": 2},
        {"location": "France", "count": 1},
        {"location": "Non spécifié", "count": 1},
    ]


def test_status_breakdown_and_processing_time(now, make_candidature):
    candidatures = [
        make_candidature(datePostulation="2026-10-01T10:00:00", statut="accepte", updatedAt="2026-10-03T10:00:00"),
        make_candidature(datePostulation="2026-10-01T10:00:00", statut="refuse", updatedAt="2026-10-02T22:00:00"),
        make_candidature(datePostulation="2026-10-01T10:00:00", statut="en_cours", updatedAt="2026-10-09T10:00:00"),
        make_candidature(datePostulation="2026-10-01T10:00:00"),
    ]

    tracking = svc.compute_advanced_statistics(candidatures, [], now=now).to_dict()["tracking"]

    assert tracking["byStatus"] == [
        {"status": "accepte", "count": 1, "percentage": 25.0},
        {"status": "refuse", "count": 1, "percentage": 25.0},
        {"status": "en_cours", "count": 1, "percentage": 25.0},
        {"status": "en_attente", "count": 1, "percentage": 25.0},
    ]
    assert tracking["avgProcessingTimeDays"] == 1.75


def test_orchestrator_is_idempotent(now, make_candidature, make_candidate):
    candidatures = [
        make_candidature(datePostulation="2026-10-13T08:00:00", typeDeMission="CDD"),
        make_candidature(datePostulation="bad", typeDeMission=None),
    ]
    candidates = [make_candidate(createdAt="2025-01-01", country="Mali")]

    first = svc.compute_advanced_statistics(candidatures, candidates, now=now).to_dict()
    second = svc.compute_advanced_statistics(candidatures, candidates, now=now).to_dict()

    assert first == second


def test_sync_statistics(make_candidate):
    candidates = [
        make_candidate(cvHistories=[
            {"id": "cv1", "fileName": "a.pdf", "crmSyncStatus": "synced"},
            {"id": "cv2", "fileName": "b.pdf", "crmSyncStatus": "failed"},
        ]),
        make_candidate(cvHistories=[{"id": "cv3", "fileName": "c.pdf", "crmSyncStatus": "synced"}]),
        make_candidate(cvHistories=[{"id": "cv4", "fileName": "d.pdf"}]),
        make_candidate(),
    ]

    assert svc.compute_sync_statistics(candidates).to_dict() == {
        "totalCandidates": 4,
        "totalCvs": 4,
        "syncedCvs": 2,
        "failedSyncs": 1,
        "pendingSyncs": 1,
        "successRate": 50.0,
    }


def test_sync_statistics_without_cvs():
    assert svc.compute_sync_statistics([]).success_rate == 0


def test_count_normal_applications(make_candidature):
    candidatures = [
        make_candidature(candidateSource="portal_registration"),
        make_candidature(candidateSource="quick_application"),
        make_candidature(candidateSource=None),
        make_candidature(candidateSource="portal_registration"),
    ]
    assert svc.count_normal_applications(candidatures) == 2


def test_daily_gender_series_monthly(now, make_candidature):
    candidatures = [
        make_candidature(datePostulation="2026-10-01T09:00:00", candidateGender="Femme"),
        make_candidature(datePostulation="2026-10-01T10:00:00", candidateGender="m"),
        make_candidature(datePostulation="2026-10-01T11:00:00", candidateGender=None),
        make_candidature(datePostulation="2026-09-30T11:00:00", candidateGender="female"),
        make_candidature(datePostulation="garbage", candidateGender="female"),
    ]

    series = svc.daily_gender_series(candidatures, "mensuelle", now)

    assert len(series) == 31
    assert series[0] == {"name": "1", "date": "2026-10-01", "Femme": 1, "Homme": 1, "total": 3}
    assert series[-1]["date"] == "2026-10-31"
    assert sum(point["total"] for point in series) == 3


def test_daily_gender_series_recent_days(now, make_candidature):
    candidatures = [
        make_candidature(datePostulation="2026-10-05T09:00:00", candidateGender="homme"),
        make_candidature(datePostulation="2026-10-04T09:00:00", candidateGender="homme"),
        make_candidature(datePostulation="2026-10-14T23:00:00", candidateGender="F"),
    ]

    series = svc.daily_gender_series(candidatures, "hebdomadaire", now)

    assert [point["date"] for point in series][0] == "2026-10-05"
    assert [point["date"] for point in series][-1] == "2026-10-14"
    assert len(series) == 10
    assert series[0]["Homme"] == 1
    assert series[-1]["Femme"] == 1


# ---------------------------------------------------------------------------
# Remote-or-local combinator
# ---------------------------------------------------------------------------

class DummyRemote:
    def __init__(self, payload=None, error=None, enabled=True):
        self.payload = payload
        self.error = error
        self.enabled = enabled
        self.calls = 0

    def fetch_advanced_statistics(self):
        self.calls += 1
        if self.error:
            raise self.error
        return self.payload


@pytest.fixture
def local_data(monkeypatch, dummy_repos, make_candidature, make_candidate):
    candidatures = [make_candidature(datePostulation="2026-10-14T09:00:00", typeDeMission="CDI")]
    candidates = [make_candidate(createdAt="2026-10-01")]
    monkeypatch.setattr(svc, "_candidature_repo", dummy_repos["candidatures"](candidatures))
    monkeypatch.setattr(svc, "_candidate_repo", dummy_repos["candidates"](candidates))
    monkeypatch.setattr(svc, "_category_repo", dummy_repos["counts"](6))
    monkeypatch.setattr(svc, "_contact_repo", dummy_repos["counts"](items=[]))


REMOTE_PAYLOAD = {
    "global": {
        "totalCandidates": 120,
        "totalCategories": 5,
        "candidaturesByPeriod": {"today": 2, "thisWeek": 9, "thisMonth": 40},
    },
    "byCategory": [{"name": "Informatique", "count": 40, "percentage": 100}],
    "activity": {
        "recentCandidatures": 9,
        "candidaturesByHour": [{"hour": h, "count": 0} for h in range(24)],
        "newVsOldCandidates": {"new": 70, "old": 50},
    },
    "tracking": {"byStatus": [], "avgProcessingTimeDays": 3.5},
    "location": [{"location": "France", "count": 120}],
}


def test_remote_payload_is_preferred(monkeypatch, local_data, now):
    remote = DummyRemote(payload=REMOTE_PAYLOAD)
    monkeypatch.setattr(svc, "_remote_client", remote)

    result = svc.get_advanced_statistics(now)

    assert result["source"] == "remote"
    assert result["data"]["global"]["totalCandidates"] == 120
    assert result["data"]["tracking"]["avgProcessingTimeDays"] == 3.5
    assert remote.calls == 1


@pytest.mark.parametrize(
    "remote",
    [
        DummyRemote(error=RemoteStatisticsError("boom")),
        DummyRemote(payload={}),
        DummyRemote(payload=None, enabled=False),
        DummyRemote(payload={"message": "not statistics"}),
    ],
    ids=["error", "empty", "disabled", "invalid"],
)
def test_falls_back_to_local_computation(monkeypatch, local_data, now, remote):
    monkeypatch.setattr(svc, "_remote_client", remote)

    result = svc.get_advanced_statistics(now)

    assert result["source"] == "local"
    assert result["data"]["global"]["totalCandidates"] == 1
    assert result["data"]["global"]["totalCategories"] == 6
    assert result["data"]["byCategory"] == [{"name": "CDI", "count": 1, "percentage": 100.0}]
    assert remote.calls == 1


def test_datastore_failure_degrades_to_zero_view(monkeypatch, dummy_repos, now):
    monkeypatch.setattr(svc, "_remote_client", DummyRemote(enabled=False))
    monkeypatch.setattr(svc, "_candidature_repo", dummy_repos["candidatures"](error=RuntimeError("down")))
    monkeypatch.setattr(svc, "_candidate_repo", dummy_repos["candidates"](error=RuntimeError("down")))
    monkeypatch.setattr(svc, "_category_repo", dummy_repos["counts"](error=RuntimeError("down")))

    result = svc.get_advanced_statistics(now)

    assert result["source"] == "local"
    assert result["data"]["global"]["totalCandidates"] == 0
    assert result["data"]["global"]["totalCategories"] == 4
    assert len(result["data"]["activity"]["candidaturesByHour"]) == 24


def test_weekly_overview(monkeypatch, local_data, now):
    overview = svc.get_weekly_overview(now)

    assert overview["candidatures"] == {
        "thisWeek": 1,
        "lastWeek": 0,
        "variation": "+100.0",
        "isPositive": True,
    }
    assert overview["contactMessages"]["variation"] == "0.0"
    assert overview["normalApplications"] == 0


def test_empty_categories_collection_reports_zero(monkeypatch, local_data, dummy_repos, now):
    monkeypatch.setattr(svc, "_remote_client", DummyRemote(enabled=False))
    monkeypatch.setattr(svc, "_category_repo", dummy_repos["counts"](0))

    result = svc.get_advanced_statistics(now)

    assert result["data"]["global"]["totalCategories"] == 0
