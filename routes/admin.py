"""JSON API consumed by the admin dashboard."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from middleware.auth import login_required
from middleware.errors import InvalidQueryParameterError
from services.candidate_service import (
    CandidateQuery,
    get_candidate_with_candidatures,
    get_filter_values,
    list_all_candidatures,
    list_candidates,
)
from services.inquiry_service import (
    count_contact_messages,
    list_company_requests,
    list_contact_messages,
)
from services.statistics_service import (
    MONTHLY_PERIOD,
    RECENT_PERIOD,
    get_advanced_statistics,
    get_daily_gender_series,
    get_sync_statistics,
    get_weekly_overview,
)

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


@admin_bp.get("/statistics")
@login_required
def api_statistics():
    return jsonify(get_sync_statistics())


@admin_bp.get("/statistics/advanced")
@login_required
def api_advanced_statistics():
    return jsonify(get_advanced_statistics())


@admin_bp.get("/statistics/weekly")
@login_required
def api_weekly_statistics():
    return jsonify(get_weekly_overview())


@admin_bp.get("/statistics/daily")
@login_required
def api_daily_statistics():
    period = request.args.get("period", MONTHLY_PERIOD).strip().lower()
    if period not in (MONTHLY_PERIOD, RECENT_PERIOD):
        raise InvalidQueryParameterError(
            f"'period' must be '{MONTHLY_PERIOD}' or '{RECENT_PERIOD}'",
            details={"period": period},
        )
    return jsonify({"period": period, "data": get_daily_gender_series(period)})


@admin_bp.get("/candidates")
@login_required
def api_candidates():
    query = CandidateQuery.from_args(request.args)
    return jsonify(list_candidates(query).to_dict())


@admin_bp.get("/candidates/<candidate_id>")
@login_required
def api_candidate(candidate_id: str):
    return jsonify(get_candidate_with_candidatures(candidate_id))


@admin_bp.get("/candidatures")
@login_required
def api_candidatures():
    return jsonify(list_all_candidatures())


@admin_bp.get("/filter-values")
@login_required
def api_filter_values():
    return jsonify(get_filter_values())


@admin_bp.get("/company-requests")
@login_required
def api_company_requests():
    return jsonify(list_company_requests())


@admin_bp.get("/contact-messages")
@login_required
def api_contact_messages():
    return jsonify(list_contact_messages())


@admin_bp.get("/contact-messages/count")
@login_required
def api_contact_messages_count():
    return jsonify({"count": count_contact_messages()})
