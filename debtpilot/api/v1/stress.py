"""Stress endpoints - assess and persist, history, six-month trend"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from debtpilot.api.v1.schemas import (
    InsightSchema,
    StressAssessmentResponse,
    StressHistoryItem,
    StressHistoryResponse,
    StressMetricsSchema,
    StressRequest,
    TrendPointSchema,
    TrendRequest,
    TrendResponse,
)
from debtpilot.api.dependencies import get_request_id, get_snapshot_repository
from debtpilot.config import settings
from debtpilot.domain.amortization import compute_emi
from debtpilot.domain.exceptions import InvalidLoanInputError
from debtpilot.domain.stress import calculate_stress_metrics
from debtpilot.domain.suggestions import stress_insights
from debtpilot.domain.trend import stress_trend
from debtpilot.infrastructure.database.session import get_db
from debtpilot.infrastructure.database.repositories import SnapshotRepository
from debtpilot.infrastructure.observability.logging import log_stress_assessment
from debtpilot.infrastructure.observability.metrics import invalid_input_counter, record_stress_assessment
from debtpilot.utils.rounding import round_half_up

router = APIRouter()


def resolve_total_emi(request_body: StressRequest) -> float:
    """Caller-supplied total EMI wins; otherwise sum EMIs of the submitted loans"""
    if request_body.total_emi is not None:
        return request_body.total_emi
    return round_half_up(
        sum(compute_emi(l.amount, l.interest_rate, l.tenure_months) for l in request_body.loans)
    )


@router.post("/stress/assess", response_model=StressAssessmentResponse)
def assess_stress(
    request_body: StressRequest,
    request: Request,
    db: Session = Depends(get_db),
    snapshot_repo: SnapshotRepository = Depends(get_snapshot_repository),
):
    """
    Calculate current stress metrics and record them in the user's history.

    Flow:
    1. Resolve total EMI (explicit or from loans)
    2. Calculate debt ratio, stress tier and risk score
    3. Load the two latest stored snapshots for the trend insight
    4. Persist snapshot
    5. Return metrics with insights
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        total_emi = resolve_total_emi(request_body)
        metrics = calculate_stress_metrics(request_body.monthly_income, request_body.monthly_expense, total_emi)

        # Trend compares the two most recent stored snapshots, not this assessment
        recent = snapshot_repo.get_snapshots_by_user(request_body.user_id, limit=2)
        history_scores = [s.risk_score for s in reversed(recent)]

        snapshot = snapshot_repo.create_snapshot(
            user_id=request_body.user_id,
            monthly_income=request_body.monthly_income,
            monthly_expense=request_body.monthly_expense,
            total_emi=total_emi,
            metrics=metrics,
        )
        db.commit()

        insights = stress_insights(
            request_body.monthly_income,
            [loan.to_domain() for loan in request_body.loans],
            metrics,
            total_emi,
            history_scores,
        )

        duration_ms = (time.time() - start_time) * 1000
        record_stress_assessment(metrics.stress_level.value, metrics.risk_score)
        log_stress_assessment(
            request_id, request_body.user_id, metrics.stress_level.value, metrics.risk_score, duration_ms
        )

        return StressAssessmentResponse(
            snapshot_id=str(snapshot.id),
            metrics=StressMetricsSchema(
                debt_ratio=metrics.debt_ratio,
                stress_level=metrics.stress_level.value,
                risk_score=metrics.risk_score,
            ),
            total_emi=total_emi,
            disposable_income=max(request_body.monthly_income - request_body.monthly_expense - total_emi, 0),
            insights=[InsightSchema(type=i.type, title=i.title, message=i.message) for i in insights],
        )

    except InvalidLoanInputError as e:
        invalid_input_counter.inc()
        db.rollback()
        logging.warning(f"Invalid loan input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/stress/history", response_model=StressHistoryResponse)
def get_stress_history(
    user_id: str = Query(..., description="User identifier"),
    snapshot_repo: SnapshotRepository = Depends(get_snapshot_repository),
):
    """
    Retrieve recent stress snapshots for a user.

    Returns:
        Snapshots, newest first
    """
    snapshots = snapshot_repo.get_snapshots_by_user(user_id, limit=settings.stress_history_limit)

    items = [
        StressHistoryItem(
            snapshot_id=str(s.id),
            debt_ratio=s.debt_ratio,
            stress_level=s.stress_level,
            risk_score=s.risk_score,
            total_emi=s.total_emi,
            monthly_income=s.monthly_income,
            created_at=s.created_at.isoformat(),
        )
        for s in snapshots
    ]

    return StressHistoryResponse(user_id=user_id, snapshots=items)


@router.post("/stress/trend", response_model=TrendResponse)
def get_stress_trend(request_body: TrendRequest, request_id: str = Depends(get_request_id)):
    """EMI as a share of income for each of the last few months, oldest first"""
    try:
        points = stress_trend(
            [loan.to_domain() for loan in request_body.loans],
            request_body.monthly_income,
            months=settings.trend_months,
        )
    except InvalidLoanInputError as e:
        invalid_input_counter.inc()
        logging.warning(f"Invalid loan input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return TrendResponse(
        points=[TrendPointSchema(month=p.month, emi=p.emi, income=p.income, stress=p.stress) for p in points]
    )
