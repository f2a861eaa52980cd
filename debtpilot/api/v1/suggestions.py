"""POST /v1/suggestions - actionable suggestions from stress metrics"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from debtpilot.api.v1.schemas import StressMetricsSchema, StressRequest, SuggestionSchema, SuggestionsResponse
from debtpilot.api.v1.stress import resolve_total_emi
from debtpilot.api.dependencies import get_request_id
from debtpilot.domain.exceptions import InvalidLoanInputError
from debtpilot.domain.stress import calculate_stress_metrics
from debtpilot.domain.suggestions import build_suggestions
from debtpilot.infrastructure.observability.metrics import invalid_input_counter

router = APIRouter()


@router.post("/suggestions", response_model=SuggestionsResponse)
def get_suggestions(request_body: StressRequest, request_id: str = Depends(get_request_id)):
    """
    Generate suggestions for a borrower's current financial profile.

    Stress metrics are computed but not recorded in history.
    """
    try:
        total_emi = resolve_total_emi(request_body)
    except InvalidLoanInputError as e:
        invalid_input_counter.inc()
        logging.warning(f"Invalid loan input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    metrics = calculate_stress_metrics(request_body.monthly_income, request_body.monthly_expense, total_emi)
    suggestions = build_suggestions(
        request_body.monthly_income,
        request_body.monthly_expense,
        [loan.to_domain() for loan in request_body.loans],
        metrics,
        total_emi,
    )

    disposable_income = request_body.monthly_income - request_body.monthly_expense - total_emi

    return SuggestionsResponse(
        metrics=StressMetricsSchema(
            debt_ratio=metrics.debt_ratio,
            stress_level=metrics.stress_level.value,
            risk_score=metrics.risk_score,
        ),
        suggestions=[SuggestionSchema(title=s.title, message=s.message, priority=s.priority) for s in suggestions],
        disposable_income=max(disposable_income, 0),
    )
