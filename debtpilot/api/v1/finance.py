"""POST /v1/finance/analyze and /v1/score/{strategy} - loan figures and debt scoring"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from debtpilot.api.v1.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    HealthScoreSchema,
    LoanAnalysis,
    PriorityResponse,
    ScoreResponse,
    StressMetricsSchema,
)
from debtpilot.api.dependencies import get_request_id
from debtpilot.domain.amortization import amortize
from debtpilot.domain.exceptions import InvalidLoanInputError, UnknownScorerError
from debtpilot.domain.health import debt_health_score
from debtpilot.domain.models import FinancialProfile, HealthScore
from debtpilot.domain.priority import loan_priority
from debtpilot.domain.scoring import get_scorer
from debtpilot.infrastructure.observability.metrics import (
    invalid_input_counter,
    record_health_score,
    record_stress_assessment,
)

router = APIRouter()


def _health_schema(health: HealthScore) -> HealthScoreSchema:
    return HealthScoreSchema(score=health.score, category=health.category, total_emi=health.total_emi)


@router.post("/finance/analyze", response_model=AnalyzeResponse)
def analyze(request_body: AnalyzeRequest, request_id: str = Depends(get_request_id)):
    """
    Analyze a borrower's loans.

    Returns:
        Per-loan EMI, total interest and end date, the debt health score,
        and the loan to pay off first (null when there are no loans)
    """
    loans = [loan.to_domain() for loan in request_body.loans]

    try:
        analyses = []
        for loan in loans:
            figures = amortize(loan)
            analyses.append(
                LoanAnalysis(
                    id=loan.id,
                    name=loan.name,
                    amount=loan.amount,
                    interest_rate=loan.interest_rate,
                    tenure_months=loan.tenure_months,
                    emi=figures.emi,
                    total_interest=figures.total_interest,
                    end_date=figures.end_date,
                )
            )

        health = debt_health_score(request_body.monthly_income, request_body.monthly_expenses, loans)
        priority = loan_priority(loans)

    except InvalidLoanInputError as e:
        invalid_input_counter.inc()
        logging.warning(f"Invalid loan input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_health_score(health.category)

    priority_response = None
    if priority is not None:
        priority_response = PriorityResponse(
            loan_id=priority.loan_id,
            loan_name=priority.loan.name,
            interest_rate=priority.loan.interest_rate,
            emi=priority.emi,
            reason=priority.reason,
            suggestion=priority.suggestion,
        )

    return AnalyzeResponse(loans=analyses, score=_health_schema(health), priority=priority_response)


@router.post("/score/{strategy}", response_model=ScoreResponse)
def score(strategy: str, request_body: AnalyzeRequest, request_id: str = Depends(get_request_id)):
    """
    Score a financial profile with a named strategy.

    Strategies:
    - debt_health:    0-100, higher is healthier, with Safe/Moderate/High Risk category
    - stress_metrics: debt ratio, SAFE/RISKY/DANGEROUS tier and 0-100 risk (higher is worse)
    """
    profile = FinancialProfile(
        monthly_income=request_body.monthly_income,
        monthly_expenses=request_body.monthly_expenses,
        loans=[loan.to_domain() for loan in request_body.loans],
    )

    try:
        scorer = get_scorer(strategy)
        result = scorer.score(profile)
    except UnknownScorerError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidLoanInputError as e:
        invalid_input_counter.inc()
        logging.warning(f"Invalid loan input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    if isinstance(result, HealthScore):
        record_health_score(result.category)
        return ScoreResponse(strategy=scorer.name, health=_health_schema(result))

    record_stress_assessment(result.stress_level.value, result.risk_score)
    return ScoreResponse(
        strategy=scorer.name,
        stress=StressMetricsSchema(
            debt_ratio=result.debt_ratio,
            stress_level=result.stress_level.value,
            risk_score=result.risk_score,
        ),
    )
