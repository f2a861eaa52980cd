"""POST /v1/insights - borrowing, repayment and diversity summary of a loan book"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from debtpilot.api.v1.schemas import (
    FinancialHealthSchema,
    InsightsResponse,
    LoanDiversitySchema,
    PortfolioRequest,
)
from debtpilot.api.dependencies import get_request_id
from debtpilot.domain.exceptions import InvalidLoanInputError
from debtpilot.domain.portfolio import portfolio_insights
from debtpilot.infrastructure.observability.metrics import invalid_input_counter

router = APIRouter()


@router.post("/insights", response_model=InsightsResponse)
def get_insights(request_body: PortfolioRequest, request_id: str = Depends(get_request_id)):
    """
    Aggregate a borrower's active and closed loans.

    Loans carry a status; ACTIVE loans are outstanding, CLOSED loans are repaid.
    """
    try:
        insights = portfolio_insights(
            request_body.monthly_income,
            request_body.monthly_expense,
            [loan.to_domain() for loan in request_body.loans],
        )
    except InvalidLoanInputError as e:
        invalid_input_counter.inc()
        logging.warning(f"Invalid loan input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    diversity = insights.loan_diversity
    health = insights.financial_health

    return InsightsResponse(
        total_borrowed=insights.total_borrowed,
        total_repaid=insights.total_repaid,
        total_interest_paid=insights.total_interest_paid,
        average_interest_rate=insights.average_interest_rate,
        loan_diversity=LoanDiversitySchema(
            home_loans=diversity.home_loans,
            car_loans=diversity.car_loans,
            personal_loans=diversity.personal_loans,
            education_loans=diversity.education_loans,
        ),
        financial_health=FinancialHealthSchema(
            monthly_income=health.monthly_income,
            monthly_expense=health.monthly_expense,
            monthly_emi=health.monthly_emi,
            disposable_income=health.disposable_income,
        ),
    )
