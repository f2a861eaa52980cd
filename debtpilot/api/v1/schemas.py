"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field, model_validator
from datetime import date
from typing import Any, List, Optional

from debtpilot.domain.models import LoanInput, WhatIf

# Upper bounds keep EMI math inside float and Decimal range
MAX_AMOUNT = 1e12
MAX_INTEREST_RATE = 100
MAX_TENURE_MONTHS = 1200


class LoanSchema(BaseModel):
    """Loan as submitted by clients"""

    id: Optional[str] = None
    name: str = "Loan"
    amount: float = Field(..., ge=0, le=MAX_AMOUNT, description="Outstanding principal")
    interest_rate: float = Field(..., ge=0, le=MAX_INTEREST_RATE, description="Annual interest rate in percent")
    tenure_months: int = Field(..., ge=1, le=MAX_TENURE_MONTHS, description="Loan duration in months")
    start_date: Optional[date] = None
    status: str = Field("ACTIVE", description="ACTIVE or CLOSED")

    @model_validator(mode="before")
    @classmethod
    def accept_legacy_fields(cls, data: Any) -> Any:
        """Older clients send `duration` for tenure and `type` for name"""
        if isinstance(data, dict):
            data = dict(data)
            if data.get("tenure_months") is None and data.get("duration") is not None:
                data["tenure_months"] = data["duration"]
            if not data.get("name"):
                data["name"] = data.get("type") or "Loan"
        return data

    def to_domain(self) -> LoanInput:
        return LoanInput(
            id=self.id,
            name=self.name,
            amount=self.amount,
            interest_rate=self.interest_rate,
            tenure_months=self.tenure_months,
            start_date=self.start_date,
            status=self.status,
        )


class AnalyzeRequest(BaseModel):
    """Request body for POST /v1/finance/analyze"""

    monthly_income: float = Field(..., ge=0, le=MAX_AMOUNT)
    monthly_expenses: float = Field(..., ge=0, le=MAX_AMOUNT)
    loans: List[LoanSchema] = Field(default_factory=list)


class LoanAnalysis(BaseModel):
    """Loan with derived schedule figures"""

    id: Optional[str] = None
    name: str
    amount: float
    interest_rate: float
    tenure_months: int
    emi: float
    total_interest: float
    end_date: date


class HealthScoreSchema(BaseModel):
    score: int
    category: str
    total_emi: float


class PriorityResponse(BaseModel):
    """Loan recommended for payoff first"""

    loan_id: Optional[str] = None
    loan_name: str
    interest_rate: float
    emi: float
    reason: str
    suggestion: str


class AnalyzeResponse(BaseModel):
    """Response for POST /v1/finance/analyze"""

    loans: List[LoanAnalysis]
    score: HealthScoreSchema
    priority: Optional[PriorityResponse] = None


class StressMetricsSchema(BaseModel):
    debt_ratio: float
    stress_level: str
    risk_score: int


class ScoreResponse(BaseModel):
    """Response for POST /v1/score/{strategy}; exactly one result is set"""

    strategy: str
    health: Optional[HealthScoreSchema] = None
    stress: Optional[StressMetricsSchema] = None


class WhatIfSchema(BaseModel):
    extra_monthly_payment: float = Field(0.0, ge=0, le=MAX_AMOUNT)
    prepayment: float = Field(0.0, ge=0, le=MAX_AMOUNT)

    def to_domain(self) -> WhatIf:
        return WhatIf(extra_monthly_payment=self.extra_monthly_payment, prepayment=self.prepayment)


class SimulationRequest(BaseModel):
    """Request body for POST /v1/loans/simulate"""

    loan: LoanSchema
    what_if: WhatIfSchema = Field(default_factory=WhatIfSchema)


class SimulationResponse(BaseModel):
    """Response for POST /v1/loans/simulate. months is 1200 when pays_off is false."""

    months: int
    new_end_date: date
    interest_saved: float
    new_monthly_payment: float
    outcome: str
    pays_off: bool


class PortfolioSimulationRequest(BaseModel):
    """Request body for POST /v1/portfolio/simulate"""

    loans: List[LoanSchema] = Field(default_factory=list)
    new_income: float = Field(..., ge=0, le=MAX_AMOUNT)
    new_expenses: float = Field(..., ge=0, le=MAX_AMOUNT)
    emi_adjustment: float = Field(0.0, ge=-MAX_AMOUNT, le=MAX_AMOUNT)


class PortfolioSimulationResponse(BaseModel):
    interest_saved: float
    new_debt_free_date: date
    updated_debt_score: int


class StressRequest(BaseModel):
    """Request body for stress and suggestion endpoints"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    monthly_income: float = Field(..., ge=0, le=MAX_AMOUNT)
    monthly_expense: float = Field(..., ge=0, le=MAX_AMOUNT)
    loans: List[LoanSchema] = Field(default_factory=list)
    total_emi: Optional[float] = Field(None, ge=0, le=MAX_AMOUNT, description="Overrides EMI computed from loans")


class InsightSchema(BaseModel):
    type: str
    title: str
    message: str


class StressAssessmentResponse(BaseModel):
    """Response for POST /v1/stress/assess"""

    snapshot_id: str
    metrics: StressMetricsSchema
    total_emi: float
    disposable_income: float
    insights: List[InsightSchema]


class StressHistoryItem(BaseModel):
    snapshot_id: str
    debt_ratio: float
    stress_level: str
    risk_score: int
    total_emi: float
    monthly_income: float
    created_at: str


class StressHistoryResponse(BaseModel):
    """Response for GET /v1/stress/history"""

    user_id: str
    snapshots: List[StressHistoryItem]


class TrendRequest(BaseModel):
    """Request body for POST /v1/stress/trend"""

    monthly_income: float = Field(..., ge=0, le=MAX_AMOUNT)
    loans: List[LoanSchema] = Field(default_factory=list)


class TrendPointSchema(BaseModel):
    month: str
    emi: float
    income: float
    stress: float


class TrendResponse(BaseModel):
    points: List[TrendPointSchema]


class SuggestionSchema(BaseModel):
    title: str
    message: str
    priority: str


class SuggestionsResponse(BaseModel):
    """Response for POST /v1/suggestions"""

    metrics: StressMetricsSchema
    suggestions: List[SuggestionSchema]
    disposable_income: float


class PortfolioRequest(BaseModel):
    """Request body for POST /v1/insights and POST /v1/dashboard"""

    monthly_income: float = Field(..., ge=0, le=MAX_AMOUNT)
    monthly_expense: float = Field(..., ge=0, le=MAX_AMOUNT)
    loans: List[LoanSchema] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def accept_plural_expenses(cls, data: Any) -> Any:
        """Dashboard clients send `monthly_expenses`"""
        if isinstance(data, dict) and data.get("monthly_expense") is None and "monthly_expenses" in data:
            data = dict(data)
            data["monthly_expense"] = data["monthly_expenses"]
        return data


class LoanDiversitySchema(BaseModel):
    home_loans: int
    car_loans: int
    personal_loans: int
    education_loans: int


class FinancialHealthSchema(BaseModel):
    monthly_income: float
    monthly_expense: float
    monthly_emi: float
    disposable_income: float


class InsightsResponse(BaseModel):
    """Response for POST /v1/insights. average_interest_rate is rounded to 2 decimals."""

    total_borrowed: float
    total_repaid: float
    total_interest_paid: float
    average_interest_rate: float
    loan_diversity: LoanDiversitySchema
    financial_health: FinancialHealthSchema


class RecentLoanSchema(BaseModel):
    id: Optional[str] = None
    name: str
    amount: float
    interest_rate: float
    tenure_months: int
    emi: float
    status: str


class DashboardResponse(BaseModel):
    """Response for POST /v1/dashboard"""

    monthly_income: float
    monthly_expenses: float
    disposable_income: float
    total_emi: float
    emi_ratio: float
    stress_score: int
    recent_loans: List[RecentLoanSchema]
    loans_count: int
