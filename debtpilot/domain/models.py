"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


@dataclass
class LoanInput:
    """A single loan as supplied by the caller"""

    amount: float
    interest_rate: float  # annual, percent
    tenure_months: int
    name: str = "Loan"
    id: Optional[str] = None
    start_date: Optional[date] = None
    status: str = "ACTIVE"  # ACTIVE | CLOSED, case-insensitive


@dataclass
class AmortizationResult:
    """Derived schedule figures for one loan"""

    emi: float
    total_interest: float
    end_date: date


@dataclass
class HealthScore:
    """Output of the debt health scorer"""

    score: int
    category: str  # "Safe" | "Moderate" | "High Risk"
    total_emi: float


class StressLevel(str, Enum):
    SAFE = "SAFE"
    RISKY = "RISKY"
    DANGEROUS = "DANGEROUS"


@dataclass
class StressMetrics:
    """Output of the debt-ratio stress scorer"""

    debt_ratio: float
    stress_level: StressLevel
    risk_score: int


@dataclass
class PriorityResult:
    """Loan recommended for payoff first. `loan` is the caller's object, not a copy."""

    loan: LoanInput
    emi: float
    reason: str
    suggestion: str

    @property
    def loan_id(self) -> Optional[str]:
        return self.loan.id


@dataclass
class WhatIf:
    """Hypothetical payment changes for a simulation"""

    extra_monthly_payment: float = 0.0
    prepayment: float = 0.0


class PayoffOutcome(str, Enum):
    PAID_OFF = "paid_off"
    NEVER_PAYS_OFF = "never_pays_off"


@dataclass
class SimulationResult:
    """Projected payoff under a what-if plan"""

    months: int
    new_end_date: date
    interest_saved: float
    new_monthly_payment: float
    outcome: PayoffOutcome = PayoffOutcome.PAID_OFF

    @property
    def pays_off(self) -> bool:
        return self.outcome is PayoffOutcome.PAID_OFF


@dataclass
class PortfolioSimulationResult:
    """Rough what-if across all loans with new income/expenses"""

    interest_saved: float
    new_debt_free_date: date
    updated_debt_score: int


@dataclass
class Suggestion:
    title: str
    message: str
    priority: str  # "low" | "medium" | "high"


@dataclass
class Insight:
    type: str  # "positive" | "info" | "warning" | "action" | "danger"
    title: str
    message: str


@dataclass
class TrendPoint:
    """EMI load for one calendar month"""

    month: str
    emi: float
    income: float
    stress: float  # EMI as percent of income


@dataclass
class LoanDiversity:
    """Active loans counted by product type"""

    home_loans: int = 0
    car_loans: int = 0
    personal_loans: int = 0
    education_loans: int = 0


@dataclass
class FinancialHealthSummary:
    monthly_income: float
    monthly_expense: float
    monthly_emi: float
    disposable_income: float


@dataclass
class PortfolioInsights:
    """Aggregates over a borrower's active and closed loans"""

    total_borrowed: float
    total_repaid: float
    total_interest_paid: float
    average_interest_rate: float
    loan_diversity: LoanDiversity
    financial_health: FinancialHealthSummary


@dataclass
class RecentLoan:
    loan: LoanInput
    emi: float


@dataclass
class DashboardSnapshot:
    """Headline figures for the dashboard view"""

    monthly_income: float
    monthly_expenses: float
    disposable_income: float
    total_emi: float
    emi_ratio: float
    stress_score: int  # 85 low, 65 moderate, 40 high stress
    recent_loans: List[RecentLoan]
    loans_count: int


@dataclass
class FinancialProfile:
    """Shared input for the scoring strategies"""

    monthly_income: float
    monthly_expenses: float
    loans: List[LoanInput] = field(default_factory=list)
