"""Prometheus metrics for monitoring stress levels, health scores and simulations"""

from prometheus_client import Counter, Histogram

# Stress metrics
stress_assessment_counter = Counter(
    "debtpilot_stress_assessment_total",
    "Total stress assessments made",
    ["level"],  # SAFE | RISKY | DANGEROUS
)

risk_score_histogram = Histogram(
    "debtpilot_risk_score",
    "Distribution of stress risk scores",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

# Health score metrics
health_category_counter = Counter(
    "debtpilot_health_category_total",
    "Debt health scores issued by category",
    ["category"],  # Safe | Moderate | High Risk
)

# Simulation metrics
simulation_counter = Counter(
    "debtpilot_simulation_total",
    "What-if simulations run",
    ["kind", "outcome"],  # loan: paid_off | never_pays_off, portfolio: estimated
)

# Engine input errors
invalid_input_counter = Counter(
    "debtpilot_invalid_input_total",
    "Requests rejected by the finance engine",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_stress_assessment(stress_level: str, risk_score: int) -> None:
    """Record stress tier and risk score distribution"""
    stress_assessment_counter.labels(level=stress_level).inc()
    risk_score_histogram.observe(risk_score)


def record_health_score(category: str) -> None:
    """Record health category for distribution analysis"""
    health_category_counter.labels(category=category).inc()


def record_simulation(kind: str, outcome: str) -> None:
    """Record simulation outcome (loans that never pay off are worth alerting on)"""
    simulation_counter.labels(kind=kind, outcome=outcome).inc()
