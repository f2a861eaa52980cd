"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def loans_payload() -> list[dict]:
    return [
        {"id": "car", "name": "Car Loan", "amount": 600000, "interest_rate": 9.5, "tenure_months": 60,
         "start_date": "2025-03-05"},
        {"id": "card", "type": "Personal Loan", "amount": 150000, "interest_rate": 14, "duration": 24},
    ]


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Request-ID" in response.headers


def test_request_id_is_propagated(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "debtpilot_stress_assessment_total" in response.text


def test_analyze_endpoint(client: TestClient, loans_payload: list[dict]):
    """Test POST /v1/finance/analyze"""
    response = client.post(
        "/v1/finance/analyze",
        json={"monthly_income": 150000, "monthly_expenses": 60000, "loans": loans_payload},
    )

    assert response.status_code == 200
    data = response.json()
    assert len(data["loans"]) == 2
    car, card = data["loans"]
    assert car["end_date"] == "2030-03-05"
    assert car["emi"] > 600000 / 60
    assert card["name"] == "Personal Loan"  # name falls back to type
    assert card["tenure_months"] == 24  # legacy duration field
    assert data["score"]["category"] in {"Safe", "Moderate", "High Risk"}
    assert data["score"]["total_emi"] == pytest.approx(car["emi"] + card["emi"], abs=0.01)
    assert data["priority"]["loan_id"] == "card"
    assert data["priority"]["interest_rate"] == 14


def test_analyze_without_loans_has_no_priority(client: TestClient):
    response = client.post(
        "/v1/finance/analyze",
        json={"monthly_income": 50000, "monthly_expenses": 20000, "loans": []},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["priority"] is None
    assert data["score"]["score"] == 100


def test_analyze_rejects_invalid_loan(client: TestClient):
    """Negative amounts and zero tenure fail request validation"""
    response = client.post(
        "/v1/finance/analyze",
        json={
            "monthly_income": 50000,
            "monthly_expenses": 20000,
            "loans": [{"amount": -5, "interest_rate": 10, "tenure_months": 0}],
        },
    )
    assert response.status_code == 422


@pytest.mark.parametrize(
    "loan",
    [
        {"amount": 100000, "interest_rate": 12, "tenure_months": 100000},
        {"amount": 1e27, "interest_rate": 0, "tenure_months": 1},
        {"amount": 100000, "interest_rate": 1e6, "tenure_months": 12},
    ],
)
def test_analyze_rejects_out_of_range_loan(client: TestClient, loan: dict):
    response = client.post(
        "/v1/finance/analyze",
        json={"monthly_income": 50000, "monthly_expenses": 20000, "loans": [loan]},
    )
    assert response.status_code == 422


def test_analyze_accepts_largest_allowed_loan(client: TestClient):
    """Loans at the upper bounds still produce finite figures"""
    response = client.post(
        "/v1/finance/analyze",
        json={
            "monthly_income": 50000,
            "monthly_expenses": 20000,
            "loans": [{"amount": 1e12, "interest_rate": 100, "tenure_months": 1200}],
        },
    )
    assert response.status_code == 200
    assert response.json()["loans"][0]["emi"] > 0


@pytest.mark.parametrize("strategy,key", [("debt_health", "health"), ("stress_metrics", "stress")])
def test_score_strategies(client: TestClient, strategy: str, key: str):
    response = client.post(
        f"/v1/score/{strategy}",
        json={
            "monthly_income": 50000,
            "monthly_expenses": 20000,
            "loans": [{"amount": 120000, "interest_rate": 0, "tenure_months": 12}],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["strategy"] == strategy
    assert data[key] is not None


def test_score_stress_metrics_values(client: TestClient):
    response = client.post(
        "/v1/score/stress_metrics",
        json={
            "monthly_income": 50000,
            "monthly_expenses": 20000,
            "loans": [{"amount": 120000, "interest_rate": 0, "tenure_months": 12}],
        },
    )

    stress = response.json()["stress"]
    assert stress == {"debt_ratio": 0.2, "stress_level": "SAFE", "risk_score": 21}


def test_score_unknown_strategy(client: TestClient):
    response = client.post(
        "/v1/score/astrology",
        json={"monthly_income": 1, "monthly_expenses": 0, "loans": []},
    )
    assert response.status_code == 404


def test_simulate_loan_endpoint(client: TestClient):
    """Test POST /v1/loans/simulate with an extra payment"""
    response = client.post(
        "/v1/loans/simulate",
        json={
            "loan": {"amount": 100000, "interest_rate": 12, "tenure_months": 12},
            "what_if": {"extra_monthly_payment": 2000, "prepayment": 0},
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["months"] < 12
    assert data["interest_saved"] > 0
    assert data["pays_off"] is True
    assert data["outcome"] == "paid_off"


def test_simulate_loan_rejects_negative_extra_payment(client: TestClient):
    response = client.post(
        "/v1/loans/simulate",
        json={
            "loan": {"amount": 100000, "interest_rate": 12, "tenure_months": 12},
            "what_if": {"extra_monthly_payment": -9000},
        },
    )
    assert response.status_code == 422


def test_simulate_loan_rejects_amount_beyond_range(client: TestClient):
    response = client.post(
        "/v1/loans/simulate",
        json={"loan": {"amount": 1e27, "interest_rate": 0, "tenure_months": 1}},
    )
    assert response.status_code == 422


def test_portfolio_simulate_endpoint(client: TestClient, loans_payload: list[dict]):
    response = client.post(
        "/v1/portfolio/simulate",
        json={"loans": loans_payload, "new_income": 160000, "new_expenses": 50000, "emi_adjustment": 3000},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["interest_saved"] > 0
    assert 0 <= data["updated_debt_score"] <= 100


def test_stress_assess_and_history(client: TestClient):
    """Test POST /v1/stress/assess followed by GET /v1/stress/history"""
    first = client.post(
        "/v1/stress/assess",
        json={"user_id": "user_a", "monthly_income": 50000, "monthly_expense": 20000, "total_emi": 10000},
    )
    assert first.status_code == 200
    data = first.json()
    assert data["metrics"]["stress_level"] == "SAFE"
    assert data["disposable_income"] == 20000
    assert data["insights"][0]["type"] == "positive"

    second = client.post(
        "/v1/stress/assess",
        json={"user_id": "user_a", "monthly_income": 50000, "monthly_expense": 20000, "total_emi": 30000},
    )
    assert second.status_code == 200
    second_data = second.json()
    assert second_data["metrics"]["stress_level"] == "DANGEROUS"
    # Only one stored snapshot before this call, so no trend yet
    assert all(i["title"] != "Stress is Increasing" for i in second_data["insights"])

    third = client.post(
        "/v1/stress/assess",
        json={"user_id": "user_a", "monthly_income": 50000, "monthly_expense": 20000, "total_emi": 30000},
    )
    assert third.status_code == 200
    trend = third.json()["insights"][-1]
    assert trend["title"] == "Stress is Increasing"
    assert trend["message"].startswith(
        f"Your stress level increased from {data['metrics']['risk_score']} to {second_data['metrics']['risk_score']}"
    )

    history = client.get("/v1/stress/history?user_id=user_a")
    assert history.status_code == 200
    snapshots = history.json()["snapshots"]
    assert len(snapshots) == 3
    assert snapshots[0]["snapshot_id"] == third.json()["snapshot_id"]  # newest first


def test_stress_assess_computes_emi_from_loans(client: TestClient):
    response = client.post(
        "/v1/stress/assess",
        json={
            "user_id": "user_b",
            "monthly_income": 40000,
            "monthly_expense": 10000,
            "loans": [{"amount": 120000, "interest_rate": 0, "tenure_months": 12}],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total_emi"] == 10000
    assert data["metrics"]["debt_ratio"] == 0.25


def test_stress_history_empty(client: TestClient):
    response = client.get("/v1/stress/history?user_id=nobody")
    assert response.status_code == 200
    assert response.json()["snapshots"] == []


def test_stress_trend_endpoint(client: TestClient, loans_payload: list[dict]):
    response = client.post("/v1/stress/trend", json={"monthly_income": 150000, "loans": loans_payload})

    assert response.status_code == 200
    points = response.json()["points"]
    assert len(points) == 6
    assert all(p["income"] == 150000 for p in points)


def test_suggestions_endpoint(client: TestClient, loans_payload: list[dict]):
    response = client.post(
        "/v1/suggestions",
        json={"user_id": "user_c", "monthly_income": 35000, "monthly_expense": 26000, "loans": loans_payload},
    )

    assert response.status_code == 200
    data = response.json()
    titles = [s["title"] for s in data["suggestions"]]
    assert "Reduce Highest Interest Loan" in titles
    assert "Reduce Expenses" in titles  # 74% of income
    assert data["metrics"]["stress_level"] == "DANGEROUS"
    assert data["disposable_income"] == 0


def test_insights_endpoint(client: TestClient, loans_payload: list[dict]):
    closed = {"name": "Education Loan", "amount": 100000, "interest_rate": 0, "tenure_months": 10, "status": "CLOSED"}
    response = client.post(
        "/v1/insights",
        json={"monthly_income": 150000, "monthly_expense": 40000, "loans": loans_payload + [closed]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total_borrowed"] == 750000
    assert data["total_repaid"] == 100000
    assert data["total_interest_paid"] == 0
    assert data["average_interest_rate"] == 11.75
    assert data["loan_diversity"] == {"home_loans": 0, "car_loans": 1, "personal_loans": 1, "education_loans": 0}
    assert data["financial_health"]["disposable_income"] > 0


def test_insights_rejects_out_of_range_loan(client: TestClient):
    response = client.post(
        "/v1/insights",
        json={"monthly_income": 1, "monthly_expense": 0, "loans": [{"amount": 1, "interest_rate": 5, "tenure_months": 5000}]},
    )
    assert response.status_code == 422


def test_dashboard_endpoint(client: TestClient):
    loans = [
        {"id": "a", "name": "Car Loan", "amount": 120000, "interest_rate": 0, "tenure_months": 12},
        {"id": "b", "name": "Home Loan", "amount": 2400000, "interest_rate": 0, "tenure_months": 240, "status": "CLOSED"},
    ]
    response = client.post(
        "/v1/dashboard",
        json={"monthly_income": 60000, "monthly_expenses": 20000, "loans": loans},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["disposable_income"] == 40000
    assert data["total_emi"] == 10000
    assert data["emi_ratio"] == 0.25
    assert data["stress_score"] == 85
    assert data["loans_count"] == 1
    assert data["recent_loans"][0]["id"] == "a"
    assert data["recent_loans"][0]["emi"] == 10000
