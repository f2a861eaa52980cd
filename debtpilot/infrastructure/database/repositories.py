"""Data access layer for stress snapshots"""

from typing import List
from sqlalchemy.orm import Session
from debtpilot.infrastructure.database.models import StressSnapshot
from debtpilot.domain.models import StressMetrics


class SnapshotRepository:
    """Repository for stress snapshots"""

    def __init__(self, db: Session):
        self.db = db

    def create_snapshot(
        self,
        user_id: str,
        monthly_income: float,
        monthly_expense: float,
        total_emi: float,
        metrics: StressMetrics,
    ) -> StressSnapshot:
        """Persist a stress assessment"""
        db_snapshot = StressSnapshot(
            user_id=user_id,
            monthly_income=monthly_income,
            monthly_expense=monthly_expense,
            total_emi=total_emi,
            debt_ratio=metrics.debt_ratio,
            stress_level=metrics.stress_level.value,
            risk_score=metrics.risk_score,
        )
        self.db.add(db_snapshot)
        self.db.flush()  # Get ID without committing
        return db_snapshot

    def get_snapshots_by_user(self, user_id: str, limit: int = 12) -> List[StressSnapshot]:
        """Fetch recent snapshots for a user, newest first"""
        return (
            self.db.query(StressSnapshot)
            .filter(StressSnapshot.user_id == user_id)
            .order_by(StressSnapshot.created_at.desc())
            .limit(limit)
            .all()
        )
