"""SQLAlchemy ORM models"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Float, DateTime, Integer, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class StressSnapshot(Base):
    """Point-in-time stress assessment for a user"""

    __tablename__ = "stress_snapshot"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    monthly_income = Column(Float, nullable=False)
    monthly_expense = Column(Float, nullable=False)
    total_emi = Column(Float, nullable=False)
    debt_ratio = Column(Float, nullable=False)
    stress_level = Column(Text, nullable=False)  # SAFE | RISKY | DANGEROUS
    risk_score = Column(Integer, nullable=False)
    # Python-side default keeps sub-second ordering on backends with coarse now()
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )
