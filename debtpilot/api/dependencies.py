"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from debtpilot.infrastructure.database.session import get_db
from debtpilot.infrastructure.database.repositories import SnapshotRepository


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_snapshot_repository(db: Session = Depends(get_db)) -> SnapshotRepository:
    """Provide stress snapshot repository bound to the request session"""
    return SnapshotRepository(db)
