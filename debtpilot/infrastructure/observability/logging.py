"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "debtpilot"


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_stress_assessment(
    request_id: str,
    user_id: str,
    stress_level: str,
    risk_score: int,
    duration_ms: float,
) -> None:
    """Log structured stress assessment outcome for analysis"""
    logging.info(
        "Stress assessment completed",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "stress_assessment_complete",
            "stress_level": stress_level,
            "risk_score": risk_score,
            "duration_ms": duration_ms,
        },
    )


def log_simulation(
    request_id: str,
    kind: str,
    outcome: str,
    months: int,
    duration_ms: float,
) -> None:
    """Log structured simulation outcome"""
    logging.info(
        "Simulation completed",
        extra={
            "request_id": request_id,
            "step": f"{kind}_simulation_complete",
            "outcome": outcome,
            "months": months,
            "duration_ms": duration_ms,
        },
    )
