"""Structured JSON logging for production observability"""

import logging
import sys
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from fintech_agent_api.utils.date_utils import to_iso, utc_now


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def __init__(self, *args: Any, service_name: str = "fintech-agent-api", **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = to_iso(utc_now())
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "fintech-agent-api") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service_name=service_name,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_request(request_id: str, method: str, path: str, status_code: int, duration_ms: float) -> None:
    logging.info(
        "Request handled",
        extra={
            "request_id": request_id,
            "method": method,
            "path": path,
            "status_code": status_code,
            "duration_ms": duration_ms,
        },
    )


def log_check(request_id: str, check: str, subject_id: str, result: bool, reason: str) -> None:
    """Log a checker verdict so orchestrator branching can be traced afterwards"""
    logging.info(
        "Check evaluated",
        extra={
            "request_id": request_id,
            "step": "check",
            "check": check,
            "subject_id": subject_id,
            "result": result,
            "reason": reason,
        },
    )


def log_transition(request_id: str, resource: str, subject_id: str, status: str) -> None:
    logging.info(
        "Status changed",
        extra={
            "request_id": request_id,
            "step": "status_transition",
            "resource": resource,
            "subject_id": subject_id,
            "status": status,
        },
    )
