"""Response envelopes shared by every resource router"""

import dataclasses
from enum import Enum
from typing import Any, Dict, Optional

from pydantic.alias_generators import to_camel

from fintech_agent_api.domain.models import CheckResult
from fintech_agent_api.infrastructure.observability.logging import log_check
from fintech_agent_api.infrastructure.observability.metrics import record_check
from fintech_agent_api.utils.date_utils import to_iso, utc_now


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    return value


def serialize(record: Any) -> Dict[str, Any]:
    """Dataclass entity → camelCase JSON object"""
    return {to_camel(key): _plain(value) for key, value in dataclasses.asdict(record).items()}


def success(
    request_id: str,
    data: Any,
    message: Optional[str] = None,
    count: Optional[int] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"status": "success", "data": data}
    if count is not None:
        body["count"] = count
    if message is not None:
        body["message"] = message
    body["timestamp"] = to_iso(utc_now())
    body["requestId"] = request_id
    return body


def listing(request_id: str, records: list) -> Dict[str, Any]:
    return success(request_id, [serialize(record) for record in records], count=len(records))


def error(request_id: str, message: str) -> Dict[str, Any]:
    return {
        "status": "error",
        "message": message,
        "timestamp": to_iso(utc_now()),
        "requestId": request_id,
    }


def check(request_id: str, check_name: str, subject_id: str, verdict: CheckResult, found: bool = True) -> Dict[str, Any]:
    """Checker envelope; also records the verdict in logs and metrics"""
    record_check(check_name, verdict.result, found=found)
    log_check(request_id, check_name, subject_id, verdict.result, verdict.reason)
    return {
        "result": verdict.result,
        "reason": verdict.reason,
        "metadata": verdict.metadata,
        "timestamp": to_iso(utc_now()),
        "requestId": request_id,
    }
