"""Field-level validation shared by the resource handlers"""

from enum import Enum
from typing import Optional, Type, TypeVar

from fintech_agent_api.domain.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_positive_amount(amount: float, field_name: str = "Amount") -> float:
    if amount <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    return amount


def require_non_negative(value: Optional[float], field_name: str) -> Optional[float]:
    if value is not None and value < 0:
        raise ValidationError(f"{field_name} must be >= 0")
    return value


def parse_enum(enum_cls: Type[E], value: Optional[str], field_name: str = "Status") -> E:
    """Map a raw string onto an enum member or raise ValidationError listing the allowed values"""
    allowed = [member.value for member in enum_cls]
    if value is None or value not in allowed:
        raise ValidationError(f"{field_name} must be one of: {', '.join(allowed)}")
    return enum_cls(value)
