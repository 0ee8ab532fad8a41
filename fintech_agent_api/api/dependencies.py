"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from fintech_agent_api.config import Settings
from fintech_agent_api.domain.scoring import ScoringStrategy
from fintech_agent_api.infrastructure.scheduler import DeferredTaskScheduler
from fintech_agent_api.infrastructure.store import FintechStore


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> FintechStore:
    """Provide the application's in-memory store"""
    return request.app.state.store


def get_scheduler(request: Request) -> DeferredTaskScheduler:
    return request.app.state.scheduler


def get_scoring_strategy(request: Request) -> ScoringStrategy:
    """Provide the credit scoring strategy used for loan applications"""
    return request.app.state.scoring
