"""Application wiring: config, logging, store and analytics service."""

from typing import Optional

from nonzero.services.analytics_service import AnalyticsService
from nonzero.store import InMemoryTaskStore, TaskProvider
from nonzero.utils.helpers import load_settings
from nonzero.utils.logger import get_logger, setup_logging


def create_app(config_path: Optional[str] = None, provider: Optional[TaskProvider] = None, clock=None) -> AnalyticsService:
    """
    Build an analytics service from a YAML config.

    Args:
        config_path: Path to config.yaml (searched for when relative)
        provider: Task provider; a fresh in-memory store when omitted
        clock: Reference clock; the system clock when omitted
    """
    settings = load_settings(config_path)
    setup_logging(log_level=settings.log_level, log_file=settings.log_file)
    logger = get_logger("app")
    logger.info("Analytics service starting", day_score_criteria=settings.day_score_criteria)

    if provider is None:
        provider = InMemoryTaskStore(clock)
    return AnalyticsService(provider, settings=settings, clock=clock)
