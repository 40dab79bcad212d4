"""Analytics services."""

from .streak_engine import DaySeries, TaskStreakEngine, get_streak_engine
from .resilience import resilience_index, comeback_events
from .day_score import DayScoreAggregator, get_day_score_aggregator
from .completion_rate import completion_rate, average_value
from .analytics_service import AnalyticsService, get_analytics_service

__all__ = [
    'DaySeries', 'TaskStreakEngine', 'get_streak_engine',
    'resilience_index', 'comeback_events',
    'DayScoreAggregator', 'get_day_score_aggregator',
    'completion_rate', 'average_value',
    'AnalyticsService', 'get_analytics_service',
]
