"""Reward calculation and aggregation."""
from .models import Transaction, MonthlyReward, TotalReward, RewardSummary
from .calculator import (
    PointsResult,
    calculate_reward_points,
    evaluate_reward_points,
    attach_reward_points
)
from .dates import parse_calendar_date
from .aggregator import RewardAggregator, calculate_user_rewards

__all__ = [
    "Transaction",
    "MonthlyReward",
    "TotalReward",
    "RewardSummary",
    "PointsResult",
    "calculate_reward_points",
    "evaluate_reward_points",
    "attach_reward_points",
    "parse_calendar_date",
    "RewardAggregator",
    "calculate_user_rewards"
]
