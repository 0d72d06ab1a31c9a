"""RewardFlow: loyalty reward points from a transaction feed."""
from .rewards import (
    Transaction,
    MonthlyReward,
    TotalReward,
    RewardSummary,
    PointsResult,
    calculate_reward_points,
    evaluate_reward_points,
    attach_reward_points,
    calculate_user_rewards
)

__version__ = "0.1.0"

__all__ = [
    "Transaction",
    "MonthlyReward",
    "TotalReward",
    "RewardSummary",
    "PointsResult",
    "calculate_reward_points",
    "evaluate_reward_points",
    "attach_reward_points",
    "calculate_user_rewards"
]
