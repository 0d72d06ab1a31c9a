"""Data models for reward calculation."""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Union


@dataclass(frozen=True)
class Transaction:
    """Purchase event from the transaction feed."""
    customer_id: int
    name: str
    date: Union[date, str, None]  # raw source value when unparsable
    price: Any
    reward_points: int = 0
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize in the feed's camelCase shape, extra fields included."""
        data = dict(self.extra)
        data.update({
            "customerId": self.customer_id,
            "name": self.name,
            "date": self.date.isoformat() if isinstance(self.date, date) else self.date,
            "price": self.price,
            "rewardPoints": self.reward_points,
        })
        return data


@dataclass
class MonthlyReward:
    """Points earned by one customer in one calendar month."""
    customer_id: int
    name: str
    month: int  # 1-12
    year: int
    total_points: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "customerId": self.customer_id,
            "name": self.name,
            "month": self.month,
            "year": self.year,
            "totalPoints": self.total_points,
        }


@dataclass
class TotalReward:
    """Points summed across months for one display name."""
    name: str
    total_points: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "totalPoints": self.total_points}


@dataclass
class RewardSummary:
    """Result of one aggregation pass."""
    user_rewards: List[MonthlyReward]
    total_rewards: List[TotalReward]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userRewards": [reward.to_dict() for reward in self.user_rewards],
            "totalRewards": [reward.to_dict() for reward in self.total_rewards],
        }
