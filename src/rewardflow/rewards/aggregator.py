"""Reward aggregation by customer, month and display name."""
from datetime import date
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .dates import parse_calendar_date
from .models import Transaction, MonthlyReward, TotalReward, RewardSummary
from rewardflow.utils import get_logger, ValidationError

logger = get_logger()


def resolve_bound(value: Any, label: str) -> Optional[date]:
    """
    Normalize an optional range bound to a calendar date.

    Args:
        value: date, datetime, YYYY-MM-DD string or None
        label: Bound name used in the error message

    Returns:
        Calendar date, or None for an open bound
    """
    if value is None:
        return None

    bound = parse_calendar_date(value)
    if bound is None:
        raise ValidationError(f"Invalid {label} date: {value!r}")
    return bound


def in_range(day: date, start: Optional[date], end: Optional[date]) -> bool:
    """Inclusive calendar-day range check; None bounds are open."""
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True


class RewardAggregator:
    """Aggregates reward points by customer/month and by customer name."""

    def aggregate(
        self,
        transactions: Iterable[Transaction],
        start: Any = None,
        end: Any = None
    ) -> RewardSummary:
        """
        Compute monthly and total rewards within an inclusive date range.

        Args:
            transactions: Transactions with reward points attached
            start: First included day, or None for no lower bound
            end: Last included day, or None for no upper bound

        Returns:
            RewardSummary with monthly rewards and totals per name
        """
        start_date = resolve_bound(start, "start")
        end_date = resolve_bound(end, "end")

        if start_date and end_date and start_date > end_date:
            logger.warning(f"Start date {start_date} is after end date {end_date}, nothing will match")

        in_range_transactions = self.filter_by_range(transactions, start_date, end_date)
        user_rewards = self.group_monthly(in_range_transactions)
        total_rewards = self.total_by_name(user_rewards)

        logger.info(
            f"Aggregated rewards into {len(user_rewards)} monthly rows "
            f"and {len(total_rewards)} totals"
        )

        return RewardSummary(user_rewards=user_rewards, total_rewards=total_rewards)

    def filter_by_range(
        self,
        transactions: Iterable[Transaction],
        start: Optional[date],
        end: Optional[date]
    ) -> Iterator[Tuple[Transaction, date]]:
        """Yield in-range transactions with their parsed date, in input order."""
        for txn in transactions:
            txn_date = parse_calendar_date(txn.date)
            if txn_date is None:
                logger.warning(
                    f"Invalid date {txn.date!r} for customer {txn.customer_id}, "
                    f"skipping transaction"
                )
                continue

            if in_range(txn_date, start, end):
                yield txn, txn_date

    def group_monthly(self, dated_transactions: Iterable[Tuple[Transaction, date]]) -> List[MonthlyReward]:
        """
        Sum reward points per (customer, year, month).

        The name of each row is taken from the first transaction seen for
        its key. Rows are ordered by first occurrence.
        """
        monthly: Dict[tuple, MonthlyReward] = {}

        for txn, txn_date in dated_transactions:
            key = (txn.customer_id, txn_date.year, txn_date.month)
            reward = monthly.get(key)
            if reward is None:
                monthly[key] = MonthlyReward(
                    customer_id=txn.customer_id,
                    name=txn.name,
                    month=txn_date.month,
                    year=txn_date.year,
                    total_points=txn.reward_points
                )
            else:
                reward.total_points += txn.reward_points

        return list(monthly.values())

    def total_by_name(self, user_rewards: Iterable[MonthlyReward]) -> List[TotalReward]:
        """
        Sum monthly rewards per display name.

        Rows sharing a name are merged even when their customer ids differ.
        Totals are ordered by first occurrence of each name.
        """
        totals: Dict[str, int] = {}
        for reward in user_rewards:
            totals[reward.name] = totals.get(reward.name, 0) + reward.total_points

        return [TotalReward(name=name, total_points=points) for name, points in totals.items()]


def calculate_user_rewards(
    transactions: Iterable[Transaction],
    start: Any = None,
    end: Any = None
) -> RewardSummary:
    """Aggregate rewards for transactions within an inclusive date range."""
    return RewardAggregator().aggregate(transactions, start, end)
