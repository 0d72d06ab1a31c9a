"""Reward point calculation."""
import math
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Optional, Union

from .models import Transaction
from rewardflow.utils import get_logger

logger = get_logger()

LOWER_THRESHOLD = 50
UPPER_THRESHOLD = 100
UPPER_MULTIPLIER = 2
# Amounts at or above this are treated as corrupt input
MAX_PRICE = 10 ** 15


@dataclass(frozen=True)
class PointsResult:
    """Reward points plus whether the price was a valid number."""
    points: int
    is_valid: bool


def parse_price(price: Any) -> Optional[Union[int, float, Decimal]]:
    """
    Coerce a price to a finite number.

    Args:
        price: Raw price value (number or numeric string)

    Returns:
        The numeric value, or None if it is not a finite number below MAX_PRICE
    """
    if isinstance(price, bool):
        return None

    if isinstance(price, str):
        try:
            price = Decimal(price.strip())
        except InvalidOperation:
            return None

    if not isinstance(price, (int, float, Decimal)):
        return None

    if isinstance(price, Decimal) and not price.is_finite():
        return None

    if isinstance(price, float) and not math.isfinite(price):
        return None

    if abs(price) >= MAX_PRICE:
        return None

    return price


def evaluate_reward_points(price: Any) -> PointsResult:
    """
    Calculate reward points and report whether the input was usable.

    Points are tiered on the whole-dollar part of the price:
    nothing up to $50, 1 point per dollar from $51 to $100 and
    2 points per dollar above $100 on top of the 50 earned below it.

    Args:
        price: Transaction price

    Returns:
        PointsResult; points is 0 when is_valid is False
    """
    value = parse_price(price)
    if value is None:
        logger.error("Invalid price %r, awarding 0 points", price)
        return PointsResult(points=0, is_valid=False)

    whole_price = math.floor(value)

    if whole_price > UPPER_THRESHOLD:
        points = (whole_price - UPPER_THRESHOLD) * UPPER_MULTIPLIER
        points += UPPER_THRESHOLD - LOWER_THRESHOLD
    elif whole_price > LOWER_THRESHOLD:
        points = whole_price - LOWER_THRESHOLD
    else:
        points = 0

    logger.debug("Price %s earns %s points", value, points)
    return PointsResult(points=points, is_valid=True)


def calculate_reward_points(price: Any) -> int:
    """Reward points for a price; invalid prices silently earn 0."""
    return evaluate_reward_points(price).points


def attach_reward_points(transactions: Iterable[Transaction]) -> List[Transaction]:
    """
    Compute reward points for each transaction.

    Args:
        transactions: Transactions with prices

    Returns:
        New Transaction objects with reward_points set, in input order
    """
    return [
        replace(txn, reward_points=calculate_reward_points(txn.price))
        for txn in transactions
    ]
