"""Maturity filtering of candidate settlements.

A user order older than ``min_order_age`` is mature by age. Any younger
user order in a settlement that contains a mature user order becomes mature
by association. Because maturity by association is defined recursively it
can spread across settlements that share orders, so the set of mature
settlements is computed as a fixed point:

    S1(o1, o2) - S2(o2, o3) - S3(o3, old o4)

Here o4 makes S3 mature, which makes o3 mature, which makes S2 mature, which
makes o2 mature, which makes S1 mature.

Liquidity orders never make a settlement mature and never become mature by
association.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime, timedelta
from typing import TypeVar

import structlog

from driver.models.settlement import Settlement
from driver.solvers import (
    Rejected,
    Solver,
    SolverRejectionReason,
    notify_safely,
    solver_display_name,
)

logger = structlog.get_logger()

S = TypeVar("S", bound=Solver)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def has_user_order(settlement: Settlement) -> bool:
    """Return True if the settlement trades at least one market or limit order."""
    return settlement.has_user_order


def find_mature_settlements(
    min_order_age: timedelta,
    settlements: Sequence[Settlement],
    now: datetime,
) -> set[int]:
    """Compute the indices of all mature settlements.

    Args:
        min_order_age: User orders created at or before ``now - min_order_age``
            are mature by age
        settlements: Candidate settlements
        now: The single reference time for the whole pass

    Returns:
        Indices into ``settlements`` of the mature ones
    """
    settle_orders_older_than = now - min_order_age

    mature_orders: set[str] = set()
    mature_indices: set[int] = set()

    # Each pass either adds at least one order to mature_orders or ends the loop,
    # so the number of passes is bounded by the number of distinct user orders.
    while True:
        new_order_added = False

        for index, settlement in enumerate(settlements):
            if index in mature_indices:
                continue

            contains_mature_user_trade = any(
                trade.order.creation_date <= settle_orders_older_than
                or trade.order.uid in mature_orders
                for trade in settlement.user_trades()
            )
            if not contains_mature_user_trade:
                continue

            # Every user order of a mature settlement is mature by association
            uids = settlement.user_order_uids()
            if not uids <= mature_orders:
                new_order_added = True
                mature_orders |= uids
            mature_indices.add(index)

        if not new_order_added:
            return mature_indices


def retain_mature_settlements(
    min_order_age: timedelta,
    settlements: Sequence[tuple[S, Settlement]],
    auction_id: int,
    *,
    clock: Clock = utc_now,
) -> list[tuple[S, Settlement]]:
    """Keep only settlements containing at least one mature user order.

    Every dropped settlement is logged and its solver is notified with
    ``Rejected(NoMatureOrders)``. Notification failures are logged and do
    not affect the result.

    Args:
        min_order_age: Minimum age for a user order to be mature by age
        settlements: (solver, settlement) pairs proposed for this auction
        auction_id: Auction the settlements belong to
        clock: Source of the reference time, read exactly once per call

    Returns:
        The mature (solver, settlement) pairs, in input order

    Raises:
        ValueError: If min_order_age is negative
    """
    if min_order_age < timedelta(0):
        raise ValueError(f"min_order_age must not be negative: {min_order_age}")

    if not settlements:
        return []

    now = clock()
    mature_indices = find_mature_settlements(
        min_order_age, [settlement for _, settlement in settlements], now
    )

    retained: list[tuple[S, Settlement]] = []
    for index, (solver, settlement) in enumerate(settlements):
        if index in mature_indices:
            retained.append((solver, settlement))
            continue

        logger.debug(
            "settlement_filtered_no_mature_orders",
            solver_name=solver_display_name(solver),
            auction_id=auction_id,
            settlement=settlement,
        )
        notify_safely(solver, auction_id, Rejected(SolverRejectionReason.NO_MATURE_ORDERS))

    logger.debug(
        "maturity_filter_done",
        auction_id=auction_id,
        candidates=len(settlements),
        retained=len(retained),
    )
    return retained
