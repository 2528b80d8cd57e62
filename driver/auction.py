"""Evaluation of one auction round.

Pipeline: maturity filter -> rating -> ranking -> encode the winner.
A settlement that cannot be rated or encoded is dropped and the next one in
the ranking is used; if nothing remains the trivial solution is returned.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

import structlog

from driver.config import DEFAULT_DRIVER_CONFIG, DriverConfig
from driver.encoding import encode_solution
from driver.errors import EncodingError
from driver.maturity import Clock, retain_mature_settlements, utc_now
from driver.models.settlement import Settlement
from driver.models.solution import Solution
from driver.rating import RatedSettlement, SettlementRater, rank_settlements, rate_settlements
from driver.solvers import Solver, solver_display_name

logger = structlog.get_logger()

S = TypeVar("S", bound=Solver)


@dataclass(frozen=True)
class AuctionOutcome(Generic[S]):
    """Result of evaluating one auction.

    Attributes:
        auction_id: The evaluated auction
        ranking: Rated mature settlements, best first
        winner: The settlement that was encoded, if any
        solution: Encoded winner, or the trivial solution
    """

    auction_id: int
    ranking: list[RatedSettlement[S]] = field(default_factory=list)
    winner: RatedSettlement[S] | None = None
    solution: Solution = field(default_factory=Solution.trivial)

    @property
    def has_winner(self) -> bool:
        return self.winner is not None


def evaluate_auction(
    auction_id: int,
    solver_settlements: Sequence[tuple[S, Settlement]],
    rater: SettlementRater,
    *,
    config: DriverConfig | None = None,
    clock: Clock = utc_now,
) -> AuctionOutcome[S]:
    """Pick and encode the best mature settlement of an auction.

    Args:
        auction_id: Auction being evaluated
        solver_settlements: (solver, settlement) pairs proposed by solvers
        rater: Supplies surplus, fee and gas numbers per settlement
        config: Driver configuration (defaults to DEFAULT_DRIVER_CONFIG)
        clock: Reference time source for the maturity filter

    Returns:
        AuctionOutcome with the ranking and the encoded winner

    Raises:
        EncodingError: If the best settlement cannot be encoded and
            config.drop_unencodable_settlements is False
    """
    config = config or DEFAULT_DRIVER_CONFIG

    mature = retain_mature_settlements(
        config.min_order_age, solver_settlements, auction_id, clock=clock
    )
    ranking = rank_settlements(rate_settlements(mature, rater))

    for rated in ranking:
        try:
            solution = encode_solution(rated.settlement)
        except EncodingError as err:
            if not config.drop_unencodable_settlements:
                raise
            logger.warning(
                "settlement_encoding_failed",
                auction_id=auction_id,
                solver_name=solver_display_name(rated.solver),
                settlement_id=rated.id,
                error=str(err),
            )
            continue

        logger.info(
            "auction_winner_selected",
            auction_id=auction_id,
            solver_name=solver_display_name(rated.solver),
            settlement_id=rated.id,
            objective_value=str(rated.objective_value()),
            candidates=len(solver_settlements),
            mature=len(mature),
        )
        return AuctionOutcome(
            auction_id=auction_id, ranking=ranking, winner=rated, solution=solution
        )

    logger.info(
        "auction_no_solution",
        auction_id=auction_id,
        candidates=len(solver_settlements),
        mature=len(mature),
    )
    return AuctionOutcome(auction_id=auction_id, ranking=ranking)
