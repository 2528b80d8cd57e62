"""Rating and ranking of mature settlements.

Surplus, fees, gas estimate and gas price are estimated outside the driver;
a SettlementRater supplies them. This module binds them to the settlement,
derives the objective value and orders the candidates.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from fractions import Fraction
from typing import Generic, Protocol, TypeVar

import structlog

from driver.errors import RatingError
from driver.models.settlement import Settlement
from driver.models.types import check_uint256
from driver.objective import compute_objective_value, to_rational, u256_to_rational
from driver.solvers import Solver, solver_display_name

logger = structlog.get_logger()

S = TypeVar("S", bound=Solver)


@dataclass(frozen=True)
class SettlementRating:
    """Externally estimated numbers for one settlement.

    Attributes:
        surplus: User surplus in wei
        unscaled_subsidized_fee: Fee the users actually pay, in wei
        scaled_unsubsidized_fee: Full cost-covering fee, in wei
        gas_estimate: Gas units
        gas_price: Wei per gas unit
    """

    surplus: Fraction
    unscaled_subsidized_fee: Fraction
    scaled_unsubsidized_fee: Fraction
    gas_estimate: int
    gas_price: Fraction

    def __post_init__(self) -> None:
        try:
            for name in _RATIONAL_FIELDS:
                object.__setattr__(self, name, to_rational(getattr(self, name)))
            if isinstance(self.gas_estimate, bool) or not isinstance(self.gas_estimate, int):
                raise TypeError(
                    f"gas_estimate must be an int, got {type(self.gas_estimate).__name__}"
                )
            check_uint256(self.gas_estimate)
        except (TypeError, ValueError) as err:
            raise RatingError(str(err)) from err


_RATIONAL_FIELDS = ("surplus", "unscaled_subsidized_fee", "scaled_unsubsidized_fee", "gas_price")


class SettlementRater(Protocol):
    """Supplies the economic numbers for a settlement."""

    def rate(self, settlement: Settlement) -> SettlementRating:
        """Estimate surplus, fees and gas for a settlement.

        Raises:
            RatingError: If the numbers cannot be estimated
        """
        ...


@dataclass(frozen=True)
class RatedSettlement(Generic[S]):
    """A settlement together with the numbers used to rank it.

    Attributes:
        id: Identifies the settlement within one evaluation pass
        solver: The solver that proposed it
        settlement: The settlement itself
        surplus: In wei
        unscaled_subsidized_fee: In wei
        scaled_unsubsidized_fee: In wei
        gas_estimate: In gas units
        gas_price: In wei per gas unit
    """

    id: int
    solver: S
    settlement: Settlement
    surplus: Fraction
    unscaled_subsidized_fee: Fraction
    scaled_unsubsidized_fee: Fraction
    gas_estimate: int
    gas_price: Fraction

    @classmethod
    def from_rating(
        cls, id: int, solver: S, settlement: Settlement, rating: SettlementRating
    ) -> RatedSettlement[S]:
        return cls(
            id=id,
            solver=solver,
            settlement=settlement,
            surplus=rating.surplus,
            unscaled_subsidized_fee=rating.unscaled_subsidized_fee,
            scaled_unsubsidized_fee=rating.scaled_unsubsidized_fee,
            gas_estimate=rating.gas_estimate,
            gas_price=rating.gas_price,
        )

    def objective_value(self) -> Fraction:
        """Surplus plus the unsubsidized fee minus the gas cost, in wei."""
        return compute_objective_value(
            self.surplus,
            self.scaled_unsubsidized_fee,
            u256_to_rational(self.gas_estimate),
            self.gas_price,
        )

    def ranking_key(self) -> tuple[Fraction, int]:
        """Sort key: highest objective value first, then lowest id."""
        return (-self.objective_value(), self.id)


def rate_settlements(
    settlements: Sequence[tuple[S, Settlement]],
    rater: SettlementRater,
) -> list[RatedSettlement[S]]:
    """Rate every settlement, dropping the ones the rater fails on.

    Ids are assigned from the input position, so they stay unique and
    deterministic within the pass even when some settlements are dropped.
    """
    rated: list[RatedSettlement[S]] = []
    for id, (solver, settlement) in enumerate(settlements):
        try:
            rating = rater.rate(settlement)
        except Exception as err:  # noqa: BLE001
            # Any rater failure drops only this settlement
            logger.warning(
                "settlement_rating_failed",
                solver_name=solver_display_name(solver),
                settlement_id=id,
                error=str(err),
                error_type=type(err).__name__,
            )
            continue
        rated.append(RatedSettlement.from_rating(id, solver, settlement, rating))
    return rated


def rank_settlements(rated: Iterable[RatedSettlement[S]]) -> list[RatedSettlement[S]]:
    """Order settlements by objective value, best first.

    Exactly equal objective values are economically equivalent; the lower
    id wins so the outcome never depends on iteration order.
    """
    return sorted(rated, key=RatedSettlement.ranking_key)


def best_settlement(rated: Iterable[RatedSettlement[S]]) -> RatedSettlement[S] | None:
    """The highest ranked settlement, or None if there are none."""
    return min(rated, key=RatedSettlement.ranking_key, default=None)
