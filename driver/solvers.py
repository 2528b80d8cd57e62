"""Solver capability and auction result notifications.

Solvers are external processes. The driver only needs a display name for
diagnostics and a way to tell a solver what happened to its settlement.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, runtime_checkable

import structlog

logger = structlog.get_logger()


class SolverRejectionReason(str, Enum):
    """Why a solver's settlement was not used.

    The evaluation core only emits NO_MATURE_ORDERS; the other reasons are
    judged by later stages (simulation, scoring, submission).
    """

    NO_MATURE_ORDERS = "NoMatureOrders"
    NO_USER_ORDERS = "NoUserOrders"
    RUN_ERROR = "RunError"
    SIMULATION_FAILURE = "SimulationFailure"
    OBJECTIVE_VALUE_NON_POSITIVE = "ObjectiveValueNonPositive"
    PRICE_VIOLATION = "PriceViolation"
    UNREASONABLE_GAS = "UnreasonableGas"
    NON_BUFFERABLE_TOKENS_USED = "NonBufferableTokensUsed"
    UNSUPPORTED_INTERNALIZATIONS = "UnsupportedInternalizations"


class SubmissionResult(str, Enum):
    """Outcome of submitting the winning settlement on-chain."""

    SUCCESS = "success"
    REVERT = "revert"
    TIMEOUT = "timeout"
    FAIL = "fail"


@dataclass(frozen=True)
class Ranked:
    """The settlement was ranked; rank 1 is the winner."""

    rank: int


@dataclass(frozen=True)
class Rejected:
    """The settlement was excluded from the auction."""

    reason: SolverRejectionReason


@dataclass(frozen=True)
class SubmittedOnchain:
    """The settlement won and was submitted."""

    result: SubmissionResult


AuctionResult = Ranked | Rejected | SubmittedOnchain


@runtime_checkable
class Solver(Protocol):
    """What the driver needs from a solver.

    Production solvers wrap an HTTP client; tests use RecordingSolver.
    """

    def name(self) -> str:
        """Display name, used only for diagnostics."""
        ...

    def notify_auction_result(self, auction_id: int, result: AuctionResult) -> None:
        """Tell the solver what happened to its settlement in this auction."""
        ...


def notify_safely(solver: Solver, auction_id: int, result: AuctionResult) -> None:
    """Deliver a notification without letting the solver break the caller.

    Notifications are best effort: a failing solver is logged and the
    evaluation continues.
    """
    try:
        solver.notify_auction_result(auction_id, result)
    except Exception as err:  # noqa: BLE001 - notification is fire-and-forget
        logger.warning(
            "solver_notification_failed",
            solver_name=solver_display_name(solver),
            auction_id=auction_id,
            result=repr(result),
            error=str(err),
        )


def solver_display_name(solver: Solver) -> str:
    """Solver name for log context, falling back to the class name."""
    try:
        return solver.name()
    except Exception:  # noqa: BLE001 - only used for log context
        return type(solver).__name__


@dataclass
class RecordingSolver:
    """In-process solver handle that records the notifications it receives.

    Attributes:
        solver_name: Value returned by name()
        notifications: (auction_id, result) pairs in delivery order
    """

    solver_name: str = "recording"
    notifications: list[tuple[int, AuctionResult]] = field(default_factory=list)

    def name(self) -> str:
        return self.solver_name

    def notify_auction_result(self, auction_id: int, result: AuctionResult) -> None:
        self.notifications.append((auction_id, result))

    def results_for(self, auction_id: int) -> list[AuctionResult]:
        """Notifications received for one auction."""
        return [result for aid, result in self.notifications if aid == auction_id]
