"""End-to-end tests for evaluating an auction round."""

from datetime import timedelta

import pytest

from driver.auction import evaluate_auction
from driver.config import DriverConfig
from driver.errors import EncodingError
from driver.models.settlement import Asset, LiquidityInteraction, Settlement
from driver.solvers import RecordingSolver, Rejected, SolverRejectionReason
from tests.helpers import (
    GWEI,
    NOW,
    USDC,
    WETH,
    FixedClock,
    StaticRater,
    aged,
    make_rating,
    make_settlement,
    trade,
)

CONFIG = DriverConfig(min_order_age=timedelta(seconds=60))


def corrupted_settlement() -> Settlement:
    """A settlement whose interaction cannot be represented on the wire."""
    liquidity = LiquidityInteraction.model_construct(
        id=-1,
        input=Asset(token=WETH, amount=1),
        output=Asset(token=USDC, amount=1),
        internalize=False,
    )
    settlement = make_settlement(trade(aged(600), 50))
    return settlement.model_copy(update={"interactions": (liquidity,)})


class TestEvaluateAuction:
    """Tests for evaluate_auction."""

    def test_picks_highest_objective_value(self):
        baseline = RecordingSolver(solver_name="baseline")
        naive = RecordingSolver(solver_name="naive")
        s1 = make_settlement(trade(aged(600), 1), trade(NOW, 2))
        s2 = make_settlement(trade(aged(600), 3))
        rater = StaticRater(
            {
                # 1.004 - 3e5 * 10 gwei = 1.001 ETH
                s1: make_rating(1_003_000_000_000_000_000, 10**15, 300_000, 10 * GWEI),
                # 1.01 - 5e5 * 10 gwei = 1.005 ETH
                s2: make_rating(1_009_000_000_000_000_000, 10**15, 500_000, 10 * GWEI),
            }
        )

        outcome = evaluate_auction(
            1, [(baseline, s1), (naive, s2)], rater, config=CONFIG, clock=FixedClock(NOW)
        )

        assert outcome.has_winner
        assert outcome.winner.settlement == s2
        assert outcome.winner.solver is naive
        assert [r.id for r in outcome.ranking] == [1, 0]
        assert [t.order for t in outcome.solution.trades] == ["0x" + "03" * 56]

    def test_immature_settlements_are_rejected_and_not_rated(self):
        fresh_solver = RecordingSolver(solver_name="fresh")
        mature_solver = RecordingSolver(solver_name="mature")
        fresh = make_settlement(trade(NOW, 1))
        mature = make_settlement(trade(aged(120), 2))
        rater = StaticRater({fresh: make_rating(10**20), mature: make_rating(1)})

        outcome = evaluate_auction(
            4,
            [(fresh_solver, fresh), (mature_solver, mature)],
            rater,
            config=CONFIG,
            clock=FixedClock(NOW),
        )

        assert outcome.winner.settlement == mature
        assert rater.calls == [mature]
        assert fresh_solver.results_for(4) == [Rejected(SolverRejectionReason.NO_MATURE_ORDERS)]
        assert mature_solver.notifications == []

    def test_nothing_mature_gives_trivial_solution(self):
        solver = RecordingSolver()
        settlements = [make_settlement(trade(NOW, n)) for n in (1, 2, 3)]

        outcome = evaluate_auction(
            2,
            [(solver, s) for s in settlements],
            StaticRater(),
            config=CONFIG,
            clock=FixedClock(NOW),
        )

        assert not outcome.has_winner
        assert outcome.ranking == []
        assert outcome.solution.is_trivial
        assert len(solver.results_for(2)) == 3

    def test_no_settlements(self):
        outcome = evaluate_auction(0, [], StaticRater(), clock=FixedClock(NOW))
        assert outcome.solution.is_trivial
        assert outcome.auction_id == 0

    def test_unrated_settlement_is_skipped(self):
        solver = RecordingSolver()
        unrated = make_settlement(trade(aged(600), 1))
        rated = make_settlement(trade(aged(600), 2))

        outcome = evaluate_auction(
            3,
            [(solver, unrated), (solver, rated)],
            StaticRater({rated: make_rating(5)}),
            config=CONFIG,
            clock=FixedClock(NOW),
        )

        assert outcome.winner.settlement == rated
        assert outcome.winner.id == 1

    def test_unencodable_winner_falls_back_to_next(self):
        solver = RecordingSolver()
        broken = corrupted_settlement()
        fallback = make_settlement(trade(aged(600), 2))
        rater = StaticRater({broken: make_rating(100), fallback: make_rating(1)})

        outcome = evaluate_auction(
            5,
            [(solver, broken), (solver, fallback)],
            rater,
            config=CONFIG,
            clock=FixedClock(NOW),
        )

        assert outcome.winner.settlement == fallback
        assert [r.settlement for r in outcome.ranking] == [broken, fallback]

    def test_unencodable_winner_raises_when_configured(self):
        solver = RecordingSolver()
        broken = corrupted_settlement()
        config = DriverConfig(
            min_order_age=timedelta(seconds=60), drop_unencodable_settlements=False
        )

        with pytest.raises(EncodingError):
            evaluate_auction(
                5,
                [(solver, broken)],
                StaticRater({broken: make_rating(100)}),
                config=config,
                clock=FixedClock(NOW),
            )

    def test_exact_tie_goes_to_first_proposed(self):
        first = RecordingSolver(solver_name="first")
        second = RecordingSolver(solver_name="second")
        a = make_settlement(trade(aged(600), 1))
        b = make_settlement(trade(aged(600), 2))
        # 1.004 - 3e5 * 30 gwei == 1.01 - 5e5 * 30 gwei
        rater = StaticRater(
            {
                a: make_rating(1_003_000_000_000_000_000, 10**15, 300_000, 30 * GWEI),
                b: make_rating(1_009_000_000_000_000_000, 10**15, 500_000, 30 * GWEI),
            }
        )

        outcome = evaluate_auction(
            9, [(first, a), (second, b)], rater, config=CONFIG, clock=FixedClock(NOW)
        )

        assert outcome.ranking[0].objective_value() == outcome.ranking[1].objective_value()
        assert outcome.winner.solver is first

    def test_crashing_rater_does_not_abort_auction(self):
        solver = RecordingSolver()
        crashing = make_settlement(trade(aged(600), 1))
        fine = make_settlement(trade(aged(600), 2))

        class CrashingRater(StaticRater):
            def rate(self, settlement):
                if settlement == crashing:
                    raise ZeroDivisionError("bad fee model")
                return super().rate(settlement)

        outcome = evaluate_auction(
            6,
            [(solver, crashing), (solver, fine)],
            CrashingRater({fine: make_rating(5)}),
            config=CONFIG,
            clock=FixedClock(NOW),
        )

        assert outcome.winner.settlement == fine
        assert [r.id for r in outcome.ranking] == [1]
