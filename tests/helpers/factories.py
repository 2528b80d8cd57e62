"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_order, make_settlement

    settlement = make_settlement(trade(recent, 1), trade(old, 2))
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from fractions import Fraction

from driver.errors import RatingError
from driver.models.order import Order, OrderClass, OrderKind, SigningScheme
from driver.models.settlement import Settlement, Trade
from driver.rating import SettlementRating
from tests.helpers.constants import NOW, SETTLEMENT_CONTRACT, USDC, WETH


def uid(n: int) -> str:
    """Deterministic 56-byte order uid filled with byte n, as hex."""
    return "0x" + f"{n:02x}" * 56


def make_order(
    n: int = 1,
    created_at: datetime = NOW,
    order_class: OrderClass | str = OrderClass.MARKET,
    **fields: object,
) -> Order:
    """Create a test order with sensible defaults.

    Args:
        n: Byte used for the uid (see uid())
        created_at: Order creation date
        order_class: Market, limit or liquidity
        **fields: Any other Order field
    """
    defaults: dict[str, object] = {
        "sell_token": WETH,
        "buy_token": USDC,
        "sell_amount": 10**18,
        "buy_amount": 2_000_000_000,
        "kind": OrderKind.SELL,
        "receiver": SETTLEMENT_CONTRACT,
        "valid_to": 1_704_110_400,
        "signing_scheme": SigningScheme.EIP712,
        "signature": "0x" + "00" * 65,
    }
    defaults.update(fields)
    return Order(uid=uid(n), creation_date=created_at, class_=order_class, **defaults)


def trade(
    created_at: datetime,
    n: int,
    order_class: OrderClass | str = OrderClass.MARKET,
    executed_amount: int = 1,
) -> Trade:
    """A trade of order n created at created_at."""
    return Trade(order=make_order(n, created_at, order_class), executed_amount=executed_amount)


def make_settlement(*trades: Trade) -> Settlement:
    """Settlement of the given trades with every token priced at 1."""
    return Settlement.with_default_prices(trades)


def aged(seconds: int) -> datetime:
    """A creation date `seconds` before NOW."""
    return NOW - timedelta(seconds=seconds)


class FixedClock:
    """Clock returning a fixed time and counting how often it was read."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        return self.now


@dataclass
class StaticRater:
    """Rater returning preconfigured ratings keyed by settlement.

    Settlements without an entry raise RatingError.
    """

    ratings: dict[Settlement, SettlementRating] = field(default_factory=dict)
    calls: list[Settlement] = field(default_factory=list)

    def rate(self, settlement: Settlement) -> SettlementRating:
        self.calls.append(settlement)
        try:
            return self.ratings[settlement]
        except KeyError:
            raise RatingError("no rating configured") from None


def make_rating(
    surplus: int | Fraction = 0,
    fee: int | Fraction = 0,
    gas_estimate: int = 0,
    gas_price: int | Fraction = 0,
    subsidized_fee: int | Fraction | None = None,
) -> SettlementRating:
    """Rating with the given objective value inputs."""
    return SettlementRating(
        surplus=Fraction(surplus),
        unscaled_subsidized_fee=Fraction(fee if subsidized_fee is None else subsidized_fee),
        scaled_unsubsidized_fee=Fraction(fee),
        gas_estimate=gas_estimate,
        gas_price=Fraction(gas_price),
    )
