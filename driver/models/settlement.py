"""Candidate settlements proposed by solvers.

A settlement is a solver's execution plan for one auction: the trades it
fills, the uniform clearing prices and the on-chain interactions needed to
execute them. The evaluation core only reads these objects.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Annotated

from pydantic import AfterValidator, Field, StrictInt

from driver.models.base import DomainModel
from driver.models.order import Order
from driver.models.types import Address, Bytes, Uint256Int

# Clearing prices are shared between settlement copies, so they are read-only
Prices = Annotated[Mapping[Address, Uint256Int], AfterValidator(MappingProxyType)]


class Trade(DomainModel):
    """A (partial) execution of one order.

    Attributes:
        order: The order being filled
        executed_amount: Sell amount for sell orders, buy amount for buy orders
    """

    order: Order
    executed_amount: Uint256Int

    @property
    def is_user_trade(self) -> bool:
        """Return True if the traded order is a market or limit order."""
        return self.order.is_user_order


class Asset(DomainModel):
    """A token and an amount flowing into or out of an interaction."""

    token: Address
    amount: Uint256Int


class Allowance(DomainModel):
    """A token approval an interaction needs before it can execute."""

    token: Address
    spender: Address
    amount: Uint256Int


class LiquidityInteraction(DomainModel):
    """A swap against liquidity the auction provided, referenced by its id.

    Attributes:
        id: Liquidity source id from the auction
        input: Token and amount sent to the pool
        output: Token and amount received from the pool
        internalize: Settle from the settlement contract's buffers instead of on-chain
    """

    id: StrictInt = Field(ge=0)
    input: Asset
    output: Asset
    internalize: bool = False


class CustomInteraction(DomainModel):
    """An arbitrary contract call with declared token flows.

    Attributes:
        target: Contract address to call
        value: Native asset (wei) sent with the call
        call_data: ABI-encoded call
        allowances: Approvals required before the call
        inputs: Tokens the call consumes
        outputs: Tokens the call produces
        internalize: Settle from the settlement contract's buffers instead of on-chain
    """

    target: Address
    call_data: Bytes = "0x"
    value: Uint256Int = 0
    allowances: tuple[Allowance, ...] = ()
    inputs: tuple[Asset, ...] = ()
    outputs: tuple[Asset, ...] = ()
    internalize: bool = False


Interaction = LiquidityInteraction | CustomInteraction


class Settlement(DomainModel):
    """A solver's proposed settlement for one auction.

    Attributes:
        trades: Executed orders, in the solver's order
        prices: Clearing price per token address (uint256)
        interactions: On-chain calls needed to execute the trades
    """

    trades: tuple[Trade, ...] = ()
    prices: Prices = Field(default_factory=lambda: MappingProxyType({}))
    interactions: tuple[Interaction, ...] = ()

    # Mappings are not hashable; identity is the trade list plus interactions.
    def __hash__(self) -> int:
        return hash((self.trades, tuple(sorted(self.prices.items())), self.interactions))

    @classmethod
    def with_default_prices(cls, trades: Iterable[Trade]) -> Settlement:
        """Create a settlement that prices every traded token at 1."""
        trades = tuple(trades)
        prices: dict[str, int] = {}
        for trade in trades:
            prices[trade.order.sell_token] = 1
            prices[trade.order.buy_token] = 1
        return cls(trades=trades, prices=prices)

    def user_trades(self) -> Iterator[Trade]:
        """Iterate over trades of market and limit orders."""
        return (trade for trade in self.trades if trade.is_user_trade)

    def user_order_uids(self) -> set[str]:
        """Uids of all user orders in this settlement."""
        return {trade.order.uid for trade in self.user_trades()}

    @property
    def has_user_order(self) -> bool:
        """Return True if at least one trade belongs to a user order."""
        return next(self.user_trades(), None) is not None
