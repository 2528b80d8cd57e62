"""Pydantic models for the canonical solution wire format.

This is the structure handed to the execution layer for the winning
settlement. Every amount is a uint256 decimal string, every byte string is
lowercase 0x-prefixed hex, and the trade/interaction variants carry an
explicit ``kind`` tag: lowercase for trades (``fulfillment``, ``jit``) and
capitalized for interactions (``Liquidity``, ``Custom``).

Based on the solver engine API at:
https://github.com/cowprotocol/services/blob/main/crates/solvers/openapi.yml
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

from driver.models.order import BuyTokenBalance, OrderKind, SellTokenBalance, SigningScheme
from driver.models.types import Address, Bytes, Digest, OrderUid, Uint32, Uint256

_WIRE_CONFIG = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")


class Asset(BaseModel):
    """A token and its associated amount.

    Used to represent input/output token flows in interactions.
    """

    token: Address = Field(description="Token address (0x-prefixed)")
    amount: Uint256 = Field(description="Token amount as decimal string")

    model_config = _WIRE_CONFIG


class Allowance(BaseModel):
    """A token approval required by a custom interaction."""

    token: Address
    spender: Address
    amount: Uint256

    model_config = _WIRE_CONFIG


class Fulfillment(BaseModel):
    """Execution of an order that exists in the auction."""

    kind: Literal["fulfillment"] = "fulfillment"
    order: OrderUid = Field(description="UID of the order being filled.")
    executed_amount: Uint256 = Field(
        alias="executedAmount",
        description="Amount executed. For sell orders: sell amount. For buy orders: buy amount.",
    )

    model_config = _WIRE_CONFIG


class JitOrder(BaseModel):
    """A fully specified order created by the solver at settlement time.

    Unlike the other wire structs, JIT trades and orders keep snake_case keys.
    """

    sell_token: Address
    buy_token: Address
    receiver: Address
    sell_amount: Uint256
    buy_amount: Uint256
    valid_to: Uint32
    app_data: Digest
    fee_amount: Uint256
    kind: OrderKind
    partially_fillable: bool
    sell_token_balance: SellTokenBalance = SellTokenBalance.ERC20
    buy_token_balance: BuyTokenBalance = BuyTokenBalance.ERC20
    signing_scheme: SigningScheme
    signature: Bytes

    model_config = _WIRE_CONFIG


class JitTrade(BaseModel):
    """Execution of a just-in-time order."""

    kind: Literal["jit"] = "jit"
    order: JitOrder
    executed_amount: Uint256

    model_config = _WIRE_CONFIG


class LiquidityInteraction(BaseModel):
    """Interaction referencing liquidity provided in the auction.

    The execution layer resolves the pool by its auction id and builds the
    swap calldata itself.
    """

    kind: Literal["Liquidity"] = "Liquidity"
    internalize: bool = Field(
        default=False,
        description="Whether to use internal buffers instead of on-chain (CIP-2).",
    )
    id: int = Field(ge=0, description="Liquidity source ID from auction.")
    input_token: Address = Field(alias="inputToken", description="Input token address.")
    output_token: Address = Field(alias="outputToken", description="Output token address.")
    input_amount: Uint256 = Field(alias="inputAmount", description="Input amount.")
    output_amount: Uint256 = Field(alias="outputAmount", description="Output amount.")

    model_config = _WIRE_CONFIG


class CustomInteraction(BaseModel):
    """Custom on-chain interaction with encoded calldata."""

    kind: Literal["Custom"] = "Custom"
    internalize: bool = Field(
        default=False,
        description="Whether to use internal buffers instead of on-chain (CIP-2).",
    )
    target: Address = Field(description="Contract address to call.")
    value: Uint256 = Field(default="0", description="ETH value to send.")
    call_data: Bytes = Field(alias="callData", description="Encoded function call.")
    allowances: list[Allowance] = Field(
        default_factory=list,
        description="Token approvals needed for this interaction.",
    )
    inputs: list[Asset] = Field(
        default_factory=list,
        description="Input token amounts consumed by this interaction.",
    )
    outputs: list[Asset] = Field(
        default_factory=list,
        description="Output token amounts produced by this interaction.",
    )

    model_config = _WIRE_CONFIG


def _get_kind(v: Any) -> str | None:
    """Discriminator for the tagged unions.

    A missing tag returns None so that pydantic reports it instead of
    silently picking a variant.
    """
    if isinstance(v, dict):
        kind = v.get("kind")
        return kind if isinstance(kind, str) else None
    return getattr(v, "kind", None)


# Discriminated unions: pydantic uses the 'kind' field to pick the variant
Trade = Annotated[
    Annotated[Fulfillment, Tag("fulfillment")] | Annotated[JitTrade, Tag("jit")],
    Discriminator(_get_kind),
]

Interaction = Annotated[
    Annotated[LiquidityInteraction, Tag("Liquidity")]
    | Annotated[CustomInteraction, Tag("Custom")],
    Discriminator(_get_kind),
]


class Solution(BaseModel):
    """The encoded winning settlement.

    Contains clearing prices, trades, and on-chain interactions.
    """

    prices: dict[Address, Uint256] = Field(
        default_factory=dict,
        description="Uniform clearing prices. Maps token address to price.",
    )
    trades: list[Trade] = Field(
        default_factory=list,
        description="Order executions in this solution.",
    )
    interactions: list[Interaction] = Field(
        default_factory=list,
        description="On-chain interactions (AMM swaps, custom calls).",
    )

    model_config = _WIRE_CONFIG

    @classmethod
    def trivial(cls) -> "Solution":
        """Create the trivial solution: no prices, no trades, no interactions."""
        return cls(prices={}, trades=[], interactions=[])

    @property
    def is_trivial(self) -> bool:
        """Return True if this solution settles nothing."""
        return not self.prices and not self.trades and not self.interactions

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON-compatible wire dictionary (camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        """Serialize to wire JSON text."""
        return self.model_dump_json(by_alias=True)
