"""Encoding of the winning settlement into the wire solution format.

No economic validation happens here: the settlement has already been
filtered and ranked. Encoding only fails on malformed data, and then loudly
with EncodingError, since substituting a default would change what gets
executed on-chain.
"""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import ValidationError

from driver.errors import EncodingError
from driver.models import settlement as domain
from driver.models.solution import (
    Allowance,
    Asset,
    CustomInteraction,
    Fulfillment,
    JitOrder,
    JitTrade,
    LiquidityInteraction,
    Solution,
)
logger = structlog.get_logger()

# Order fields that are optional in the auction but required for a JIT order
JIT_ONLY_FIELDS = ("receiver", "valid_to", "signing_scheme", "signature")


def encode_trade(trade: domain.Trade) -> Fulfillment | JitTrade:
    """Encode a trade.

    User orders exist in the auction and are referenced by uid. Liquidity
    orders are created by the solver, so the full order is sent as a JIT order.

    Raises:
        EncodingError: If a liquidity order lacks data a JIT order needs
    """
    if trade.is_user_trade:
        return Fulfillment(order=trade.order.uid, executed_amount=trade.executed_amount)

    order = trade.order
    missing = [name for name in JIT_ONLY_FIELDS if getattr(order, name) is None]
    if missing:
        raise EncodingError(
            f"Liquidity order {order.uid} cannot be sent as a JIT order, "
            f"missing: {', '.join(missing)}"
        )
    return JitTrade(
        order=JitOrder(
            sell_token=order.sell_token,
            buy_token=order.buy_token,
            receiver=order.receiver,
            sell_amount=order.sell_amount,
            buy_amount=order.buy_amount,
            valid_to=order.valid_to,
            app_data=order.app_data,
            fee_amount=order.fee_amount,
            kind=order.kind,
            partially_fillable=order.partially_fillable,
            sell_token_balance=order.sell_token_balance,
            buy_token_balance=order.buy_token_balance,
            signing_scheme=order.signing_scheme,
            signature=order.signature,
        ),
        executed_amount=trade.executed_amount,
    )


def encode_interaction(
    interaction: domain.Interaction,
) -> LiquidityInteraction | CustomInteraction:
    """Encode a liquidity or custom interaction."""
    if isinstance(interaction, domain.LiquidityInteraction):
        return LiquidityInteraction(
            internalize=interaction.internalize,
            id=interaction.id,
            input_token=interaction.input.token,
            output_token=interaction.output.token,
            input_amount=interaction.input.amount,
            output_amount=interaction.output.amount,
        )
    if isinstance(interaction, domain.CustomInteraction):
        return CustomInteraction(
            internalize=interaction.internalize,
            target=interaction.target,
            value=interaction.value,
            call_data=interaction.call_data,
            allowances=[
                Allowance(token=a.token, spender=a.spender, amount=a.amount)
                for a in interaction.allowances
            ],
            inputs=[Asset(token=a.token, amount=a.amount) for a in interaction.inputs],
            outputs=[Asset(token=a.token, amount=a.amount) for a in interaction.outputs],
        )
    raise EncodingError(f"Unsupported interaction type: {type(interaction).__name__}")


def encode_solution(settlement: domain.Settlement) -> Solution:
    """Convert a settlement into the canonical wire solution.

    Raises:
        EncodingError: If any field cannot be represented in the wire format
    """
    try:
        solution = Solution(
            prices=dict(settlement.prices),
            trades=[encode_trade(trade) for trade in settlement.trades],
            interactions=[encode_interaction(i) for i in settlement.interactions],
        )
    except ValidationError as err:
        raise EncodingError(f"Settlement cannot be encoded: {err}") from err

    logger.debug(
        "solution_encoded",
        prices=len(solution.prices),
        trades=len(solution.trades),
        interactions=len(solution.interactions),
    )
    return solution


def encode_solution_json(settlement: domain.Settlement) -> str:
    """Encode a settlement straight to wire JSON text."""
    return encode_solution(settlement).to_json()


def decode_solution(data: str | bytes | dict[str, Any]) -> Solution:
    """Parse a wire solution.

    Unknown or missing ``kind`` tags and unknown enumeration values are
    rejected rather than defaulted.

    Raises:
        EncodingError: If the payload is not a valid solution
    """
    try:
        if isinstance(data, str | bytes):
            return Solution.model_validate_json(data)
        return Solution.model_validate(data)
    except ValidationError as err:
        raise EncodingError(f"Invalid solution payload: {err}") from err
