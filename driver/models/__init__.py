"""Data models for settlement evaluation and solution encoding."""

from driver.models.order import (
    BuyTokenBalance,
    Order,
    OrderClass,
    OrderKind,
    SellTokenBalance,
    SigningScheme,
)
from driver.models.settlement import (
    Allowance,
    Asset,
    CustomInteraction,
    Interaction,
    LiquidityInteraction,
    Settlement,
    Trade,
)
from driver.models.solution import Solution
from driver.models.types import Address, Bytes, OrderUid, Uint256

__all__ = [
    # Types
    "Address",
    "Bytes",
    "OrderUid",
    "Uint256",
    # Orders
    "Order",
    "OrderClass",
    "OrderKind",
    "SellTokenBalance",
    "BuyTokenBalance",
    "SigningScheme",
    # Settlements
    "Settlement",
    "Trade",
    "Interaction",
    "LiquidityInteraction",
    "CustomInteraction",
    "Allowance",
    "Asset",
    # Wire solution
    "Solution",
]
