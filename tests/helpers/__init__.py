"""Test helpers module for shared test utilities.

- constants: Token addresses, the frozen test clock time, common amounts
- factories: Order, trade, settlement and rating factories plus test doubles
"""

from tests.helpers.constants import (
    DAI,
    GWEI,
    NOW,
    ONE_ETH,
    SETTLEMENT_CONTRACT,
    UNISWAP_V2_ROUTER,
    USDC,
    WETH,
)
from tests.helpers.factories import (
    FixedClock,
    StaticRater,
    aged,
    make_order,
    make_rating,
    make_settlement,
    trade,
    uid,
)

__all__ = [
    # Constants
    "WETH",
    "USDC",
    "DAI",
    "UNISWAP_V2_ROUTER",
    "SETTLEMENT_CONTRACT",
    "NOW",
    "ONE_ETH",
    "GWEI",
    # Factories
    "FixedClock",
    "StaticRater",
    "aged",
    "make_order",
    "make_rating",
    "make_settlement",
    "trade",
    "uid",
]
