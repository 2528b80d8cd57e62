"""In-memory order model.

Orders reach the driver already validated by the order book; the pydantic
types here only guard the invariants the evaluation core relies on (uid
length, uint256 ranges, closed enumerations).
"""

from enum import Enum

from pydantic import AwareDatetime

from driver.models.base import DomainModel
from driver.models.types import (
    ZERO_APP_DATA,
    Address,
    Bytes,
    Digest,
    OrderUid,
    Uint32,
    Uint256Int,
)


class OrderClass(str, Enum):
    """Classification of the order."""

    MARKET = "market"
    LIMIT = "limit"
    LIQUIDITY = "liquidity"

    @property
    def is_user_class(self) -> bool:
        """Market and limit orders are placed by users; liquidity orders are not."""
        return self is not OrderClass.LIQUIDITY


class OrderKind(str, Enum):
    """Whether the order is a sell or buy order."""

    SELL = "sell"
    BUY = "buy"


class SigningScheme(str, Enum):
    """How the order was signed."""

    EIP712 = "eip712"
    ETHSIGN = "ethsign"
    PRESIGN = "presign"
    EIP1271 = "eip1271"


class SellTokenBalance(str, Enum):
    """Where to source the sell token balance."""

    ERC20 = "erc20"
    INTERNAL = "internal"
    EXTERNAL = "external"


class BuyTokenBalance(str, Enum):
    """Where to send the buy token."""

    ERC20 = "erc20"
    INTERNAL = "internal"


class Order(DomainModel):
    """An order as seen by the settlement evaluation core.

    Only ``uid``, ``creation_date`` and ``class_`` matter for maturity
    filtering. ``receiver``, ``valid_to``, ``signing_scheme`` and
    ``signature`` are only needed to send a liquidity order as a JIT order;
    encoding fails if they are missing there.
    """

    uid: OrderUid
    creation_date: AwareDatetime
    class_: OrderClass = OrderClass.MARKET
    sell_token: Address
    buy_token: Address
    sell_amount: Uint256Int
    buy_amount: Uint256Int
    fee_amount: Uint256Int = 0
    kind: OrderKind
    partially_fillable: bool = False
    sell_token_balance: SellTokenBalance = SellTokenBalance.ERC20
    buy_token_balance: BuyTokenBalance = BuyTokenBalance.ERC20
    app_data: Digest = ZERO_APP_DATA

    receiver: Address | None = None
    valid_to: Uint32 | None = None
    signing_scheme: SigningScheme | None = None
    signature: Bytes | None = None

    @property
    def is_user_order(self) -> bool:
        """Return True for market and limit orders."""
        return self.class_.is_user_class
