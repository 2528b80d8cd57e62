"""Settlement evaluation core for batch auctions.

Filters candidate settlements by order maturity, ranks them by objective
value and encodes the winner into the canonical solution format.
"""

from driver.auction import AuctionOutcome, evaluate_auction
from driver.config import DEFAULT_DRIVER_CONFIG, DriverConfig
from driver.encoding import decode_solution, encode_solution
from driver.maturity import has_user_order, retain_mature_settlements
from driver.objective import compute_objective_value
from driver.rating import RatedSettlement, SettlementRating, rank_settlements

__version__ = "0.1.0"
__all__ = [
    "AuctionOutcome",
    "DEFAULT_DRIVER_CONFIG",
    "DriverConfig",
    "RatedSettlement",
    "SettlementRating",
    "__version__",
    "compute_objective_value",
    "decode_solution",
    "encode_solution",
    "evaluate_auction",
    "has_user_order",
    "rank_settlements",
    "retain_mature_settlements",
]
