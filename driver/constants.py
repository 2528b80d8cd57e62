"""Protocol constants for settlement evaluation.

Bounds and lengths live in driver.models.types so that the models can use
them without importing this module; they are re-exported here.
"""

from datetime import timedelta

from driver.models.types import (
    APP_DATA_LENGTH,
    ORDER_UID_LENGTH,
    UINT32_MAX,
    UINT256_MAX,
    ZERO_ADDRESS,
)

# Orders younger than this are only settled by association
DEFAULT_MIN_ORDER_AGE = timedelta(seconds=30)

__all__ = [
    "APP_DATA_LENGTH",
    "DEFAULT_MIN_ORDER_AGE",
    "ORDER_UID_LENGTH",
    "UINT256_MAX",
    "UINT32_MAX",
    "ZERO_ADDRESS",
]
