"""Driver configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta

from driver.constants import DEFAULT_MIN_ORDER_AGE

_TRUE_VALUES = ("true", "1", "yes")


@dataclass(frozen=True)
class DriverConfig:
    """Configuration for one evaluation pass.

    Attributes:
        min_order_age: User orders at least this old are mature by age.
        drop_unencodable_settlements: If True, a ranked settlement that fails
            to encode is dropped and the next one is tried. If False, the
            EncodingError propagates to the caller.
    """

    min_order_age: timedelta = DEFAULT_MIN_ORDER_AGE
    drop_unencodable_settlements: bool = True

    def __post_init__(self) -> None:
        if self.min_order_age < timedelta(0):
            raise ValueError(f"min_order_age must not be negative: {self.min_order_age}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> DriverConfig:
        """Build a config from environment variables.

        Variables:
        - DRIVER_MIN_ORDER_AGE_SECS: minimum order age in seconds (default: 30)
        - DRIVER_DROP_UNENCODABLE: drop settlements that fail to encode (default: true)
        """
        env = os.environ if environ is None else environ
        min_age = env.get("DRIVER_MIN_ORDER_AGE_SECS")
        drop = env.get("DRIVER_DROP_UNENCODABLE")
        return cls(
            min_order_age=(
                timedelta(seconds=float(min_age)) if min_age is not None else DEFAULT_MIN_ORDER_AGE
            ),
            drop_unencodable_settlements=(
                drop.lower() in _TRUE_VALUES if drop is not None else True
            ),
        )


# Default configuration instance
DEFAULT_DRIVER_CONFIG = DriverConfig()
