"""Objective value of a settlement.

    objective_value = surplus + solver_fees - gas_estimate * gas_price

All quantities are denominated in wei and computed with exact rationals.
Floats are rejected: two settlements with the same economic outcome must
compare exactly equal, whatever order the terms were computed in.
"""

from __future__ import annotations

from fractions import Fraction
from numbers import Rational

from driver.models.types import check_uint256

Rationalish = Fraction | int


def to_rational(value: Rationalish) -> Fraction:
    """Promote an exact number to a Fraction.

    Raises:
        TypeError: If value is not an int or Fraction (floats included)
    """
    if isinstance(value, bool) or not isinstance(value, Rational):
        raise TypeError(f"Expected an exact rational, got {type(value).__name__}")
    return Fraction(value)


def u256_to_rational(value: int) -> Fraction:
    """Convert a uint256 integer (e.g. a gas estimate) to a Fraction.

    Raises:
        ValueError: If value is outside the uint256 range
    """
    return Fraction(check_uint256(value))


def compute_objective_value(
    surplus: Rationalish,
    solver_fees: Rationalish,
    gas_estimate: Rationalish,
    gas_price: Rationalish,
) -> Fraction:
    """Net value of a settlement in wei.

    Args:
        surplus: Surplus the settlement gives to users
        solver_fees: Fees the settlement collects
        gas_estimate: Gas units needed to execute the settlement
        gas_price: Wei per gas unit

    Returns:
        surplus + solver_fees - gas_estimate * gas_price, exactly
    """
    cost = to_rational(gas_estimate) * to_rational(gas_price)
    return to_rational(surplus) + to_rational(solver_fees) - cost
