"""Shared type definitions for settlement and solution models.

The same annotated types validate both the in-memory models and the wire
format. Hex values are always held as lowercase 0x-prefixed strings; raw
bytes are accepted and converted on input.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

# Maximum uint256 value
UINT256_MAX = 2**256 - 1

# Order validity timestamps are uint32 seconds
UINT32_MAX = 2**32 - 1

# Order UID = 32-byte order digest + 20-byte owner + 4-byte validTo
ORDER_UID_LENGTH = 56

# App data is a 32-byte hash
APP_DATA_LENGTH = 32

ZERO_ADDRESS = "0x" + "00" * 20

# Empty app data
ZERO_APP_DATA = "0x" + "00" * APP_DATA_LENGTH


def validate_uint256(value: Any) -> str:
    """Validate that a value is a valid uint256 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid uint256 as decimal string

    Raises:
        ValueError: If value is not a valid non-negative integer within uint256 range
    """
    # bool is an int subclass but never a token amount
    if isinstance(value, bool):
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if isinstance(value, int):
        check_uint256(value)
        return str(value)

    if not isinstance(value, str):
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    # Only plain decimal digits: no sign, exponent, underscores or whitespace
    if not value.isascii() or not value.isdigit():
        raise ValueError(f"Uint256 must be a decimal integer string: '{value}'")

    int_value = int(value)
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")

    # Canonical form, no leading zeros
    return str(int_value)


def check_uint256(value: int) -> int:
    """Check that an integer fits in a uint256 and return it unchanged.

    Raises:
        ValueError: If value is negative or exceeds 2^256-1
    """
    if value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
    return value


def validate_uint256_int(value: Any) -> int:
    """Same checks as validate_uint256, keeping the value as an int."""
    return int(validate_uint256(value))


def lowercase_hex(value: Any) -> Any:
    """Accept raw bytes and mixed-case hex; other values are left to the pattern check."""
    if isinstance(value, bytes | bytearray):
        return to_hex(bytes(value))
    if isinstance(value, str):
        return value.lower()
    return value


# Ethereum address (40 hex chars after 0x prefix)
Address = Annotated[str, BeforeValidator(lowercase_hex), Field(pattern=r"^0x[a-f0-9]{40}$")]

# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]

# 256-bit unsigned integer held as an int, for arithmetic in the domain models
Uint256Int = Annotated[int, BeforeValidator(validate_uint256_int)]

# Order validity timestamp
Uint32 = Annotated[int, Field(ge=0, le=UINT32_MAX)]

# Arbitrary hex bytes
Bytes = Annotated[str, BeforeValidator(lowercase_hex), Field(pattern=r"^0x([a-f0-9]{2})*$")]

# 32-byte hash (app data)
Digest = Annotated[str, BeforeValidator(lowercase_hex), Field(pattern=r"^0x[a-f0-9]{64}$")]

# Order UID (56 bytes = 112 hex chars)
OrderUid = Annotated[str, BeforeValidator(lowercase_hex), Field(pattern=r"^0x[a-f0-9]{112}$")]


def to_hex(data: bytes) -> str:
    """Render bytes as lowercase 0x-prefixed hex."""
    return "0x" + data.hex()
