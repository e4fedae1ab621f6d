from __future__ import annotations

import base64
import binascii
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

YOCTO_PER_NEAR = Decimal(10) ** 24


def base64_encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def base64_decode(value: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 payload: {exc}") from exc


def format_near_amount(amount: str | int, fraction_digits: int = 2) -> str:
    """Render a yoctoNEAR amount (U128/I128 string) as NEAR."""
    try:
        value = Decimal(str(amount).strip()) / YOCTO_PER_NEAR
    except InvalidOperation:
        return str(amount)
    quantum = Decimal(1).scaleb(-fraction_digits)
    return f"{value.quantize(quantum, rounding=ROUND_HALF_UP):,}"


def parse_near_amount(amount: str) -> str:
    """Convert a human NEAR amount to a yoctoNEAR string."""
    trimmed = amount.strip()
    try:
        value = Decimal(trimmed)
    except InvalidOperation:
        raise ValueError(f"Invalid NEAR amount: {amount}") from None
    if not value.is_finite():
        raise ValueError(f"Invalid NEAR amount: {amount}")
    yocto = value * YOCTO_PER_NEAR
    if yocto != yocto.to_integral_value():
        raise ValueError(f"NEAR amount has more than 24 decimals: {amount}")
    return str(int(yocto))


def shorten_account_id(account_id: str, chars: int = 6) -> str:
    if len(account_id) <= chars * 2:
        return account_id
    return f"{account_id[:chars]}…{account_id[-chars:]}"
