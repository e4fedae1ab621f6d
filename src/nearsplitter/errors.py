"""
User-facing error messages.

Contract panics and node failures arrive as raw text. ``decode_near_error``
maps that text to a short message through an ordered pattern table
(first match wins); ``is_not_found_error`` tells callers when a failure
only means a stale reference.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

UNKNOWN_ERROR = "Unknown error"

PANIC_ENVELOPE = re.compile(r'panicked:\s*(?P<inner>.+?)(?:\\?"|\n|$)', re.IGNORECASE)
NOT_FOUND = re.compile(r"not found|does not exist", re.IGNORECASE)


@dataclass(frozen=True)
class ErrorPattern:
    matcher: re.Pattern[str]
    friendly_message: str

    def matches(self, text: str) -> bool:
        return self.matcher.search(text) is not None


def _pattern(regex: str, message: str) -> ErrorPattern:
    return ErrorPattern(re.compile(regex, re.IGNORECASE), message)


ERROR_PATTERNS: tuple[ErrorPattern, ...] = (
    # Missing entities
    _pattern(r"Circle not found", "Circle not found. It may have been deleted or the ID is wrong."),
    _pattern(r"Expense not found", "Expense not found. It may have been deleted."),
    _pattern(r"Claim not found", "Claim not found. It may have been resolved already."),
    # Membership
    _pattern(r"Already a member", "You are already a member of this circle."),
    _pattern(r"Invalid invite code hash", "This circle has a malformed invite code. Ask the owner to reset it."),
    _pattern(r"Invalid invite code", "The invite code is incorrect."),
    _pattern(r"requires an invite code", "This circle requires an invite code."),
    _pattern(r"not accepting new members", "This circle is not accepting new members."),
    _pattern(r"maximum member limit", "This circle has reached its member limit."),
    _pattern(
        r"Not a member of this circle|Payer must be member|Recipient must be member",
        "That account is not a member of this circle.",
    ),
    _pattern(r"Owner cannot leave", "The owner cannot leave the circle. Transfer ownership first."),
    _pattern(r"Only (?:the )?(?:circle )?owner", "Only the circle owner can perform this action."),
    # Storage
    _pattern(
        r"storage_deposit|Account not registered",
        "Your account needs a storage deposit before using this circle. Register storage and try again.",
    ),
    _pattern(r"No available storage balance", "There is no storage balance available to withdraw."),
    # Settlement
    _pattern(
        r"locked for settlement|while circle is locked|during settlement|Circle state implies locked",
        "This circle is locked for settlement. Finish or reset the settlement first.",
    ),
    _pattern(r"Cannot leave until circle is settled", "You can leave once the circle is settled."),
    _pattern(
        r"Cannot leave with non-zero balance",
        "You cannot leave while you have an outstanding balance. Settle up first.",
    ),
    _pattern(r"escrowed funds", "Withdraw your escrowed funds first."),
    _pattern(
        r"Must deposit at least|Attach deposit|Escrow underflow",
        "Insufficient deposit attached for this action.",
    ),
    _pattern(r"No pending payouts|Insufficient pending balance", "There is nothing to withdraw."),
    _pattern(r"Cannot pay yourself", "You cannot pay yourself."),
    # Claims
    _pattern(r"already have a pending claim", "You already have a pending claim on this expense."),
    _pattern(r"with pending claims", "Resolve the pending claims first."),
    _pattern(r"Claim is not pending", "This claim has already been resolved."),
    _pattern(r"Reason too long", "The claim reason is too long."),
    # Input validation
    _pattern(r"Amount must be positive", "Amount must be greater than zero."),
    _pattern(r"Shares must sum to 10_000 bps", "Shares must add up to 100%."),
    _pattern(r"Share weight", "Each share must be between 0% and 100%."),
    _pattern(r"At least one share|participants cannot be empty", "Add at least one participant."),
    _pattern(r"Memo too long", "The memo is too long (max 1024 bytes)."),
    _pattern(r"Circle name cannot be empty", "Enter a circle name."),
    _pattern(r"Circle name too long", "The circle name is too long (max 256 bytes)."),
    # Node / network
    _pattern(
        r"\b429\b|Too Many Requests|rate.?limit",
        "The NEAR network is busy right now. Please try again in a moment.",
    ),
    _pattern(
        r"Network request failed|failed to fetch|connection (?:refused|reset)",
        "Could not reach the NEAR network. Check your connection and try again.",
    ),
    _pattern(r"UNKNOWN_ACCOUNT|account \S+ does not exist", "That account does not exist on this network."),
)


def error_text(error: Any) -> str:
    if isinstance(error, str):
        return error
    if isinstance(error, BaseException):
        return str(error)
    if isinstance(error, dict) and "message" in error:
        return str(error["message"])
    return str(error)


def extract_panic_message(text: str) -> Optional[str]:
    match = PANIC_ENVELOPE.search(text)
    if match is None:
        return None
    inner = match.group("inner").strip().rstrip("\\").strip()
    return inner or None


def decode_near_error(
    error: Any,
    patterns: tuple[ErrorPattern, ...] = ERROR_PATTERNS,
) -> str:
    """
    Turn a raw RPC or contract failure into a message fit for display.

    Args:
        error: Exception, string, ``{"message": ...}`` mapping, or None.
        patterns: Ordered pattern table; first match wins.

    Returns:
        The friendly message of the first matching pattern, else the
        extracted panic message, else the original text.
    """
    if error is None:
        return UNKNOWN_ERROR

    text = error_text(error)
    inner = extract_panic_message(text)
    normalized = inner if inner is not None else text

    for pattern in patterns:
        if pattern.matches(normalized):
            return pattern.friendly_message

    if inner is not None:
        return inner
    return text


def is_not_found_error(error: Any) -> bool:
    if error is None:
        return False
    return NOT_FOUND.search(error_text(error)) is not None


__all__ = [
    "ERROR_PATTERNS",
    "ErrorPattern",
    "UNKNOWN_ERROR",
    "decode_near_error",
    "error_text",
    "extract_panic_message",
    "is_not_found_error",
]
