"""
Typed views of the splitter contract's JSON return values.

U128/I128 amounts are kept as decimal strings, exactly as the contract
serializes them; ``normalize_u128``/``normalize_i128`` accept the other
shapes older deployments produced.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from loguru import logger

CIRCLE_STATES = ("open", "settlement_in_progress", "settlement_executing", "settled")
CLAIM_REASONS = ("wrong_amount", "wrong_participants", "remove_expense")
CLAIM_STATUSES = ("pending", "approved", "rejected")


def _normalize_amount(value: Any, wrapper_key: str) -> str:
    if value is None:
        return "0"
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, dict):
        for key in (wrapper_key, "0"):
            if isinstance(value.get(key), str):
                return value[key]
    logger.warning(f"Unexpected {wrapper_key} value format: {value!r}")
    return "0"


def normalize_u128(value: Any) -> str:
    return _normalize_amount(value, "U128")


def normalize_i128(value: Any) -> str:
    return _normalize_amount(value, "I128")


def parse_balance(value: Optional[str]) -> int:
    if not value:
        return 0
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid balance value: {value!r}")
        return 0


def _require(payload: Any, name: str, fields: dict[str, type | tuple[type, ...]]) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValueError(f"{name} payload must be an object, got {type(payload).__name__}")
    for key, expected in fields.items():
        value = payload.get(key)
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ValueError(f"{name}.{key} is missing or has the wrong type")
    return payload


@dataclass(frozen=True)
class MemberShare:
    account_id: str
    weight_bps: int

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "MemberShare":
        _require(payload, "MemberShare", {"account_id": str, "weight_bps": int})
        return cls(account_id=payload["account_id"], weight_bps=payload["weight_bps"])


@dataclass(frozen=True)
class Circle:
    id: str
    owner: str
    name: str
    members: list[str]
    created_ms: int
    locked: bool
    membership_open: bool
    state: str
    invite_code_hash: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Circle":
        _require(
            payload,
            "Circle",
            {
                "id": str,
                "owner": str,
                "name": str,
                "members": list,
                "created_ms": int,
                "locked": bool,
                "membership_open": bool,
                "state": str,
            },
        )
        if payload["state"] not in CIRCLE_STATES:
            raise ValueError(f"Circle.state has unknown value {payload['state']!r}")
        return cls(
            id=payload["id"],
            owner=payload["owner"],
            name=payload["name"],
            members=list(payload["members"]),
            created_ms=payload["created_ms"],
            locked=payload["locked"],
            membership_open=payload["membership_open"],
            state=payload["state"],
            invite_code_hash=payload.get("invite_code_hash"),
        )

    def is_member(self, account_id: str) -> bool:
        return account_id in self.members


@dataclass(frozen=True)
class Expense:
    id: str
    circle_id: str
    payer: str
    participants: list[MemberShare]
    amount_yocto: str
    memo: str
    ts_ms: int

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Expense":
        _require(
            payload,
            "Expense",
            {
                "id": str,
                "circle_id": str,
                "payer": str,
                "participants": list,
                "amount_yocto": (str, dict, int),
                "memo": str,
                "ts_ms": int,
            },
        )
        return cls(
            id=payload["id"],
            circle_id=payload["circle_id"],
            payer=payload["payer"],
            participants=[MemberShare.from_dict(share) for share in payload["participants"]],
            amount_yocto=normalize_u128(payload["amount_yocto"]),
            memo=payload["memo"],
            ts_ms=payload["ts_ms"],
        )


@dataclass(frozen=True)
class Settlement:
    circle_id: str
    from_account: str
    to_account: str
    amount: str
    ts_ms: int
    tx_kind: str
    token: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Settlement":
        _require(payload, "Settlement", {"circle_id": str, "from": str, "to": str, "ts_ms": int})
        return cls(
            circle_id=payload["circle_id"],
            from_account=payload["from"],
            to_account=payload["to"],
            amount=normalize_u128(payload.get("amount")),
            ts_ms=payload["ts_ms"],
            tx_kind=str(payload.get("tx_kind", "")),
            token=payload.get("token"),
        )


@dataclass(frozen=True)
class BalanceView:
    """Net position of one member. Positive = creditor, negative = debtor."""

    account_id: str
    net: str

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "BalanceView":
        _require(payload, "BalanceView", {"account_id": str})
        return cls(account_id=payload["account_id"], net=normalize_i128(payload.get("net")))

    @property
    def net_yocto(self) -> int:
        return parse_balance(self.net)

    @property
    def is_debtor(self) -> bool:
        return self.net.startswith("-")


@dataclass(frozen=True)
class SettlementSuggestion:
    from_account: str
    to_account: str
    amount: str
    token: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "SettlementSuggestion":
        _require(payload, "SettlementSuggestion", {"from": str, "to": str})
        return cls(
            from_account=payload["from"],
            to_account=payload["to"],
            amount=normalize_u128(payload.get("amount")),
            token=payload.get("token"),
        )


@dataclass(frozen=True)
class StorageBalanceBounds:
    min: str
    max: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "StorageBalanceBounds":
        _require(payload, "StorageBalanceBounds", {})
        raw_max = payload.get("max")
        return cls(min=normalize_u128(payload.get("min")), max=None if raw_max is None else normalize_u128(raw_max))


@dataclass(frozen=True)
class StorageBalance:
    total: str
    available: str

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "StorageBalance":
        _require(payload, "StorageBalance", {})
        return cls(total=normalize_u128(payload.get("total")), available=normalize_u128(payload.get("available")))


@dataclass(frozen=True)
class Claim:
    id: str
    circle_id: str
    expense_id: str
    claimant: str
    reason: str
    status: str
    created_ms: int
    proposed_amount: Optional[str] = None
    proposed_participants: Optional[list[MemberShare]] = None
    resolved_ms: Optional[int] = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Claim":
        _require(
            payload,
            "Claim",
            {
                "id": str,
                "circle_id": str,
                "expense_id": str,
                "claimant": str,
                "reason": str,
                "status": str,
                "created_ms": int,
            },
        )
        if payload["reason"] not in CLAIM_REASONS:
            raise ValueError(f"Claim.reason has unknown value {payload['reason']!r}")
        if payload["status"] not in CLAIM_STATUSES:
            raise ValueError(f"Claim.status has unknown value {payload['status']!r}")
        participants = payload.get("proposed_participants")
        known = {
            "id", "circle_id", "expense_id", "claimant", "reason", "status",
            "created_ms", "proposed_amount", "proposed_participants", "resolved_ms",
        }
        return cls(
            id=payload["id"],
            circle_id=payload["circle_id"],
            expense_id=payload["expense_id"],
            claimant=payload["claimant"],
            reason=payload["reason"],
            status=payload["status"],
            created_ms=payload["created_ms"],
            proposed_amount=(
                None if payload.get("proposed_amount") is None else normalize_u128(payload["proposed_amount"])
            ),
            proposed_participants=(
                None if participants is None else [MemberShare.from_dict(share) for share in participants]
            ),
            resolved_ms=payload.get("resolved_ms"),
            extra={key: value for key, value in payload.items() if key not in known},
        )

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"


__all__ = [
    "BalanceView",
    "CIRCLE_STATES",
    "CLAIM_REASONS",
    "CLAIM_STATUSES",
    "Circle",
    "Claim",
    "Expense",
    "MemberShare",
    "Settlement",
    "SettlementSuggestion",
    "StorageBalance",
    "StorageBalanceBounds",
    "normalize_i128",
    "normalize_u128",
    "parse_balance",
]
