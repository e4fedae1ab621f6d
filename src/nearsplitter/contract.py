"""
Read-only views of the near splitter contract.

Each method is one ``call_function`` query through the failover
transport, with the JSON result converted to the matching model.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .config import AppConfig, load_config
from .models import (
    CLAIM_STATUSES,
    BalanceView,
    Circle,
    Claim,
    Expense,
    Settlement,
    SettlementSuggestion,
    StorageBalance,
    StorageBalanceBounds,
    normalize_u128,
)
from .rpc.transport import FailoverTransport

DEFAULT_PAGE_SIZE = 50


def build_transport(config: AppConfig, **kwargs: Any) -> FailoverTransport:
    return FailoverTransport(config.endpoints, timeout=config.timeout, **kwargs)


async def view_function(
    method_name: str,
    args: Optional[Mapping[str, Any]] = None,
    config: Optional[AppConfig] = None,
) -> Any:
    """One-off view call using the environment configuration."""
    config = config or load_config()
    contract_id = config.require_contract_id()
    async with build_transport(config) as transport:
        return await transport.view(contract_id, method_name, args)


class SplitterContract:
    def __init__(self, transport: FailoverTransport, contract_id: str) -> None:
        self.transport = transport
        self.contract_id = contract_id

    @classmethod
    def from_config(cls, config: AppConfig, **transport_kwargs: Any) -> "SplitterContract":
        return cls(build_transport(config, **transport_kwargs), config.require_contract_id())

    async def __aenter__(self) -> "SplitterContract":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.transport.__aexit__(*exc_info)

    async def view(self, method_name: str, args: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.transport.view(self.contract_id, method_name, args)

    # ---- circles ----

    async def get_circle(self, circle_id: str) -> Circle:
        return Circle.from_dict(await self.view("get_circle", {"circle_id": circle_id}))

    async def list_circles_by_owner(
        self, owner: str, from_index: int = 0, limit: int = DEFAULT_PAGE_SIZE
    ) -> list[Circle]:
        rows = await self.view("list_circles_by_owner", {"owner": owner, "from": from_index, "limit": limit})
        return [Circle.from_dict(row) for row in rows or []]

    async def list_circles_by_member(
        self, account_id: str, from_index: int = 0, limit: int = DEFAULT_PAGE_SIZE
    ) -> list[Circle]:
        rows = await self.view(
            "list_circles_by_member", {"account_id": account_id, "from": from_index, "limit": limit}
        )
        return [Circle.from_dict(row) for row in rows or []]

    async def is_membership_open(self, circle_id: str) -> bool:
        return bool(await self.view("is_membership_open", {"circle_id": circle_id}))

    # ---- ledger ----

    async def list_expenses(
        self, circle_id: str, from_index: int = 0, limit: int = DEFAULT_PAGE_SIZE
    ) -> list[Expense]:
        rows = await self.view("list_expenses", {"circle_id": circle_id, "from": from_index, "limit": limit})
        return [Expense.from_dict(row) for row in rows or []]

    async def list_settlements(
        self, circle_id: str, from_index: int = 0, limit: int = DEFAULT_PAGE_SIZE
    ) -> list[Settlement]:
        rows = await self.view("list_settlements", {"circle_id": circle_id, "from": from_index, "limit": limit})
        return [Settlement.from_dict(row) for row in rows or []]

    async def compute_balances(self, circle_id: str) -> list[BalanceView]:
        rows = await self.view("compute_balances", {"circle_id": circle_id})
        return [BalanceView.from_dict(row) for row in rows or []]

    async def suggest_settlements(self, circle_id: str) -> list[SettlementSuggestion]:
        rows = await self.view("suggest_settlements", {"circle_id": circle_id})
        return [SettlementSuggestion.from_dict(row) for row in rows or []]

    # ---- storage ----

    async def storage_balance_bounds(self) -> StorageBalanceBounds:
        return StorageBalanceBounds.from_dict(await self.view("storage_balance_bounds"))

    async def storage_balance_of(self, account_id: str) -> Optional[StorageBalance]:
        payload = await self.view("storage_balance_of", {"account_id": account_id})
        return None if payload is None else StorageBalance.from_dict(payload)

    # ---- settlement / autopay ----

    async def get_confirmations(self, circle_id: str) -> list[str]:
        return list(await self.view("get_confirmations", {"circle_id": circle_id}) or [])

    async def is_fully_confirmed(self, circle_id: str) -> bool:
        return bool(await self.view("is_fully_confirmed", {"circle_id": circle_id}))

    async def get_autopay(self, circle_id: str, account_id: str) -> bool:
        return bool(await self.view("get_autopay", {"circle_id": circle_id, "account_id": account_id}))

    async def all_members_autopay(self, circle_id: str) -> bool:
        return bool(await self.view("all_members_autopay", {"circle_id": circle_id}))

    async def get_required_autopay_deposit(self, circle_id: str, account_id: str) -> str:
        return normalize_u128(
            await self.view("get_required_autopay_deposit", {"circle_id": circle_id, "account_id": account_id})
        )

    async def get_escrow_deposit(self, circle_id: str, account_id: str) -> str:
        return normalize_u128(
            await self.view("get_escrow_deposit", {"circle_id": circle_id, "account_id": account_id})
        )

    async def get_pending_payout(self, account_id: str) -> str:
        return normalize_u128(await self.view("get_pending_payout", {"account_id": account_id}))

    # ---- claims ----

    async def list_claims(
        self,
        circle_id: str,
        status: Optional[str] = None,
        from_index: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> list[Claim]:
        args: dict[str, Any] = {"circle_id": circle_id, "from": from_index, "limit": limit}
        if status is not None:
            if status not in CLAIM_STATUSES:
                raise ValueError(f"Unknown claim status {status!r}; expected one of: {', '.join(CLAIM_STATUSES)}")
            args["status"] = status
        rows = await self.view("list_claims", args)
        return [Claim.from_dict(row) for row in rows or []]

    async def get_claim(self, circle_id: str, claim_id: str) -> Optional[Claim]:
        payload = await self.view("get_claim", {"circle_id": circle_id, "claim_id": claim_id})
        return None if payload is None else Claim.from_dict(payload)

    async def get_expense_claims(self, circle_id: str, expense_id: str) -> list[Claim]:
        rows = await self.view("get_expense_claims", {"circle_id": circle_id, "expense_id": expense_id})
        return [Claim.from_dict(row) for row in rows or []]

    async def get_pending_claims_count(self, circle_id: str) -> int:
        return int(await self.view("get_pending_claims_count", {"circle_id": circle_id}) or 0)
