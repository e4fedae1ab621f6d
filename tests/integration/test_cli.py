"""
CLI integration tests using Click's test runner.

RPC traffic is served by the FakeNodes fixture through an
httpx.MockTransport, so no network access is needed.
"""

from __future__ import annotations

import json

import httpx
import pytest
from click.testing import CliRunner

import nearsplitter.contract as contract_module
from nearsplitter import __version__
from nearsplitter.cli import cli
from nearsplitter.config import NETWORKS

TESTNET_PRIMARY_HOST = httpx.URL(NETWORKS["testnet"].node_url).host


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    for name in ("NEAR_NETWORK", "NEAR_RPC_URL", "NEAR_RPC_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    return {"NEAR_CONTRACT_ID": "splitter.testnet"}


@pytest.fixture()
def mocked_rpc(monkeypatch: pytest.MonkeyPatch, nodes):
    real_build = contract_module.build_transport

    def _build(config, **kwargs):
        return real_build(config, http_transport=httpx.MockTransport(nodes), **kwargs)

    monkeypatch.setattr(contract_module, "build_transport", _build)
    return nodes


class TestVersionAndInfo:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_info_lists_endpoints_in_order(self, runner: CliRunner, env: dict[str, str]) -> None:
        result = runner.invoke(cli, ["info", "--rpc-url", "https://mine.rpc"], env=env)
        assert result.exit_code == 0
        lines = [line.strip() for line in result.output.splitlines()]
        assert "1. https://mine.rpc (primary)" in lines
        assert f"2. {NETWORKS['testnet'].node_url} (fallback)" in lines

    def test_info_unknown_network(self, runner: CliRunner, env: dict[str, str]) -> None:
        result = runner.invoke(cli, ["info", "--network", "betanet"], env=env)
        assert result.exit_code == 2
        assert "Unsupported NEAR network" in result.output


class TestView:
    def test_view_prints_json(self, runner: CliRunner, env: dict[str, str], mocked_rpc) -> None:
        mocked_rpc.ok(TESTNET_PRIMARY_HOST, {"memo": "café ☕"})
        result = runner.invoke(cli, ["view", "get_expense", "--args", '{"id": "e1"}'], env=env)
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"memo": "café ☕"}

    def test_view_rejects_non_object_args(self, runner: CliRunner, env: dict[str, str]) -> None:
        result = runner.invoke(cli, ["view", "get_circle", "--args", "[1, 2]"], env=env)
        assert result.exit_code == 1
        assert "Invalid args" in result.output

    def test_view_requires_contract(self, runner: CliRunner, env: dict[str, str], monkeypatch) -> None:
        monkeypatch.delenv("NEAR_CONTRACT_ID", raising=False)
        result = runner.invoke(cli, ["view", "get_circle"], env={})
        assert result.exit_code == 2
        assert "NEAR_CONTRACT_ID" in result.output

    def test_view_translates_contract_panic(self, runner: CliRunner, env: dict[str, str], mocked_rpc) -> None:
        mocked_rpc.rpc_error(TESTNET_PRIMARY_HOST, "Server error", data="Smart contract panicked: Already a member")
        result = runner.invoke(cli, ["view", "get_circle"], env=env)
        assert result.exit_code == 4
        assert "You are already a member of this circle." in result.output


class TestCircle:
    CIRCLE = {
        "id": "c1",
        "owner": "alice.testnet",
        "name": "Flat",
        "members": ["alice.testnet", "bob.testnet"],
        "created_ms": 1,
        "locked": False,
        "membership_open": False,
        "state": "open",
    }

    def test_circle_report(self, runner: CliRunner, env: dict[str, str], mocked_rpc) -> None:
        (
            mocked_rpc.ok(TESTNET_PRIMARY_HOST, self.CIRCLE)
            .ok(TESTNET_PRIMARY_HOST, [{"account_id": "bob.testnet", "net": "-1000000000000000000000000"}])
            .ok(TESTNET_PRIMARY_HOST, [{"from": "bob.testnet", "to": "alice.testnet", "amount": "1000000000000000000000000", "token": None}])
        )
        result = runner.invoke(cli, ["circle", "c1"], env=env)
        assert result.exit_code == 0, result.output
        assert "Flat" in result.output
        assert "bob.testnet -> alice.testnet: 1.00 NEAR" in result.output

    def test_missing_circle_is_reported_neutrally(self, runner: CliRunner, env: dict[str, str], mocked_rpc) -> None:
        mocked_rpc.rpc_error(TESTNET_PRIMARY_HOST, "Server error", data="Smart contract panicked: Circle not found")
        result = runner.invoke(cli, ["circle", "gone"], env=env)
        assert result.exit_code == 1
        assert "Circle gone no longer exists." in result.output


class TestExplain:
    def test_explain_argument(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["explain", "Smart contract panicked: Invalid invite code"])
        assert result.exit_code == 0
        assert "The invite code is incorrect." in result.output

    def test_explain_stdin(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["explain"], input="Circle not found\n")
        assert result.exit_code == 0
        assert "Circle not found" in result.output
        assert "stale reference" in result.output

    def test_explain_empty_input(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["explain"], input="")
        assert result.output.strip() == "Unknown error"
