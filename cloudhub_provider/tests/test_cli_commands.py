"""Tests for the CLI host: apply/refresh/destroy/show and data-source commands."""

from typing import Any

import pytest

from cloudhub_provider.adapters.cli.commands import CLICommandHandler, run_command
from cloudhub_provider.core.models import ProviderSession, TokenResponse, Vpc
from cloudhub_provider.core.ports import ApiError
from cloudhub_provider.core.provider import Provider
from cloudhub_provider.tests.fakes import (
    FakeAuthPort,
    FakeStateStorePort,
    FakeVpcApiPort,
)

NET1: dict[str, Any] = {
    "name": "net1",
    "region": "us-east-1",
    "cidr_block": "10.0.0.0/16",
    "firewall_rules": [
        {"cidr_block": "0.0.0.0/0", "protocol": "tcp", "from_port": 443, "to_port": 443}
    ],
}


@pytest.fixture
def api() -> FakeVpcApiPort:
    return FakeVpcApiPort()


@pytest.fixture
def store() -> FakeStateStorePort:
    return FakeStateStorePort()


@pytest.fixture
def handler(api: FakeVpcApiPort, store: FakeStateStorePort) -> CLICommandHandler:
    provider = Provider(auth=FakeAuthPort(), vpc_api=api)
    session = ProviderSession(token=TokenResponse(access_token="tok"), org_id="org-1")
    return CLICommandHandler(provider, session, store)


@pytest.mark.asyncio
class TestApply:
    """apply: create, update in place, replace."""

    async def test_first_apply_creates(
        self, handler: CLICommandHandler, api: FakeVpcApiPort, store: FakeStateStorePort
    ) -> None:
        api.next_id = "vpc-123"

        result = await handler.apply("main", NET1)

        assert result["status"] == "success"
        assert result["action"] == "create"
        assert result["resource"]["id"] == "vpc-123"
        assert result["diagnostics"] == []
        assert store.records["main"]["state"]["firewall_rules"][0]["to_port"] == 443

    async def test_second_apply_without_change_is_noop(
        self, handler: CLICommandHandler, api: FakeVpcApiPort
    ) -> None:
        await handler.apply("main", NET1)
        api.calls.clear()

        result = await handler.apply("main", NET1)

        assert result["action"] == "update"
        assert api.calls_to("replace") == []
        assert result["resource"]["last_updated"] == ""

    async def test_mutable_change_updates_in_place(
        self, handler: CLICommandHandler, api: FakeVpcApiPort
    ) -> None:
        first = await handler.apply("main", NET1)
        vpc_id = first["resource"]["id"]
        api.calls.clear()

        result = await handler.apply("main", {**NET1, "name": "net1-renamed"})

        assert result["status"] == "success"
        assert result["action"] == "update"
        assert api.calls_to("replace") == [vpc_id]
        assert result["resource"]["id"] == vpc_id
        assert result["resource"]["last_updated"] != ""
        assert result["resource"]["state"]["name"] == "net1-renamed"

    async def test_immutable_change_replaces(
        self, handler: CLICommandHandler, api: FakeVpcApiPort, store: FakeStateStorePort
    ) -> None:
        first = await handler.apply("main", NET1)
        old_id = first["resource"]["id"]

        result = await handler.apply("main", {**NET1, "cidr_block": "10.9.0.0/16"})

        assert result["status"] == "success"
        assert result["action"] == "replace"
        assert api.calls_to("delete") == [old_id]
        assert result["resource"]["id"] != old_id
        assert store.records["main"]["state"]["cidr_block"] == "10.9.0.0/16"

    async def test_failed_create_stores_nothing(
        self, handler: CLICommandHandler, api: FakeVpcApiPort, store: FakeStateStorePort
    ) -> None:
        api.set_error("create", ApiError("POST returned 400", status_code=400, body="bad cidr"))

        result = await handler.apply("main", NET1)

        assert result["status"] == "error"
        assert result["diagnostics"] == [
            {"severity": "error", "summary": "Unable to Create VPC", "detail": "bad cidr"}
        ]
        assert store.records == {}

    async def test_invalid_attributes(self, handler: CLICommandHandler) -> None:
        result = await handler.apply("main", {"name": "net1"})

        assert result["status"] == "error"
        assert "region is required" in result["message"]


@pytest.mark.asyncio
class TestRefreshDestroyShow:
    """refresh, destroy and show."""

    async def test_refresh_picks_up_remote_drift(
        self, handler: CLICommandHandler, api: FakeVpcApiPort, store: FakeStateStorePort
    ) -> None:
        created = await handler.apply("main", NET1)
        vpc_id = created["resource"]["id"]
        api.add_vpc("org-1", Vpc(id=vpc_id, name="drifted", region="us-east-1", cidr_block="10.0.0.0/16"))

        result = await handler.refresh("main")

        assert result["status"] == "success"
        assert store.records["main"]["state"]["name"] == "drifted"

    async def test_failed_refresh_keeps_stored_state(
        self, handler: CLICommandHandler, api: FakeVpcApiPort, store: FakeStateStorePort
    ) -> None:
        await handler.apply("main", NET1)
        before = dict(store.records["main"])
        api.set_error("get", ApiError("GET returned 500", status_code=500, body="down"))

        result = await handler.refresh("main")

        assert result["status"] == "error"
        assert store.records["main"] == before

    async def test_destroy_forgets_record(
        self, handler: CLICommandHandler, store: FakeStateStorePort
    ) -> None:
        await handler.apply("main", NET1)

        result = await handler.destroy("main")

        assert result["status"] == "success"
        assert store.records == {}

    async def test_failed_destroy_keeps_record(
        self, handler: CLICommandHandler, api: FakeVpcApiPort, store: FakeStateStorePort
    ) -> None:
        await handler.apply("main", NET1)
        api.set_error("delete", ApiError("DELETE returned 403", status_code=403, body="nope"))

        result = await handler.destroy("main")

        assert result["diagnostics"][0]["summary"] == "Unable to Delete VPC"
        assert store.records["main"]["id"] != ""

    async def test_unknown_name(self, handler: CLICommandHandler) -> None:
        for operation in (handler.refresh, handler.destroy, handler.show):
            result = await operation("ghost")
            assert result["status"] == "error"
            assert result["message"] == "No resource named ghost"

    async def test_show_lists_names(self, handler: CLICommandHandler) -> None:
        await handler.apply("b", NET1)
        await handler.apply("a", NET1)

        result = await handler.show()

        assert result["names"] == ["a", "b"]


@pytest.mark.asyncio
class TestRunCommand:
    """Command dispatch."""

    async def test_vpcs_and_vpc(self, handler: CLICommandHandler) -> None:
        created = await run_command(handler, "apply", {"name": "main", "vpc": NET1})
        vpc_id = created["resource"]["id"]

        listing = await run_command(handler, "vpcs", {})
        single = await run_command(handler, "vpc", {"vpc_id": vpc_id})

        assert [item["id"] for item in listing["vpcs"]] == [vpc_id]
        assert single["vpc"]["name"] == "net1"

    async def test_vpc_not_found(self, handler: CLICommandHandler) -> None:
        result = await run_command(handler, "vpc", {"vpc_id": "vpc-nope"})

        assert result["status"] == "error"
        assert result["vpc"] is None

    @pytest.mark.parametrize(
        "command,args",
        [
            ("apply", {"name": "main"}),
            ("apply", {"vpc": NET1}),
            ("apply", {"name": "main", "vpc": ["not", "an", "object"]}),
            ("refresh", {}),
            ("destroy", {}),
            ("vpc", {}),
        ],
    )
    async def test_missing_parameters(
        self, handler: CLICommandHandler, command: str, args: dict[str, Any]
    ) -> None:
        with pytest.raises(ValueError):
            await run_command(handler, command, args)

    async def test_unknown_command(self, handler: CLICommandHandler) -> None:
        with pytest.raises(ValueError, match="Unknown command"):
            await run_command(handler, "plan", {})


@pytest.mark.asyncio
class TestUnreadableState:
    """A record the store cannot decode is reported, not raised."""

    @pytest.fixture(autouse=True)
    def broken_record(self, store: FakeStateStorePort) -> None:
        store.records["main"] = {
            "id": "vpc-1",
            "config": {"name": "net1", "region": "us-east-1", "cidr_block": "10.0.0.0/16", "color": "red"},
        }

    @pytest.mark.parametrize(
        "command,args",
        [
            ("apply", {"name": "main", "vpc": NET1}),
            ("refresh", {"name": "main"}),
            ("destroy", {"name": "main"}),
            ("show", {"name": "main"}),
        ],
    )
    async def test_reported_as_error(
        self, handler: CLICommandHandler, api: FakeVpcApiPort, command: str, args: dict[str, Any]
    ) -> None:
        result = await run_command(handler, command, args)

        assert result["status"] == "error"
        assert result["operation"] == command
        assert result["message"].startswith("Unreadable state: Malformed record 'main'")
        assert api.calls == []
