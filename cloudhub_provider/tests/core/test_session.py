"""Tests for provider configuration and authentication bootstrap."""

import dataclasses

import pytest

from cloudhub_provider.core.models import (
    Credentials,
    ProviderConfig,
    Severity,
)
from cloudhub_provider.core.ports import ApiError
from cloudhub_provider.core.session import configure_provider
from cloudhub_provider.tests.fakes import FakeAuthPort


@pytest.fixture
def auth() -> FakeAuthPort:
    """Create a fake token endpoint."""
    return FakeAuthPort(access_token="tok-1")


@pytest.mark.asyncio
class TestConfigureProvider:
    """Test suite for configure_provider."""

    @pytest.mark.parametrize(
        "config",
        [
            ProviderConfig(),
            ProviderConfig(org_id="", client_id="", client_secret=""),
            ProviderConfig(client_id="id", client_secret="secret"),
            ProviderConfig(access_token="preissued"),
        ],
    )
    async def test_missing_org_id_fails_without_network_call(
        self, auth: FakeAuthPort, config: ProviderConfig
    ) -> None:
        session, diagnostics = await configure_provider(config, auth)

        assert session is None
        assert len(diagnostics) == 1
        assert diagnostics[0].severity == Severity.ERROR
        assert diagnostics[0].summary == "Required org id"
        assert diagnostics[0].detail == "The Organization Id is required."
        assert auth.exchanged == []

    async def test_credentials_attached_and_one_exchange(self, auth: FakeAuthPort) -> None:
        config = ProviderConfig(org_id="org-1", client_id="id", client_secret="secret")

        session, diagnostics = await configure_provider(config, auth)

        assert diagnostics == []
        assert session is not None
        assert session.org_id == "org-1"
        assert session.access_token == "tok-1"
        assert auth.exchanged == [Credentials(client_id="id", client_secret="secret")]

    @pytest.mark.parametrize(
        "client_id,client_secret",
        [("id", ""), ("", "secret"), ("", "")],
    )
    async def test_partial_credentials_are_not_attached(
        self, auth: FakeAuthPort, client_id: str, client_secret: str
    ) -> None:
        config = ProviderConfig(
            org_id="org-1", client_id=client_id, client_secret=client_secret
        )

        await configure_provider(config, auth)

        assert auth.exchanged == [Credentials()]

    async def test_auth_failure_reports_response_body(self, auth: FakeAuthPort) -> None:
        auth.set_error(
            ApiError("POST returned 401", status_code=401, body='{"error":"invalid_client"}')
        )
        config = ProviderConfig(org_id="org-1", client_id="id", client_secret="bad")

        session, diagnostics = await configure_provider(config, auth)

        assert session is None
        assert [d.summary for d in diagnostics] == ["Unable to Authenticate"]
        assert diagnostics[0].detail == '{"error":"invalid_client"}'
        assert len(auth.exchanged) == 1

    async def test_transport_failure_reports_error_text(self, auth: FakeAuthPort) -> None:
        auth.set_error(ApiError("connection refused"))
        config = ProviderConfig(org_id="org-1", client_id="id", client_secret="secret")

        session, diagnostics = await configure_provider(config, auth)

        assert session is None
        assert diagnostics[0].summary == "Unable to Authenticate"
        assert diagnostics[0].detail == "connection refused"

    async def test_malformed_token_response(self, auth: FakeAuthPort) -> None:
        auth.set_error(ValueError("access_token field required"))
        config = ProviderConfig(org_id="org-1", client_id="id", client_secret="secret")

        session, diagnostics = await configure_provider(config, auth)

        assert session is None
        assert diagnostics[0].detail == "access_token field required"

    async def test_access_token_skips_exchange(self, auth: FakeAuthPort) -> None:
        config = ProviderConfig(org_id="org-1", access_token="preissued")

        session, diagnostics = await configure_provider(config, auth)

        assert diagnostics == []
        assert session is not None
        assert session.access_token == "preissued"
        assert auth.exchanged == []

    async def test_session_is_immutable(self, auth: FakeAuthPort) -> None:
        session, _ = await configure_provider(ProviderConfig(org_id="org-1"), auth)

        assert session is not None
        with pytest.raises(dataclasses.FrozenInstanceError):
            session.org_id = "other"  # type: ignore[misc]


def test_config_repr_hides_secrets() -> None:
    config = ProviderConfig(
        org_id="org-1", client_id="id", client_secret="s3cr3t", access_token="tok"
    )
    assert "s3cr3t" not in repr(config)
    assert "tok" not in repr(config)
