"""Tests for the provider registry."""

import pytest

from cloudhub_provider.core.models import ProviderConfig
from cloudhub_provider.core.provider import Provider
from cloudhub_provider.core.vpc_data_source import VpcDataSource, VpcsDataSource
from cloudhub_provider.core.vpc_resource import VpcResource
from cloudhub_provider.tests.fakes import FakeAuthPort, FakeVpcApiPort


@pytest.fixture
def provider() -> Provider:
    return Provider(auth=FakeAuthPort(), vpc_api=FakeVpcApiPort())


def test_registers_one_resource_type(provider: Provider) -> None:
    assert list(provider.resources) == ["cloudhub_vpc"]
    assert isinstance(provider.resource("cloudhub_vpc"), VpcResource)


def test_registers_data_sources(provider: Provider) -> None:
    assert isinstance(provider.data_source("cloudhub_vpcs"), VpcsDataSource)
    assert isinstance(provider.data_source("cloudhub_vpc"), VpcDataSource)


def test_unknown_types(provider: Provider) -> None:
    with pytest.raises(ValueError, match="Unknown resource type"):
        provider.resource("cloudhub_dlb")
    with pytest.raises(ValueError, match="Unknown data source type"):
        provider.data_source("cloudhub_dlbs")


@pytest.mark.asyncio
async def test_configure_authenticates_once() -> None:
    auth = FakeAuthPort(access_token="tok-9")
    provider = Provider(auth=auth, vpc_api=FakeVpcApiPort())

    session, diagnostics = await provider.configure(
        ProviderConfig(org_id="org-1", client_id="id", client_secret="secret")
    )

    assert diagnostics == []
    assert session is not None and session.access_token == "tok-9"
    assert len(auth.exchanged) == 1
