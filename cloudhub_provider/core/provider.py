"""Provider registry: configuration plus the resource and data-source types.

The host looks resource and data-source implementations up by type name
and hands the session returned by configure() to every call.
"""

from .models import Diagnostic, ProviderConfig, ProviderSession
from .ports import AuthPort, ResourcePort, VpcApiPort
from .session import configure_provider
from .vpc_data_source import VpcDataSource, VpcsDataSource
from .vpc_resource import VpcResource


class Provider:
    """The cloudhub provider."""

    def __init__(self, auth: AuthPort, vpc_api: VpcApiPort):
        """Initialize the provider.

        Args:
            auth: AuthPort implementation for the token exchange.
            vpc_api: VpcApiPort implementation for VPC calls.
        """
        self.auth = auth
        self.vpc_api = vpc_api
        self.resources: dict[str, ResourcePort] = {
            VpcResource.type_name: VpcResource(vpc_api),
        }
        self.data_sources: dict[str, VpcsDataSource | VpcDataSource] = {
            VpcsDataSource.type_name: VpcsDataSource(vpc_api),
            VpcDataSource.type_name: VpcDataSource(vpc_api),
        }

    async def configure(
        self, config: ProviderConfig
    ) -> tuple[ProviderSession | None, list[Diagnostic]]:
        return await configure_provider(config, self.auth)

    def resource(self, type_name: str) -> ResourcePort:
        """Look up a resource type.

        Raises:
            ValueError: If type_name is not registered.
        """
        if type_name not in self.resources:
            raise ValueError(f"Unknown resource type: {type_name}")
        return self.resources[type_name]

    def data_source(self, type_name: str) -> VpcsDataSource | VpcDataSource:
        """Look up a data-source type.

        Raises:
            ValueError: If type_name is not registered.
        """
        if type_name not in self.data_sources:
            raise ValueError(f"Unknown data source type: {type_name}")
        return self.data_sources[type_name]
