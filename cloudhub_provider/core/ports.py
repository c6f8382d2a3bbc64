"""Port interfaces for the CloudHub VPC provider.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - AuthPort: Exchange connected-app credentials for a token
   - VpcApiPort: Create, read, replace, delete and list remote VPCs
   - StateStorePort: Persist host-managed resource records

2. **Driving Port** (the host calls into core)
   - ResourcePort: Lifecycle callbacks of a managed resource type
"""

from abc import ABC, abstractmethod

from .models import (
    Credentials,
    Diagnostic,
    ProviderSession,
    TokenResponse,
    Vpc,
    VpcCore,
    VpcResourceData,
)


class ApiError(Exception):
    """A remote call failed.

    Raised by adapters for non-success responses (body holds the response
    text) and for transport failures (body is None, the message holds the
    transport error text).
    """

    def __init__(
        self, message: str, status_code: int | None = None, body: str | None = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def detail(self) -> str:
        """Response body when one was received, otherwise the error text."""
        if self.body is not None:
            return self.body
        return str(self)


class StateError(Exception):
    """Stored state exists but cannot be decoded."""


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class AuthPort(ABC):
    """Port for the accounts token exchange."""

    @abstractmethod
    async def exchange_token(self, credentials: Credentials) -> TokenResponse:
        """Exchange credentials for an access token.

        Args:
            credentials: Connected-app credentials. Client id and secret may
                be empty, in which case the remote decides the outcome.

        Returns:
            TokenResponse carrying the bearer token.

        Raises:
            ApiError: If the endpoint is unreachable or rejects the request.
        """


class VpcApiPort(ABC):
    """Port for the CloudHub VPC endpoints.

    Every call is scoped by the organization of the session; all but
    create and list are additionally scoped by the VPC id.

    Besides ApiError, methods returning VPCs raise ValueError when a
    response arrives but cannot be decoded into the domain model.
    """

    @abstractmethod
    async def create_vpc(self, session: ProviderSession, body: VpcCore) -> str:
        """Create a VPC.

        Only the id is taken from the response; callers read the VPC back
        for the authoritative representation.

        Returns:
            The remote-assigned VPC id.

        Raises:
            ApiError: On transport failure or non-success response.
            ValueError: If the response carries no id.
        """

    @abstractmethod
    async def get_vpc(self, session: ProviderSession, vpc_id: str) -> Vpc:
        """Retrieve a VPC by id.

        Raises:
            ApiError: On transport failure or non-success response
                (including 404).
        """

    @abstractmethod
    async def replace_vpc(
        self, session: ProviderSession, vpc_id: str, body: VpcCore
    ) -> None:
        """Replace a VPC with a full body.

        The response body is not decoded.

        Raises:
            ApiError: On transport failure or non-success response.
        """

    @abstractmethod
    async def delete_vpc(self, session: ProviderSession, vpc_id: str) -> None:
        """Delete a VPC.

        Raises:
            ApiError: On transport failure or non-success response.
        """

    @abstractmethod
    async def list_vpcs(self, session: ProviderSession) -> list[Vpc]:
        """List every VPC of the organization.

        Raises:
            ApiError: On transport failure or non-success response.
        """


class StateStorePort(ABC):
    """Port for persisting host-managed resource records by local name.

    Every method raises StateError when the stored state cannot be read.
    """

    @abstractmethod
    async def load(self, name: str) -> VpcResourceData | None:
        """Return the record stored under name, or None."""

    @abstractmethod
    async def save(self, name: str, record: VpcResourceData) -> None:
        """Store record under name, replacing any previous record."""

    @abstractmethod
    async def remove(self, name: str) -> None:
        """Forget the record stored under name. Missing names are ignored."""

    @abstractmethod
    async def list_names(self) -> list[str]:
        """Return every stored name in sorted order."""


# ============================================================================
# DRIVING PORT (Host calls into core)
# ============================================================================


class ResourcePort(ABC):
    """Lifecycle callbacks of a managed resource type.

    Every callback takes the session explicitly and returns a list of
    diagnostics; an empty list means success.
    """

    @abstractmethod
    async def create(
        self, session: ProviderSession, data: VpcResourceData
    ) -> list[Diagnostic]:
        """Create the remote object and populate data.id and data.state."""

    @abstractmethod
    async def read(
        self, session: ProviderSession, data: VpcResourceData
    ) -> list[Diagnostic]:
        """Refresh data.state from the remote object."""

    @abstractmethod
    async def update(
        self, session: ProviderSession, data: VpcResourceData
    ) -> list[Diagnostic]:
        """Push changed declared attributes to the remote object."""

    @abstractmethod
    async def delete(
        self, session: ProviderSession, data: VpcResourceData
    ) -> list[Diagnostic]:
        """Delete the remote object and clear data.id."""
