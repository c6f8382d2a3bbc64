"""CloudHub VPC API adapter.

Implements VpcApiPort against the CloudHub REST API. Every call carries
the session's bearer token and is scoped by its organization id.
"""

import logging
from typing import Any
from urllib.parse import quote

from cloudhub_provider.core.models import ProviderSession, Vpc, VpcCore
from cloudhub_provider.core.ports import VpcApiPort

from .http import CloudHubHttpClient
from .wire import VpcCoreModel, VpcIdModel, VpcModel

logger = logging.getLogger(__name__)


def _auth_headers(session: ProviderSession) -> dict[str, str]:
    return {"Authorization": f"Bearer {session.access_token}"}


class CloudHubVpcAdapter(CloudHubHttpClient, VpcApiPort):
    """VPC endpoints under /cloudhub/api/organizations/{org_id}/vpcs."""

    @staticmethod
    def _vpcs_path(session: ProviderSession) -> str:
        return f"/cloudhub/api/organizations/{quote(session.org_id, safe='')}/vpcs"

    def _vpc_path(self, session: ProviderSession, vpc_id: str) -> str:
        if not vpc_id:
            raise ValueError("vpc_id must be a non-empty string")
        return f"{self._vpcs_path(session)}/{quote(vpc_id, safe='')}"

    @staticmethod
    def _parse_vpc(payload: Any) -> Vpc:
        return VpcModel.model_validate(payload).to_domain()

    async def create_vpc(self, session: ProviderSession, body: VpcCore) -> str:
        response = await self._send(
            "POST",
            self._vpcs_path(session),
            headers=_auth_headers(session),
            json=VpcCoreModel.from_domain(body).to_wire(),
        )
        return VpcIdModel.model_validate(response.json()).id

    async def get_vpc(self, session: ProviderSession, vpc_id: str) -> Vpc:
        response = await self._send(
            "GET",
            self._vpc_path(session, vpc_id),
            headers=_auth_headers(session),
        )
        return self._parse_vpc(response.json())

    async def replace_vpc(
        self, session: ProviderSession, vpc_id: str, body: VpcCore
    ) -> None:
        await self._send(
            "PUT",
            self._vpc_path(session, vpc_id),
            headers=_auth_headers(session),
            json=VpcCoreModel.from_domain(body).to_wire(),
        )

    async def delete_vpc(self, session: ProviderSession, vpc_id: str) -> None:
        await self._send(
            "DELETE",
            self._vpc_path(session, vpc_id),
            headers=_auth_headers(session),
        )

    async def list_vpcs(self, session: ProviderSession) -> list[Vpc]:
        response = await self._send(
            "GET",
            self._vpcs_path(session),
            headers=_auth_headers(session),
        )
        payload = response.json()
        # The listing is wrapped as {"data": [...], "total": n}
        items = payload.get("data", []) if isinstance(payload, dict) else payload
        vpcs = [self._parse_vpc(item) for item in items]
        logger.debug(
            f"Fetched {len(vpcs)} VPCs",
            extra={"org_id": session.org_id},
        )
        return vpcs
