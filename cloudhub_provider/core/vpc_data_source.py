"""Read-only VPC data sources: cloudhub_vpcs (listing) and cloudhub_vpc."""

import logging
from dataclasses import dataclass, field
from typing import Any

from .models import Diagnostic, ProviderSession, Vpc
from .ports import ApiError, VpcApiPort
from .vpc_resource import flatten_vpc_data

logger = logging.getLogger(__name__)


def vpc_to_item(vpc: Vpc) -> dict[str, Any]:
    """Flatten a remote VPC into a data-source item, id included."""
    return {"id": vpc.id, **flatten_vpc_data(vpc).to_dict()}


@dataclass
class DataSourceResult:
    """Outcome of a data-source read."""

    items: list[dict[str, Any]] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


class VpcsDataSource:
    """Lists every VPC of the session's organization."""

    type_name = "cloudhub_vpcs"

    def __init__(self, api: VpcApiPort):
        self.api = api

    async def read(self, session: ProviderSession) -> DataSourceResult:
        try:
            items = [vpc_to_item(vpc) for vpc in await self.api.list_vpcs(session)]
        except ApiError as e:
            logger.error(
                f"Failed to list VPCs: {e}",
                extra={"org_id": session.org_id, "status_code": e.status_code},
            )
            return DataSourceResult(
                diagnostics=[Diagnostic.error("Unable to Get VPCs", e.detail)]
            )
        except ValueError as e:
            return DataSourceResult(
                diagnostics=[Diagnostic.error("Unable to set VPCs", str(e))]
            )

        logger.debug(f"Listed {len(items)} VPCs", extra={"org_id": session.org_id})
        return DataSourceResult(items=items)


class VpcDataSource:
    """Reads a single VPC by id."""

    type_name = "cloudhub_vpc"

    def __init__(self, api: VpcApiPort):
        self.api = api

    async def read(self, session: ProviderSession, vpc_id: str) -> DataSourceResult:
        if not vpc_id:
            return DataSourceResult(
                diagnostics=[
                    Diagnostic.error("Required VPC id", "The VPC id is required.")
                ]
            )

        try:
            vpc = await self.api.get_vpc(session, vpc_id)
        except ApiError as e:
            logger.error(
                f"Failed to get VPC {vpc_id}: {e}",
                extra={"org_id": session.org_id, "status_code": e.status_code},
            )
            return DataSourceResult(
                diagnostics=[Diagnostic.error("Unable to Get VPC", e.detail)]
            )
        except ValueError as e:
            return DataSourceResult(
                diagnostics=[Diagnostic.error("Unable to set VPC", str(e))]
            )

        try:
            return DataSourceResult(items=[vpc_to_item(vpc)])
        except ValueError as e:
            return DataSourceResult(
                diagnostics=[Diagnostic.error("Unable to set VPC", str(e))]
            )
