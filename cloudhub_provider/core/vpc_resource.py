"""The cloudhub_vpc managed resource.

Each lifecycle callback translates the declared attributes into a remote
request body, calls the VPC API scoped by the session's organization (and
the VPC id where applicable) and flattens the response back into the
resource record. Any failure becomes a single error diagnostic; nothing is
retried and a failed create is not cleaned up.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from .models import (
    IMMUTABLE_ATTRIBUTES,
    MUTABLE_ATTRIBUTES,
    Diagnostic,
    InternalDns,
    ProviderSession,
    Vpc,
    VpcAttributes,
    VpcCore,
    VpcResourceData,
)
from .ports import ApiError, ResourcePort, VpcApiPort

logger = logging.getLogger(__name__)

# RFC 850 layout: "Monday, 02-Jan-06 15:04:05 UTC"
RFC850_FORMAT = "%A, %d-%b-%y %H:%M:%S %Z"


def format_rfc850(moment: datetime) -> str:
    """Format moment the way last_updated is recorded."""
    return moment.strftime(RFC850_FORMAT)


def new_vpc_body(attributes: VpcAttributes) -> VpcCore:
    """Build the full create/replace request body from declared attributes."""
    return VpcCore(
        name=attributes.name,
        region=attributes.region,
        cidr_block=attributes.cidr_block,
        internal_dns=InternalDns(
            dns_servers=attributes.internal_dns_servers,
            special_domains=attributes.internal_dns_special_domains,
        ),
        is_default=attributes.is_default,
        associated_environments=attributes.associated_environments,
        owner_id=attributes.owner_id,
        shared_with=attributes.shared_with,
        firewall_rules=attributes.firewall_rules,
        vpc_routes=attributes.vpc_routes,
    )


def flatten_vpc_data(vpc: Vpc) -> VpcAttributes:
    """Flatten the nested remote representation into resource attributes.

    Raises:
        ValueError: If the remote representation violates attribute
            invariants (e.g. an empty name or an invalid port range).
    """
    return VpcAttributes(
        name=vpc.name,
        region=vpc.region,
        cidr_block=vpc.cidr_block,
        internal_dns_servers=vpc.internal_dns.dns_servers,
        internal_dns_special_domains=vpc.internal_dns.special_domains,
        is_default=vpc.is_default,
        associated_environments=vpc.associated_environments,
        owner_id=vpc.owner_id,
        shared_with=vpc.shared_with,
        firewall_rules=vpc.firewall_rules,
        vpc_routes=vpc.vpc_routes,
    )


def _missing_id(summary: str) -> Diagnostic:
    return Diagnostic.error(summary, "The VPC id is not set; the VPC has not been created.")


class VpcResource(ResourcePort):
    """Create/read/update/delete callbacks for cloudhub_vpc."""

    type_name = "cloudhub_vpc"

    def __init__(
        self,
        api: VpcApiPort,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the resource.

        Args:
            api: VpcApiPort implementation for remote calls.
            clock: Returns the current time; used for last_updated.
                Defaults to the current UTC time.
        """
        self.api = api
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    async def create(
        self, session: ProviderSession, data: VpcResourceData
    ) -> list[Diagnostic]:
        body = new_vpc_body(data.config)

        try:
            vpc_id = await self.api.create_vpc(session, body)
        except ApiError as e:
            logger.error(
                f"Failed to create VPC {body.name}: {e}",
                extra={"org_id": session.org_id, "status_code": e.status_code},
            )
            return [Diagnostic.error("Unable to Create VPC", e.detail)]
        except ValueError as e:
            return [Diagnostic.error("Unable to Create VPC", str(e))]

        data.set_id(vpc_id)
        logger.info(
            f"Created VPC {vpc_id}",
            extra={"org_id": session.org_id, "vpc_id": vpc_id},
        )

        return await self.read(session, data)

    async def read(
        self, session: ProviderSession, data: VpcResourceData
    ) -> list[Diagnostic]:
        if not data.id:
            return [_missing_id("Unable to Get VPC")]

        try:
            vpc = await self.api.get_vpc(session, data.id)
        except ApiError as e:
            logger.error(
                f"Failed to get VPC {data.id}: {e}",
                extra={"org_id": session.org_id, "status_code": e.status_code},
            )
            return [Diagnostic.error("Unable to Get VPC", e.detail)]
        except ValueError as e:
            # response arrived but could not be decoded into a VPC
            return [Diagnostic.error("Unable to set VPC", str(e))]

        try:
            attributes = flatten_vpc_data(vpc)
        except ValueError as e:
            return [Diagnostic.error("Unable to set VPC", str(e))]

        data.state = attributes
        return []

    async def update(
        self, session: ProviderSession, data: VpcResourceData
    ) -> list[Diagnostic]:
        """Replace the remote VPC when a mutable attribute changed.

        Immutable attributes cannot be changed in place; the host must
        delete and re-create instead.
        """
        if not data.id:
            return [_missing_id("Unable to Update VPC")]

        immutable = data.changed_attributes(IMMUTABLE_ATTRIBUTES)
        if data.state is not None and immutable:
            return [
                Diagnostic.error(
                    "Unable to Update VPC",
                    f"Changing {', '.join(immutable)} requires replacing the VPC.",
                )
            ]

        changed = data.changed_attributes(MUTABLE_ATTRIBUTES)
        if changed:
            body = new_vpc_body(data.config)
            try:
                await self.api.replace_vpc(session, data.id, body)
            except ApiError as e:
                logger.error(
                    f"Failed to update VPC {data.id}: {e}",
                    extra={"org_id": session.org_id, "status_code": e.status_code},
                )
                return [Diagnostic.error("Unable to Update VPC", e.detail)]
            except ValueError as e:
                return [Diagnostic.error("Unable to Update VPC", str(e))]

            data.last_updated = format_rfc850(self.clock())
            logger.info(
                f"Updated VPC {data.id}",
                extra={"org_id": session.org_id, "vpc_id": data.id, "changed": changed},
            )

        return await self.read(session, data)

    async def delete(
        self, session: ProviderSession, data: VpcResourceData
    ) -> list[Diagnostic]:
        if not data.id:
            return [_missing_id("Unable to Delete VPC")]

        try:
            await self.api.delete_vpc(session, data.id)
        except ApiError as e:
            logger.error(
                f"Failed to delete VPC {data.id}: {e}",
                extra={"org_id": session.org_id, "status_code": e.status_code},
            )
            return [Diagnostic.error("Unable to Delete VPC", e.detail)]

        logger.info(
            f"Deleted VPC {data.id}",
            extra={"org_id": session.org_id, "vpc_id": data.id},
        )
        data.set_id("")
        data.state = None
        return []
