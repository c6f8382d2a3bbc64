"""Wire models for the CloudHub and accounts APIs.

The VPC endpoints speak camelCase, so every model serializes with camelCase
aliases by default. Conversions to and from the core domain models live
next to each model.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cloudhub_provider.core.models import (
    Credentials,
    FirewallRule,
    InternalDns,
    TokenResponse,
    Vpc,
    VpcCore,
    VpcRoute,
)


class WireModel(BaseModel):
    """Base for all wire models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class CredentialsModel(WireModel):
    client_id: str = ""
    client_secret: str = ""
    grant_type: str = "client_credentials"

    @classmethod
    def from_domain(cls, credentials: Credentials) -> "CredentialsModel":
        return cls(
            client_id=credentials.client_id,
            client_secret=credentials.client_secret,
            grant_type=credentials.grant_type,
        )


class TokenResponseModel(WireModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int | None = None

    def to_domain(self) -> TokenResponse:
        return TokenResponse(
            access_token=self.access_token,
            token_type=self.token_type,
            expires_in=self.expires_in,
        )


class InternalDnsModel(WireModel):
    # null is answered for unset lists here too
    dns_servers: list[str] | None = Field(default_factory=list)
    special_domains: list[str] | None = Field(default_factory=list)

    def to_domain(self) -> InternalDns:
        return InternalDns(
            dns_servers=tuple(self.dns_servers or ()),
            special_domains=tuple(self.special_domains or ()),
        )


class FirewallRuleModel(WireModel):
    cidr_block: str
    protocol: str
    from_port: int
    to_port: int


class VpcRouteModel(WireModel):
    cidr: str = Field(alias="CIDR")
    next_hop: str


class VpcCoreModel(WireModel):
    name: str
    region: str
    cidr_block: str
    internal_dns: InternalDnsModel = Field(default_factory=InternalDnsModel)
    is_default: bool = False
    associated_environments: list[str] = Field(default_factory=list)
    owner_id: str = ""
    shared_with: list[str] = Field(default_factory=list)
    firewall_rules: list[FirewallRuleModel] = Field(default_factory=list)
    vpc_routes: list[VpcRouteModel] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, body: VpcCore) -> "VpcCoreModel":
        return cls(
            name=body.name,
            region=body.region,
            cidr_block=body.cidr_block,
            internal_dns=InternalDnsModel(
                dns_servers=list(body.internal_dns.dns_servers),
                special_domains=list(body.internal_dns.special_domains),
            ),
            is_default=body.is_default,
            associated_environments=list(body.associated_environments),
            owner_id=body.owner_id,
            shared_with=list(body.shared_with),
            firewall_rules=[
                FirewallRuleModel(
                    cidr_block=r.cidr_block,
                    protocol=r.protocol,
                    from_port=r.from_port,
                    to_port=r.to_port,
                )
                for r in body.firewall_rules
            ],
            vpc_routes=[
                VpcRouteModel(cidr=r.cidr, next_hop=r.next_hop)
                for r in body.vpc_routes
            ],
        )


class VpcIdModel(WireModel):
    """Create response; everything but the id is ignored."""

    id: str = Field(min_length=1)


class VpcModel(VpcCoreModel):
    id: str
    # The API answers null for unset optional strings and lists.
    owner_id: str | None = ""
    internal_dns: InternalDnsModel | None = Field(default_factory=InternalDnsModel)
    associated_environments: list[str] | None = Field(default_factory=list)
    shared_with: list[str] | None = Field(default_factory=list)
    firewall_rules: list[FirewallRuleModel] | None = Field(default_factory=list)
    vpc_routes: list[VpcRouteModel] | None = Field(default_factory=list)

    def to_domain(self) -> Vpc:
        """Convert to the core Vpc.

        Raises:
            ValueError: If a firewall rule violates port invariants.
        """
        return Vpc(
            id=self.id,
            name=self.name,
            region=self.region,
            cidr_block=self.cidr_block,
            internal_dns=(self.internal_dns or InternalDnsModel()).to_domain(),
            is_default=self.is_default,
            associated_environments=tuple(self.associated_environments or ()),
            owner_id=self.owner_id or "",
            shared_with=tuple(self.shared_with or ()),
            firewall_rules=tuple(
                FirewallRule(
                    cidr_block=r.cidr_block,
                    protocol=r.protocol,
                    from_port=r.from_port,
                    to_port=r.to_port,
                )
                for r in self.firewall_rules or ()
            ),
            vpc_routes=tuple(
                VpcRoute(cidr=r.cidr, next_hop=r.next_hop)
                for r in self.vpc_routes or ()
            ),
        )
