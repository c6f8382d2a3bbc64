"""Domain models for the CloudHub VPC provider.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any


class Severity(Enum):
    """Diagnostic severity levels reported back to the host."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A single (severity, summary, detail) entry returned to the host."""

    severity: Severity
    summary: str
    detail: str

    @classmethod
    def error(cls, summary: str, detail: str) -> "Diagnostic":
        """Build an error diagnostic."""
        return cls(severity=Severity.ERROR, summary=summary, detail=detail)

    def to_dict(self) -> dict[str, str]:
        return {
            "severity": self.severity.value,
            "summary": self.summary,
            "detail": self.detail,
        }


def has_errors(diagnostics: list[Diagnostic]) -> bool:
    """Return True if any diagnostic has error severity."""
    return any(d.severity == Severity.ERROR for d in diagnostics)


class ControlPlane(Enum):
    """Anypoint control planes the provider can target."""

    US = "us"
    EU = "eu"
    GOV = "gov"


@dataclass(frozen=True)
class ProviderConfig:
    """Provider-level configuration values.

    Values come from explicit configuration first and from environment
    variables second; see config.Settings.
    """

    org_id: str = ""
    client_id: str = ""
    client_secret: str = ""
    access_token: str = ""
    cplane: ControlPlane = ControlPlane.US

    def __repr__(self) -> str:
        # client_secret and access_token must never reach logs
        return (
            f"ProviderConfig(org_id={self.org_id!r}, client_id={self.client_id!r}, "
            f"cplane={self.cplane.value!r})"
        )


@dataclass(frozen=True)
class Credentials:
    """Connected-app credentials sent to the token exchange endpoint."""

    client_id: str = ""
    client_secret: str = ""
    grant_type: str = "client_credentials"

    def __repr__(self) -> str:
        return f"Credentials(client_id={self.client_id!r}, grant_type={self.grant_type!r})"


@dataclass(frozen=True)
class TokenResponse:
    """Result of a successful token exchange."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int | None = None

    def __repr__(self) -> str:
        return f"TokenResponse(token_type={self.token_type!r}, expires_in={self.expires_in!r})"


@dataclass(frozen=True)
class ProviderSession:
    """Authenticated session shared read-only by every resource operation."""

    token: TokenResponse
    org_id: str

    @property
    def access_token(self) -> str:
        return self.token.access_token


@dataclass(frozen=True)
class FirewallRule:
    """Inbound firewall rule of a VPC."""

    cidr_block: str
    protocol: str
    from_port: int
    to_port: int

    def __post_init__(self) -> None:
        """Validate port range on creation."""
        for name in ("from_port", "to_port"):
            port = getattr(self, name)
            if not 0 <= port <= 65535:
                raise ValueError(f"{name} must be between 0 and 65535, got {port}")
        if self.from_port > self.to_port:
            raise ValueError(
                f"from_port ({self.from_port}) cannot be greater than to_port ({self.to_port})"
            )


@dataclass(frozen=True)
class VpcRoute:
    """Static route of a VPC."""

    cidr: str
    next_hop: str


@dataclass(frozen=True)
class InternalDns:
    """Internal DNS settings as nested in the remote representation."""

    dns_servers: tuple[str, ...] = ()
    special_domains: tuple[str, ...] = ()


@dataclass(frozen=True)
class VpcCore:
    """Request body for VPC create and replace calls."""

    name: str
    region: str
    cidr_block: str
    internal_dns: InternalDns = field(default_factory=InternalDns)
    is_default: bool = False
    associated_environments: tuple[str, ...] = ()
    owner_id: str = ""
    shared_with: tuple[str, ...] = ()
    firewall_rules: tuple[FirewallRule, ...] = ()
    vpc_routes: tuple[VpcRoute, ...] = ()


@dataclass(frozen=True)
class Vpc(VpcCore):
    """A VPC as returned by the remote API."""

    id: str = ""


def _strings(values: dict[str, Any], name: str) -> tuple[str, ...]:
    raw = values.get(name)
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)) or not all(isinstance(v, str) for v in raw):
        raise ValueError(f"{name} must be a list of strings")
    return tuple(raw)


def _blocks(values: dict[str, Any], name: str) -> list[dict[str, Any]]:
    raw = values.get(name)
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)) or not all(isinstance(v, dict) for v in raw):
        raise ValueError(f"{name} must be a list of objects")
    return list(raw)


@dataclass(frozen=True)
class VpcAttributes:
    """Flat, declarative field set of the cloudhub_vpc resource."""

    name: str
    region: str
    cidr_block: str
    internal_dns_servers: tuple[str, ...] = ()
    internal_dns_special_domains: tuple[str, ...] = ()
    is_default: bool = False
    associated_environments: tuple[str, ...] = ()
    owner_id: str = ""
    shared_with: tuple[str, ...] = ()
    firewall_rules: tuple[FirewallRule, ...] = ()
    vpc_routes: tuple[VpcRoute, ...] = ()

    def __post_init__(self) -> None:
        """Validate required attributes and normalize sequences to tuples."""
        for name in ("name", "region", "cidr_block"):
            if not getattr(self, name):
                raise ValueError(f"{name} is required")
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, list):
                object.__setattr__(self, f.name, tuple(value))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VpcAttributes":
        """Build attributes from a plain mapping (host configuration or state).

        Values are type-checked, never coerced: "false" is not a boolean
        and a single string is not a list of strings.

        Raises:
            ValueError: If a required attribute is missing, a value has the
                wrong type or a nested block is malformed.
            TypeError: If the mapping contains unknown attributes.
        """
        values = dict(data)
        values.pop("id", None)
        for name in ("name", "region", "cidr_block"):
            if not values.get(name):
                raise ValueError(f"{name} is required")
            if not isinstance(values[name], str):
                raise ValueError(f"{name} must be a string")
        try:
            values["firewall_rules"] = tuple(
                FirewallRule(
                    cidr_block=rule["cidr_block"],
                    protocol=rule["protocol"],
                    from_port=int(rule["from_port"]),
                    to_port=int(rule["to_port"]),
                )
                for rule in _blocks(values, "firewall_rules")
            )
            values["vpc_routes"] = tuple(
                VpcRoute(cidr=route["cidr"], next_hop=route["next_hop"])
                for route in _blocks(values, "vpc_routes")
            )
        except KeyError as e:
            raise ValueError(f"Missing nested attribute: {e.args[0]}") from e
        for name in (
            "internal_dns_servers",
            "internal_dns_special_domains",
            "associated_environments",
            "shared_with",
        ):
            values[name] = _strings(values, name)

        owner_id = values.get("owner_id")
        if owner_id is not None and not isinstance(owner_id, str):
            raise ValueError("owner_id must be a string")
        values["owner_id"] = owner_id or ""

        is_default = values.get("is_default")
        if is_default is not None and not isinstance(is_default, bool):
            raise ValueError("is_default must be true or false")
        values["is_default"] = bool(is_default)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "region": self.region,
            "cidr_block": self.cidr_block,
            "internal_dns_servers": list(self.internal_dns_servers),
            "internal_dns_special_domains": list(self.internal_dns_special_domains),
            "is_default": self.is_default,
            "associated_environments": list(self.associated_environments),
            "owner_id": self.owner_id,
            "shared_with": list(self.shared_with),
            "firewall_rules": [
                {
                    "cidr_block": r.cidr_block,
                    "protocol": r.protocol,
                    "from_port": r.from_port,
                    "to_port": r.to_port,
                }
                for r in self.firewall_rules
            ],
            "vpc_routes": [
                {"cidr": r.cidr, "next_hop": r.next_hop} for r in self.vpc_routes
            ],
        }


# Attributes that force a replacement when changed.
IMMUTABLE_ATTRIBUTES: tuple[str, ...] = ("region", "cidr_block")

# Every attribute that is sent to the remote API.
VPC_CORE_ATTRIBUTES: tuple[str, ...] = tuple(f.name for f in fields(VpcAttributes))

MUTABLE_ATTRIBUTES: tuple[str, ...] = tuple(
    name for name in VPC_CORE_ATTRIBUTES if name not in IMMUTABLE_ATTRIBUTES
)


@dataclass
class VpcResourceData:
    """Host-managed record of one cloudhub_vpc resource.

    Note: This dataclass is intentionally mutable; lifecycle operations set
    the id, the last-known state and the last-updated timestamp in place.
    """

    config: VpcAttributes
    id: str = ""
    state: VpcAttributes | None = None
    last_updated: str = ""

    def set_id(self, vpc_id: str) -> None:
        self.id = vpc_id

    def changed_attributes(self, names: tuple[str, ...]) -> list[str]:
        """Return the attributes in names whose declared value differs from state.

        With no known state every attribute counts as changed.
        """
        if self.state is None:
            return list(names)
        return [
            name
            for name in names
            if getattr(self.config, name) != getattr(self.state, name)
        ]

    def has_changes(self, *names: str) -> bool:
        return bool(self.changed_attributes(names))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "last_updated": self.last_updated,
            "config": self.config.to_dict(),
            "state": self.state.to_dict() if self.state is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VpcResourceData":
        state = data.get("state")
        return cls(
            config=VpcAttributes.from_dict(data["config"]),
            id=data.get("id", ""),
            state=VpcAttributes.from_dict(state) if state else None,
            last_updated=data.get("last_updated", ""),
        )
