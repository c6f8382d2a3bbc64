"""Core domain logic for the CloudHub VPC provider.

This package contains zero external dependencies and represents
the pure provider logic. The HTTP clients, state persistence and the
command-line host are handled by the adapters package.
"""

from .models import (
    ControlPlane,
    Credentials,
    Diagnostic,
    FirewallRule,
    InternalDns,
    ProviderConfig,
    ProviderSession,
    Severity,
    TokenResponse,
    Vpc,
    VpcAttributes,
    VpcCore,
    VpcResourceData,
    VpcRoute,
)

__all__ = [
    "ControlPlane",
    "Credentials",
    "Diagnostic",
    "FirewallRule",
    "InternalDns",
    "ProviderConfig",
    "ProviderSession",
    "Severity",
    "TokenResponse",
    "Vpc",
    "VpcAttributes",
    "VpcCore",
    "VpcResourceData",
    "VpcRoute",
]
