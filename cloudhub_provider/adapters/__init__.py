"""External adapters for the CloudHub VPC provider.

This package contains all external dependencies (httpx, pydantic, the
filesystem) and provides implementations of the core port interfaces.

Adapter Organization:

- cloudhub/: HTTP clients for the accounts and CloudHub VPC APIs
- state/: Adapters for persisting managed resource records
- cli/: Command handler that plays the orchestrating host
"""
