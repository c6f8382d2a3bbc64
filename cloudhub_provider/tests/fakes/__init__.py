"""Fake implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without external dependencies:

- FakeAuthPort: Canned token responses, counts exchanges
- FakeVpcApiPort: In-memory VPC store with call recording
- FakeStateStorePort: In-memory resource records
"""

from .auth import FakeAuthPort
from .state import FakeStateStorePort
from .vpc_api import FakeVpcApiPort

__all__ = [
    "FakeAuthPort",
    "FakeStateStorePort",
    "FakeVpcApiPort",
]
