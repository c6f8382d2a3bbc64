"""CloudHub API adapters.

- CloudHubAuthAdapter: connected-app token exchange (AuthPort)
- CloudHubVpcAdapter: VPC create/get/replace/delete/list (VpcApiPort)
"""

from .auth import CloudHubAuthAdapter
from .vpc import CloudHubVpcAdapter

__all__ = ["CloudHubAuthAdapter", "CloudHubVpcAdapter"]
