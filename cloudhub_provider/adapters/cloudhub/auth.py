"""Accounts API adapter.

Implements AuthPort against the connected-app token endpoint. The
endpoint expects snake_case field names, so the credentials body goes
through the conventional marshaller rather than the camelCase wire form.
"""

import logging

from cloudhub_provider.core.casing import conventional_json
from cloudhub_provider.core.models import Credentials, TokenResponse
from cloudhub_provider.core.ports import AuthPort

from .http import CloudHubHttpClient
from .wire import CredentialsModel, TokenResponseModel

logger = logging.getLogger(__name__)

TOKEN_PATH = "/accounts/api/v2/oauth2/token"


class CloudHubAuthAdapter(CloudHubHttpClient, AuthPort):
    """Connected-app token exchange."""

    async def exchange_token(self, credentials: Credentials) -> TokenResponse:
        """Exchange credentials for an access token.

        Raises:
            ApiError: On transport failure or non-success status.
            ValueError: If the response is not a token document.
        """
        body = conventional_json(CredentialsModel.from_domain(credentials))

        response = await self._send(
            "POST",
            TOKEN_PATH,
            headers={"Content-Type": "application/json"},
            content=body.encode("utf-8"),
        )

        token = TokenResponseModel.model_validate(response.json()).to_domain()
        logger.debug(
            "Token exchange succeeded",
            extra={"expires_in": token.expires_in},
        )
        return token
