"""Provider configuration: turns configuration values into a session.

Exactly one token exchange happens per successful configuration, and
none at all when the organization id is missing or an access token is
supplied directly.
"""

import logging

from .models import (
    Credentials,
    Diagnostic,
    ProviderConfig,
    ProviderSession,
    TokenResponse,
)
from .ports import ApiError, AuthPort

logger = logging.getLogger(__name__)


async def configure_provider(
    config: ProviderConfig, auth: AuthPort
) -> tuple[ProviderSession | None, list[Diagnostic]]:
    """Authenticate and build the session used by every resource operation.

    Args:
        config: Provider configuration values.
        auth: AuthPort used for the token exchange.

    Returns:
        (session, diagnostics). session is None whenever diagnostics
        contains an error.
    """
    if not config.org_id:
        return None, [
            Diagnostic.error(
                "Required org id",
                "The Organization Id is required.",
            )
        ]

    if config.access_token:
        logger.info(
            "Using supplied access token",
            extra={"org_id": config.org_id},
        )
        return (
            ProviderSession(
                token=TokenResponse(access_token=config.access_token),
                org_id=config.org_id,
            ),
            [],
        )

    credentials = Credentials()
    if config.client_id and config.client_secret:
        credentials = Credentials(
            client_id=config.client_id,
            client_secret=config.client_secret,
        )
    else:
        logger.warning("Client id or secret missing, authenticating without credentials")

    try:
        token = await auth.exchange_token(credentials)
    except ApiError as e:
        logger.error(
            f"Token exchange failed: {e}",
            extra={"org_id": config.org_id, "status_code": e.status_code},
        )
        return None, [Diagnostic.error("Unable to Authenticate", e.detail)]
    except ValueError as e:
        return None, [Diagnostic.error("Unable to Authenticate", str(e))]

    logger.info("Authenticated", extra={"org_id": config.org_id})
    return ProviderSession(token=token, org_id=config.org_id), []
