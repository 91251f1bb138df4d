"""Application aggregate: an OAuth-style client registered by a user."""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from datetime import UTC, datetime

from identity.domain.aggregates.domain import _require_name
from identity.domain.value_objects import ApplicationId, UserId

DEFAULT_TOKEN_EXPIRE_SECONDS = 3600


@dataclass
class Application:
    """Client application owned by a user.

    Client credentials are generated once, at registration. Verifying them
    and issuing tokens belongs to the token service, not to this context.
    """

    id: ApplicationId
    user_id: UserId
    name: str
    client_id: str
    client_secret: str
    redirect_uri: str = ""
    website: str = ""
    logo_image: str = ""
    description: str = ""
    locked: bool = False
    token_expire_seconds: int = DEFAULT_TOKEN_EXPIRE_SECONDS
    last_login_at: datetime | None = None
    last_login_ip: str | None = None
    login_failed_times: int = 0
    login_success_times: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def register(
        cls,
        user_id: UserId,
        name: str,
        redirect_uri: str = "",
        website: str = "",
        logo_image: str = "",
        description: str = "",
        token_expire_seconds: int = DEFAULT_TOKEN_EXPIRE_SECONDS,
        secret_bytes: int = 32,
    ) -> Application:
        """Factory method registering a new client application.

        Args:
            user_id: Owner of the application
            name: Application name, unique per owner
            redirect_uri: OAuth redirect URI
            website: Public website
            logo_image: Logo URL
            description: Free-form description
            token_expire_seconds: Lifetime of tokens issued to this client
            secret_bytes: Entropy of the generated client secret

        Returns:
            A new Application with generated client credentials

        Raises:
            ValueError: If name is empty or token lifetime is not positive
        """
        if token_expire_seconds <= 0:
            raise ValueError("token_expire_seconds must be positive")

        return cls(
            id=ApplicationId.generate(),
            user_id=user_id,
            name=_require_name(name, "Application"),
            client_id=secrets.token_hex(12),
            client_secret=secrets.token_urlsafe(secret_bytes),
            redirect_uri=redirect_uri,
            website=website,
            logo_image=logo_image,
            description=description,
            token_expire_seconds=token_expire_seconds,
        )
