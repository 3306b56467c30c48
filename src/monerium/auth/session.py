"""In-memory authentication state of one client.

:class:`AuthSession` owns everything a client learns while authenticating:
the selected :class:`~monerium.models.Environment`, the PKCE verifier of
the latest authorization URL, the current
:class:`~monerium.models.BearerProfile`, and the ``Authorization`` header
value derived from it.

The profile and the header only change together, through
:meth:`AuthSession.set_bearer_profile` (or :meth:`AuthSession.clear`).

.. note::
   A session is not guarded against concurrent use. A request issued while
   :meth:`~monerium.client.AsyncMoneriumClient.authenticate` is in flight
   on the same client may carry either the previous or the new header.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from monerium.models import BearerProfile, Environment

logger = logging.getLogger(__name__)


class AuthSession:
    """Bearer credentials and PKCE state bound to a single environment.

    Args:
        environment: The deployment this session talks to. Fixed for the
            lifetime of the session.

    Example::

        session = AuthSession(get_environment("sandbox"))
        session.set_bearer_profile({"access_token": "tok123"})
        assert session.authorization == "Bearer tok123"
    """

    def __init__(self, environment: Environment) -> None:
        self._environment = environment
        self._bearer_profile: Optional[BearerProfile] = None
        self._authorization: Optional[str] = None
        self.code_verifier: Optional[str] = None

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def bearer_profile(self) -> Optional[BearerProfile]:
        """The current bearer profile, or ``None`` before authentication."""
        return self._bearer_profile

    @property
    def authorization(self) -> Optional[str]:
        """Cached ``Authorization`` header value (``"Bearer <access_token>"``)."""
        return self._authorization

    @property
    def is_authenticated(self) -> bool:
        return self._bearer_profile is not None

    def set_bearer_profile(
        self, profile: Union[BearerProfile, Mapping[str, Any]]
    ) -> BearerProfile:
        """Replace the bearer profile and recompute the authorization header.

        Args:
            profile: A :class:`~monerium.models.BearerProfile` or the raw
                token-endpoint response.

        Returns:
            The stored profile.

        Raises:
            pydantic.ValidationError: If *profile* lacks ``access_token``.
                The previous profile is left in place.
        """
        if not isinstance(profile, BearerProfile):
            profile = BearerProfile.model_validate(dict(profile))
        authorization = f"Bearer {profile.access_token}"
        self._bearer_profile, self._authorization = profile, authorization
        logger.debug("Stored bearer profile for profile=%s", profile.profile)
        return profile

    def clear(self) -> None:
        """Forget the bearer profile, header and PKCE verifier."""
        self._bearer_profile = None
        self._authorization = None
        self.code_verifier = None
