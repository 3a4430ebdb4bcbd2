"""
Scoped subscriptions to Supabase Auth session events.

Handlers are registered for the duration of a ``with`` block and removed when
it exits, so no listener outlives the request that needed it:

    reconciler = SignInReconciler(profile_service)
    with AuthEventStream(auth_client.auth).subscribe(reconciler):
        AuthService(auth_client).login(credentials)
    reconciler.raise_for_errors()
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional
import logging

from gallery.core.exceptions import TransportFailure
from gallery.modules.users.schemas import ProfileEnsureResult
from gallery.modules.users.service import ProfileService

logger = logging.getLogger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"
TOKEN_REFRESHED = "TOKEN_REFRESHED"

AuthEventHandler = Callable[[str, Optional[Any]], None]


class AuthEventStream:
    def __init__(self, auth):
        self.auth = auth

    @contextmanager
    def subscribe(self, handler: AuthEventHandler) -> Iterator[Any]:
        """Register handler with the auth client; always unsubscribes on exit."""
        subscription = self.auth.on_auth_state_change(handler)
        try:
            yield subscription
        finally:
            subscription.unsubscribe()


class SignInReconciler:
    """Runs ensure_profile for every SIGNED_IN event that carries a user.

    Failures are kept rather than raised so they do not escape through the
    auth client's notification loop; call raise_for_errors() afterwards.
    """

    def __init__(self, profiles: ProfileService):
        self.profiles = profiles
        self.results: List[ProfileEnsureResult] = []
        self.errors: List[TransportFailure] = []

    def __call__(self, event: str, session: Optional[Any]) -> None:
        if event != SIGNED_IN:
            logger.debug(f"Ignoring auth event {event}")
            return
        user = getattr(session, "user", None)
        if user is None:
            return
        try:
            self.results.append(self.profiles.ensure_profile(user.id, user.email))
        except TransportFailure as e:
            logger.error(f"Could not reconcile profile after sign-in of {user.id}: {e}")
            self.errors.append(e)

    @property
    def created(self) -> bool:
        return any(result.created for result in self.results)

    def raise_for_errors(self):
        if self.errors:
            raise self.errors[0]
