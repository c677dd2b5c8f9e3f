"""
Session Provider

Holds who is signed in for the current app session and tells
subscribers when that changes.

There is no password check here. Identity comes from whatever sits in
front of the app; this module only tracks the "none" and "some user"
states the UI gates on.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field

logger = structlog.get_logger(__name__)


class User(BaseModel):
    """The signed-in identity."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    display_name: Optional[str] = Field(default=None, max_length=100)
    signed_in_at: datetime = Field(default_factory=datetime.now)

    @property
    def label(self) -> str:
        return self.display_name or self.email


SessionListener = Callable[[Optional[User]], None]


class SessionProvider:
    """
    Current user plus change notification.

    Listeners are called with the new user (or None) only when the
    session moves between signed out and signed in, or between two
    different users. Signing in again as the same user is not a change.
    """

    def __init__(self):
        self._user: Optional[User] = None
        self._listeners: list[SessionListener] = []

    @property
    def current_user(self) -> Optional[User]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def on_change(self, listener: SessionListener) -> Callable[[], None]:
        """
        Subscribe to session changes.

        Returns:
            A function that removes the subscription. Calling it twice is fine.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def sign_in(self, email: str, display_name: Optional[str] = None) -> User:
        """
        Start a session.

        Raises:
            ValueError: If the email is not valid
        """
        user = User(email=email, display_name=display_name or None)
        previous = self._user
        self._user = user

        if previous is None or previous.email.lower() != user.email.lower():
            logger.info("session_signed_in", email=user.email)
            self._notify()
        return user

    def sign_out(self) -> None:
        if self._user is None:
            return
        logger.info("session_signed_out", email=self._user.email)
        self._user = None
        self._notify()

    def _notify(self) -> None:
        # Copy so listeners may unsubscribe while being called
        for listener in list(self._listeners):
            listener(self._user)
