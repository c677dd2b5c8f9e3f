"""Session and identity."""

from trackwise.auth.session import SessionListener, SessionProvider, User

__all__ = ["SessionListener", "SessionProvider", "User"]
