"""Tests for the session provider."""

import pytest

from trackwise.auth import SessionProvider


class TestSessionProvider:

    def test_starts_signed_out(self):
        session = SessionProvider()
        assert session.current_user is None
        assert not session.is_authenticated

    def test_sign_in_and_out(self):
        session = SessionProvider()
        user = session.sign_in("asha@example.com", "Asha")

        assert session.current_user == user
        assert user.label == "Asha"

        session.sign_out()
        assert session.current_user is None

    def test_label_falls_back_to_email(self):
        user = SessionProvider().sign_in("ben@example.com")
        assert user.label == "ben@example.com"

    def test_invalid_email_rejected(self):
        session = SessionProvider()
        with pytest.raises(ValueError):
            session.sign_in("not-an-email")
        assert session.current_user is None

    def test_notifies_on_transitions_only(self):
        session = SessionProvider()
        seen = []
        session.on_change(lambda user: seen.append(user.email if user else None))

        session.sign_in("asha@example.com")
        session.sign_in("ASHA@example.com")  # same user again
        session.sign_in("ben@example.com")
        session.sign_out()
        session.sign_out()  # already signed out

        assert seen == ["asha@example.com", "ben@example.com", None]

    def test_unsubscribe(self):
        session = SessionProvider()
        seen = []
        unsubscribe = session.on_change(seen.append)

        session.sign_in("asha@example.com")
        unsubscribe()
        unsubscribe()
        session.sign_out()

        assert len(seen) == 1

    def test_listener_may_unsubscribe_itself(self):
        session = SessionProvider()
        calls = []

        def once(user):
            calls.append(user)
            unsubscribe()

        unsubscribe = session.on_change(once)
        session.sign_in("asha@example.com")
        session.sign_out()

        assert len(calls) == 1
