"""Mail adapter registry.

Uses the fake mailer by default; a real SMTP or API-backed adapter can be
installed with set_mailer() at startup.
"""

from storefront.mail.port import MailPort

_current_mailer: MailPort | None = None


def get_mailer() -> MailPort:
    """Return the configured mailer (singleton)."""
    global _current_mailer
    if _current_mailer is None:
        from storefront.mail.fake_mailer import FakeMailer

        _current_mailer = FakeMailer()
    return _current_mailer


def set_mailer(mailer: MailPort) -> None:
    """Override the active mailer (useful for tests)."""
    global _current_mailer
    _current_mailer = mailer


def reset_mailer() -> None:
    """Reset the mailer singleton (useful for testing)."""
    global _current_mailer
    _current_mailer = None
