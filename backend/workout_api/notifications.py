# workout_api/notifications.py
"""
Confirmation email delivery.

Registration never waits on this succeeding: callers catch
NotificationError and report a degraded success.
"""
from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from functools import lru_cache
from typing import Protocol

from workout_api.errors import NotificationError
from workout_api.settings import Settings, get_settings

log = logging.getLogger(__name__)

SUBJECT = "Account Validation - Workout Tracker"


def confirmation_link(settings: Settings, token: str) -> str:
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/users/validate/{token}"


def confirmation_body(first_name: str, link: str) -> str:
    return (
        f"Hi {first_name},\n\n"
        f"Please validate your account by clicking the link below:\n{link}\n\n"
        "If you did not register, you can safely ignore this email."
    )


class Mailer(Protocol):
    def send_confirmation(self, recipient: str, first_name: str, link: str) -> None: ...


class SmtpMailer:
    def __init__(self, settings: Settings):
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.user = settings.SMTP_USER
        self.password = settings.SMTP_PASSWORD
        self.sender = settings.EMAIL_SENDER

    def send_confirmation(self, recipient: str, first_name: str, link: str) -> None:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = recipient
        msg["Subject"] = SUBJECT
        msg.set_content(confirmation_body(first_name, link))
        try:
            with smtplib.SMTP(self.host, self.port, timeout=10) as smtp:
                smtp.starttls()
                if self.user:
                    smtp.login(self.user, self.password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(f"could not send confirmation to {recipient}") from exc


class LogMailer:
    """Local development: no SMTP relay, the link goes to the log."""

    def send_confirmation(self, recipient: str, first_name: str, link: str) -> None:
        log.info("confirmation link for %s: %s", recipient, link)


@lru_cache
def get_mailer() -> Mailer:
    settings = get_settings()
    if settings.SMTP_HOST:
        return SmtpMailer(settings)
    return LogMailer()
