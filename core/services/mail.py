"""
Outgoing mail for account verification and password reset.

A :class:`Mailer` is built from settings and handed to the service
functions that send mail. Used as a context manager it holds one
backend connection open for its lifetime; otherwise every message opens
and closes its own. Bodies are rendered from ``core/templates/emails``.
"""
from __future__ import annotations

import logging
from datetime import date

from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection
from django.template.loader import render_to_string
from django.utils.html import strip_tags

from core.exceptions import MailDeliveryError

logger = logging.getLogger(__name__)


class Mailer:

    def __init__(self, *, from_email: str, frontend_url: str, brand: str = 'StayInn Hostels',
                 enabled: bool = True, connection=None):
        self.from_email = from_email
        self.frontend_url = frontend_url.rstrip('/')
        self.brand = brand
        self.enabled = enabled
        self.connection = connection

    @classmethod
    def from_settings(cls) -> "Mailer":
        return cls(
            from_email=settings.DEFAULT_FROM_EMAIL,
            frontend_url=settings.FRONTEND_URL,
            brand=getattr(settings, 'BRAND_NAME', 'StayInn Hostels'),
            enabled=getattr(settings, 'EMAIL_ENABLED', False),
        )

    def __enter__(self) -> "Mailer":
        if self.connection is None:
            self.connection = get_connection(fail_silently=False)
        try:
            self.connection.open()
        except OSError as exc:
            raise MailDeliveryError(f'Could not connect to mail server: {exc}') from exc
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.connection is not None:
            self.connection.close()
            self.connection = None

    def send_verification(self, user, token: str) -> None:
        url = f'{self.frontend_url}/verify-email?token={token}'
        self._send(
            subject=f'Verify Your Email - {self.brand}',
            to=user.email,
            template='emails/verify_email.html',
            context={'full_name': user.full_name, 'url': url},
            link=url,
        )

    def send_password_reset(self, user, token: str) -> None:
        url = f'{self.frontend_url}/reset-password?token={token}'
        self._send(
            subject=f'Reset Your Password - {self.brand}',
            to=user.email,
            template='emails/reset_password.html',
            context={'full_name': user.full_name, 'url': url},
            link=url,
        )

    def _send(self, *, subject: str, to: str, template: str, context: dict, link: str) -> None:
        if not self.enabled:
            # No SMTP configured; the link is still reachable from the logs
            logger.warning('SMTP not configured, "%s" for %s: %s', subject, to, link)
        html = render_to_string(template, {**context, 'brand': self.brand, 'year': date.today().year})
        message = EmailMultiAlternatives(
            subject=subject,
            body=strip_tags(html),
            from_email=self.from_email,
            to=[to],
            connection=self.connection,
        )
        message.attach_alternative(html, 'text/html')
        try:
            message.send(fail_silently=False)
        except OSError as exc:
            logger.error('Failed to send "%s" to %s: %s', subject, to, exc)
            raise MailDeliveryError(f'Failed to send email to {to}') from exc
        logger.info('Sent "%s" to %s', subject, to)
