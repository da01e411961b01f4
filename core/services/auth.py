"""
Account lifecycle: registration, email verification, login and
password management.

Views stay thin and call into these functions; domain failures are
raised as DRF exceptions and rendered by ``core.exceptions``. Functions
that send mail take the :class:`core.services.mail.Mailer` to use as an
argument.
"""
from __future__ import annotations

import logging
import secrets

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import AuthenticationFailed, PermissionDenied

from core.authentication import issue_access_token
from core.exceptions import BadRequest, Conflict, MailDeliveryError
from core.models import User

logger = logging.getLogger(__name__)


def generate_token() -> str:
    """64 hex characters from the OS CSPRNG."""
    return secrets.token_hex(32)


def serialize_user(user: User, detail: bool = False) -> dict:
    data = {
        'id': user.id,
        'fullName': user.full_name,
        'email': user.email,
        'role': user.role,
        'isEmailVerified': user.is_email_verified,
    }
    if detail:
        data.update({
            'cnicFront': user.cnic_front,
            'cnicBack': user.cnic_back,
            'createdAt': user.created_at,
            'updatedAt': user.updated_at,
        })
    return data


def register_user(*, full_name: str, email: str, password: str, cnic_front: str, cnic_back: str,
                  mailer) -> User:
    """Create an unverified account and mail its verification link.

    The mailer is opened here, after the account is saved, so an
    unreachable mail server is logged like any other send failure and
    does not undo the registration.
    """
    email = email.strip().lower()
    if User.objects.filter(email=email).exists():
        raise Conflict('User with this email already exists')

    token = generate_token()
    with transaction.atomic():
        user = User.objects.create_user(
            email=email,
            password=password,
            full_name=full_name,
            cnic_front=cnic_front,
            cnic_back=cnic_back,
            email_verify_token=token,
            email_verify_token_expiry=timezone.now() + settings.EMAIL_VERIFY_TOKEN_TTL,
        )
    logger.info('Registered user id=%s', user.id)

    try:
        with mailer:
            mailer.send_verification(user, token)
    except MailDeliveryError:
        logger.exception('Failed to send verification email to user id=%s', user.id)
    return user


def verify_email(token: str) -> User:
    user = User.objects.filter(
        email_verify_token=token,
        email_verify_token_expiry__gt=timezone.now(),
    ).first()
    if not user:
        raise BadRequest('Invalid or expired verification token')
    if user.is_email_verified:
        raise BadRequest('Email is already verified')
    user.is_email_verified = True
    user.email_verify_token = None
    user.email_verify_token_expiry = None
    user.save(update_fields=['is_email_verified', 'email_verify_token', 'email_verify_token_expiry', 'updated_at'])
    return user


def login(email: str, password: str, *, require_admin: bool = False) -> tuple[User, str]:
    """Check credentials and return ``(user, access_token)``.

    Bad credentials are a 401. A valid password on an unverified account,
    or a non-admin account when ``require_admin`` is set, is a 403.
    """
    user = User.objects.filter(email=email.strip().lower()).first()
    if not user or not user.is_active or not user.check_password(password):
        raise AuthenticationFailed('Invalid email or password')
    if require_admin and user.role != User.ROLE_ADMIN:
        raise PermissionDenied('Access denied. Admin privileges required.')
    if not user.is_email_verified:
        raise PermissionDenied(
            'Please verify your email address before logging in. '
            'Check your inbox for the verification link.'
        )
    return user, issue_access_token(user)


def request_password_reset(email: str, *, mailer) -> bool:
    """Issue a reset token and mail it. Unknown emails are a silent no-op.

    Returns whether a message was sent. :class:`MailDeliveryError`
    propagates to the caller.
    """
    user = User.objects.filter(email=email.strip().lower()).first()
    if not user:
        return False
    user.reset_password_token = generate_token()
    user.reset_password_expiry = timezone.now() + settings.PASSWORD_RESET_TOKEN_TTL
    user.save(update_fields=['reset_password_token', 'reset_password_expiry', 'updated_at'])
    mailer.send_password_reset(user, user.reset_password_token)
    return True


def reset_password(token: str, password: str) -> User:
    user = User.objects.filter(
        reset_password_token=token,
        reset_password_expiry__gt=timezone.now(),
    ).first()
    if not user:
        raise BadRequest('Invalid or expired reset token')
    user.set_password(password)
    user.reset_password_token = None
    user.reset_password_expiry = None
    user.save(update_fields=['password', 'reset_password_token', 'reset_password_expiry', 'updated_at'])
    return user


def change_password(user: User, old_password: str, new_password: str) -> None:
    if not user.check_password(old_password):
        raise AuthenticationFailed('Current password is incorrect')
    if user.check_password(new_password):
        raise BadRequest('New password must be different from current password')
    user.set_password(new_password)
    user.save(update_fields=['password', 'updated_at'])
