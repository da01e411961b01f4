"""
JWT bearer authentication for the API.

This module defines a subclass of simplejwt's ``JWTAuthentication`` that
reads ``Authorization: Bearer <token>`` and resolves the ``userId``
claim to a :class:`core.models.User`. Keeping it separate from any
view definitions avoids circular imports when the REST framework
imports authentication classes during initialization.
"""
from __future__ import annotations

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.tokens import AccessToken


class BearerJWTAuthentication(JWTAuthentication):
    """Bearer token authentication with a stable import path for settings."""

    www_authenticate_realm = 'api'


def issue_access_token(user) -> str:
    """Return a signed access token with payload ``{userId, role}``."""
    token = AccessToken.for_user(user)
    token['role'] = user.role
    return str(token)
