"""
Authentication views.

Registration, email verification, login and password management for
hostel guests, plus the admin login used by the dashboard. By keeping
these views apart from the authentication class (see
``core.authentication``) we avoid circular imports when Django REST
framework initialises authentication classes.
"""
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from core.exceptions import MailDeliveryError
from core.permissions import IsEmailVerified
from core.serializers.auth import (
    ChangePasswordSerializer,
    ForgotPasswordSerializer,
    LoginSerializer,
    RegisterSerializer,
    ResetPasswordSerializer,
    VerifyEmailSerializer,
)
from core.services import auth as accounts
from core.services.auth import serialize_user
from core.services.mail import Mailer

logger = logging.getLogger(__name__)

RESET_SENT_MESSAGE = 'If an account with that email exists, a password reset link has been sent.'


# ---------------------------------------------------------------------
# Registration & verification
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    user = accounts.register_user(
        full_name=v['fullName'],
        email=v['email'],
        password=v['password'],
        cnic_front=v['cnicFront'],
        cnic_back=v['cnicBack'],
        mailer=Mailer.from_settings(),
    )
    return Response({
        'success': True,
        'message': 'Registration successful. Please check your email to verify your account.',
        'user': {
            'id': user.id,
            'fullName': user.full_name,
            'email': user.email,
            'isEmailVerified': user.is_email_verified,
        },
    }, status=status.HTTP_201_CREATED)

register_view.cls.throttle_scope = 'login'


@api_view(['POST'])
@permission_classes([AllowAny])
def verify_email_view(request):
    s = VerifyEmailSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    accounts.verify_email(s.validated_data['token'])
    return Response({'success': True, 'message': 'Email verified successfully. You can now login.'})


# ---------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """Email/password login returning a bearer token and the user profile."""
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user, token = accounts.login(s.validated_data['email'], s.validated_data['password'])
    logger.info('Login ok user=%s ip=%s', user.id, request.META.get('REMOTE_ADDR'))
    return Response({
        'success': True,
        'message': 'Login successful',
        'token': token,
        'user': serialize_user(user),
    })

# ScopedRateThrottle reads throttle_scope from the wrapped APIView class
login_view.cls.throttle_scope = 'login'


@api_view(['POST'])
@permission_classes([AllowAny])
def admin_login_view(request):
    """Same as :func:`login_view` but only admins get a token."""
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user, token = accounts.login(s.validated_data['email'], s.validated_data['password'], require_admin=True)
    logger.info('Admin login ok user=%s ip=%s', user.id, request.META.get('REMOTE_ADDR'))
    return Response({
        'success': True,
        'message': 'Admin login successful',
        'token': token,
        'user': serialize_user(user),
    })

admin_login_view.cls.throttle_scope = 'login'


# ---------------------------------------------------------------------
# Password reset
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def forgot_password_view(request):
    s = ForgotPasswordSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        with Mailer.from_settings() as mailer:
            accounts.request_password_reset(s.validated_data['email'], mailer=mailer)
    except MailDeliveryError:
        logger.exception('Password reset email failed')
        return Response({
            'success': False,
            'error': 'Failed to send password reset email. Please try again later.',
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response({'success': True, 'message': RESET_SENT_MESSAGE})

forgot_password_view.cls.throttle_scope = 'password_reset'


@api_view(['POST'])
@permission_classes([AllowAny])
def reset_password_view(request):
    s = ResetPasswordSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    accounts.reset_password(s.validated_data['token'], s.validated_data['password'])
    return Response({
        'success': True,
        'message': 'Password reset successful. You can now login with your new password.',
    })

reset_password_view.cls.throttle_scope = 'password_reset'


# ---------------------------------------------------------------------
# Current user
# ---------------------------------------------------------------------
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsEmailVerified])
def me_view(request):
    return Response({'success': True, 'user': serialize_user(request.user, detail=True)})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsEmailVerified])
def change_password_view(request):
    s = ChangePasswordSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    accounts.change_password(request.user, s.validated_data['oldPassword'], s.validated_data['newPassword'])
    return Response({'success': True, 'message': 'Password changed successfully'})
