import bleach
from rest_framework import serializers


def _password(label: str = 'Password', **kwargs):
    return serializers.CharField(
        min_length=6, max_length=100, trim_whitespace=False,
        error_messages={
            'min_length': f'{label} must be at least 6 characters',
            'max_length': f'{label} must not exceed 100 characters',
        },
        **kwargs,
    )


class EmailInputField(serializers.EmailField):
    default_error_messages = {'invalid': 'Please provide a valid email address'}

    def to_internal_value(self, data):
        return super().to_internal_value(data).strip().lower()


class RegisterSerializer(serializers.Serializer):
    fullName = serializers.CharField(
        min_length=2, max_length=100,
        error_messages={
            'min_length': 'Full name must be at least 2 characters',
            'max_length': 'Full name must not exceed 100 characters',
        },
    )
    email = EmailInputField()
    password = _password()
    cnicFront = serializers.CharField(error_messages={'blank': 'CNIC front image is required'})
    cnicBack = serializers.CharField(error_messages={'blank': 'CNIC back image is required'})

    def validate_fullName(self, v):
        v = bleach.clean(v.strip(), tags=[], strip=True)
        if len(v) < 2:
            raise serializers.ValidationError('Full name must be at least 2 characters')
        return v


class VerifyEmailSerializer(serializers.Serializer):
    token = serializers.CharField(error_messages={'blank': 'Verification token is required'})


class LoginSerializer(serializers.Serializer):
    email = EmailInputField()
    password = serializers.CharField(trim_whitespace=False, error_messages={'blank': 'Password is required'})


class ForgotPasswordSerializer(serializers.Serializer):
    email = EmailInputField()


class ResetPasswordSerializer(serializers.Serializer):
    token = serializers.CharField(error_messages={'blank': 'Reset token is required'})
    password = _password()


class ChangePasswordSerializer(serializers.Serializer):
    oldPassword = serializers.CharField(trim_whitespace=False, error_messages={'blank': 'Old password is required'})
    newPassword = _password('New password')
