from rest_framework import serializers

from core.models import User


class RoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=[c for c, _ in User.ROLE_CHOICES])
