import bleach
from rest_framework import serializers


class ContactSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    email = serializers.EmailField()
    message = serializers.CharField(max_length=5000)

    def validate_name(self, v):
        return bleach.clean(v.strip(), tags=[], strip=True)

    def validate_message(self, v):
        v = bleach.clean(v.strip(), tags=[], strip=True)
        if not v:
            raise serializers.ValidationError('This field may not be blank.')
        return v
