from rest_framework import serializers


class FacilityUpdateSerializer(serializers.Serializer):
    isAvailable = serializers.BooleanField(required=False)
    name = serializers.CharField(required=False, max_length=255)
    description = serializers.CharField(required=False)
    icon = serializers.CharField(required=False, max_length=50)
    color = serializers.CharField(required=False, max_length=50)
    order = serializers.IntegerField(required=False)

    FIELD_MAP = {
        'isAvailable': 'is_available',
        'name': 'name',
        'description': 'description',
        'icon': 'icon',
        'color': 'color',
        'order': 'order',
    }

    def to_model_fields(self) -> dict:
        return {self.FIELD_MAP[k]: v for k, v in self.validated_data.items()}
