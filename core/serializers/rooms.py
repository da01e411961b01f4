from decimal import Decimal

from rest_framework import serializers

from core.models import Room


class RoomSerializer(serializers.Serializer):
    """Body of room create and full update."""
    roomNumber = serializers.CharField(max_length=20, error_messages={'blank': 'Room number is required'})
    roomType = serializers.ChoiceField(
        choices=[c for c, _ in Room.TYPE_CHOICES],
        error_messages={'invalid_choice': 'Room type must be one of: single, double, triple, dorm'},
    )
    totalBeds = serializers.IntegerField(
        min_value=1, error_messages={'min_value': 'Total beds must be at least 1'},
    )
    availableBeds = serializers.IntegerField(
        min_value=0, error_messages={'min_value': 'Available beds cannot be negative'},
    )
    pricePerBed = serializers.DecimalField(max_digits=10, decimal_places=2)
    floor = serializers.IntegerField(required=False, allow_null=True)
    amenities = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    images = serializers.ListField(
        child=serializers.URLField(error_messages={'invalid': 'Each image must be a valid URL'}),
        required=False, default=list,
    )
    title = serializers.CharField(max_length=255, error_messages={'blank': 'Title is required'})
    description = serializers.CharField(required=False, allow_blank=True, default='')
    status = serializers.ChoiceField(
        choices=[c for c, _ in Room.STATUS_CHOICES], required=False, default=Room.STATUS_AVAILABLE,
        error_messages={'invalid_choice': 'Status must be one of: available, full, maintenance'},
    )
    isActive = serializers.BooleanField(required=False, default=True)

    def validate_pricePerBed(self, v):
        if v <= Decimal('0'):
            raise serializers.ValidationError('Price per bed must be a positive number')
        return v

    def validate(self, attrs):
        if attrs['availableBeds'] > attrs['totalBeds']:
            raise serializers.ValidationError({'availableBeds': 'Available beds cannot exceed total beds'})
        return attrs

    def to_model_fields(self) -> dict:
        v = self.validated_data
        return {
            'room_number': v['roomNumber'],
            'room_type': v['roomType'],
            'total_beds': v['totalBeds'],
            'available_beds': v['availableBeds'],
            'price_per_bed': v['pricePerBed'],
            'floor': v.get('floor'),
            'amenities': v.get('amenities', []),
            'images': v.get('images', []),
            'title': v['title'],
            'description': v.get('description') or '',
            'status': v.get('status', Room.STATUS_AVAILABLE),
            'is_active': v.get('isActive', True),
        }
