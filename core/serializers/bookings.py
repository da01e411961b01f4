import re
from datetime import datetime, time, timezone as dt_timezone

from django.utils.dateparse import parse_date, parse_datetime
from rest_framework import serializers

from core.models import Booking

_DATE_ONLY = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def parse_when(value):
    """Parse ``YYYY-MM-DD`` or an ISO datetime into an aware UTC datetime.

    Returns ``None`` for anything else. Bare dates and naive datetimes
    are taken as UTC.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    value = value.strip()
    try:
        if _DATE_ONLY.match(value):
            day = parse_date(value)
            return datetime.combine(day, time.min, tzinfo=dt_timezone.utc) if day else None
        dt = parse_datetime(value)
    except ValueError:
        return None
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=dt_timezone.utc)
    return dt


class LenientDateTimeField(serializers.DateTimeField):
    """ISO datetime, or a bare ``YYYY-MM-DD`` read as midnight UTC."""

    def to_internal_value(self, value):
        if isinstance(value, str) and _DATE_ONLY.match(value.strip()):
            parsed = parse_when(value)
            if parsed is None:
                self.fail('invalid', format='YYYY-MM-DD')
            return parsed
        return super().to_internal_value(value)


class BookingCreateSerializer(serializers.Serializer):
    room = serializers.IntegerField(error_messages={'required': 'Room is required'})
    checkInDate = LenientDateTimeField()
    checkOutDate = LenientDateTimeField()
    notes = serializers.CharField(required=False, allow_blank=True)
    # admin only: create on behalf of another user
    userId = serializers.IntegerField(required=False, allow_null=True)

    def validate(self, attrs):
        if attrs['checkOutDate'] <= attrs['checkInDate']:
            raise serializers.ValidationError({'checkOutDate': 'Check-out date must be after check-in date'})
        return attrs


class BookingUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[c for c, _ in Booking.STATUS_CHOICES], required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    paymentStatus = serializers.ChoiceField(choices=[c for c, _ in Booking.PAYMENT_CHOICES], required=False)
