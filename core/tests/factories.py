"""Small builders shared by the API tests."""
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

from rest_framework.test import APIClient

from core.authentication import issue_access_token
from core.models import Booking, Room, User


def day(y, m, d):
    return datetime(y, m, d, tzinfo=dt_timezone.utc)


def make_user(email='guest@example.com', password='secret123', role=User.ROLE_USER, verified=True, **extra):
    extra.setdefault('full_name', 'Guest User')
    return User.objects.create_user(
        email=email, password=password, role=role, is_email_verified=verified,
        cnic_front='front.png', cnic_back='back.png', **extra,
    )


def make_room(number='101', price='100.00', **extra):
    fields = dict(
        room_number=number, room_type='double', total_beds=2, available_beds=2,
        price_per_bed=Decimal(price), title=f'Room {number}',
    )
    fields.update(extra)
    return Room.objects.create(**fields)


def make_booking(user, room, check_in, check_out, status=Booking.STATUS_PENDING, **extra):
    return Booking.objects.create(
        user=user, room=room, check_in_date=check_in, check_out_date=check_out, status=status, **extra,
    )


def auth_client(user) -> APIClient:
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_access_token(user)}')
    return client
