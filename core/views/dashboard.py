"""
Administrative dashboard endpoint.

Provides a high level overview of accounts, rooms and bookings. Only
verified administrators may access this endpoint.
"""
from __future__ import annotations

from django.db.models import Count
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Booking, Room, User
from ..permissions import IsAdminRole, IsEmailVerified


def _counts_by(qs, field: str, choices) -> dict[str, int]:
    counts = {key: 0 for key, _ in choices}
    for row in qs.values(field).annotate(n=Count('id')):
        counts[row[field]] = row['n']
    return counts


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole, IsEmailVerified])
def admin_dashboard(request):
    """Return dashboard metrics for administrators.

    User figures count guests only (role ``user``); administrators are
    reported separately. Residents are checked-in bookings.
    """
    guests = User.objects.filter(role=User.ROLE_USER)
    verified = guests.filter(is_email_verified=True).count()
    total_guests = guests.count()
    bookings = _counts_by(Booking.objects.all(), 'status', Booking.STATUS_CHOICES)
    return Response({
        'success': True,
        'stats': {
            'users': {
                'total': total_guests,
                'verified': verified,
                'unverified': total_guests - verified,
            },
            'admins': {
                'total': User.objects.filter(role=User.ROLE_ADMIN).count(),
            },
            'rooms': {
                'total': Room.objects.count(),
                'active': Room.objects.filter(is_active=True).count(),
                'byStatus': _counts_by(Room.objects.all(), 'status', Room.STATUS_CHOICES),
            },
            'bookings': {
                'total': sum(bookings.values()),
                'pending': bookings[Booking.STATUS_PENDING],
                'byStatus': bookings,
            },
            'residents': {
                'total': bookings[Booking.STATUS_CHECKED_IN],
            },
        },
    })
