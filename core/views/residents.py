"""
Resident endpoints for administrators.

A resident is not stored separately: it is a booking in ``checked_in``
status, shown as the guest and the room they occupy. Removing a
resident checks the booking out.
"""
from __future__ import annotations

from django.db.models import Q
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.models import Booking
from core.pagination import page_params, paginate
from core.permissions import IsAdminRole, IsEmailVerified
from core.services.bookings import check_out_resident


def _serialize(b: Booking, state: str = 'active') -> dict:
    return {
        'id': b.id,
        'fullName': b.user.full_name,
        'email': b.user.email,
        'phoneNumber': '',
        'assignedRoom': b.room.room_number,
        'status': state,
        'checkInDate': b.check_in_date,
        'checkOutDate': b.check_out_date,
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole, IsEmailVerified])
def residents_collection(request):
    qs = Booking.objects.select_related('user', 'room').filter(status=Booking.STATUS_CHECKED_IN)
    search = (request.query_params.get('search') or '').strip()
    if search:
        qs = qs.filter(
            Q(user__full_name__icontains=search)
            | Q(room__room_number__icontains=search)
            | Q(user__email__icontains=search)
        )
    page, limit = page_params(request.query_params, default_limit=20)
    residents, total, pages = paginate(qs.order_by('-check_in_date', '-id'), page, limit)
    return Response({
        'success': True,
        'residents': [_serialize(b) for b in residents],
        'total': total,
        'page': page,
        'pages': pages,
        'limit': limit,
    })


@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole, IsEmailVerified])
def resident_detail(request, pk: int):
    if request.method == 'DELETE':
        booking = check_out_resident(pk, actor=request.user)
        booking = Booking.objects.select_related('user', 'room').get(pk=booking.pk)
        return Response({'success': True, 'resident': _serialize(booking, 'checked_out')})

    booking = (
        Booking.objects.select_related('user', 'room')
        .filter(pk=pk, status=Booking.STATUS_CHECKED_IN)
        .first()
    )
    if not booking:
        raise NotFound('Resident not found')
    return Response({'success': True, 'resident': _serialize(booking)})
