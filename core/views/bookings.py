"""
Booking endpoints.

Guests create and follow their own bookings; administrators see every
booking and drive the status workflow (approve, reject, check in, check
out). The business rules live in ``core.services.bookings``.
"""
from __future__ import annotations

from django.db.models import Q
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.models import Booking, User
from core.pagination import page_params, paginate
from core.permissions import IsEmailVerified
from core.serializers.bookings import BookingCreateSerializer, BookingUpdateSerializer
from core.services.bookings import create_booking, serialize_booking, update_booking

VALID_STATUSES = {c for c, _ in Booking.STATUS_CHOICES}


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsEmailVerified])
def bookings_collection(request):
    if request.method == 'POST':
        s = BookingCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        v = s.validated_data
        booking = create_booking(
            actor=request.user,
            room_id=v['room'],
            check_in=v['checkInDate'],
            check_out=v['checkOutDate'],
            notes=v.get('notes', ''),
            user_id=v.get('userId'),
        )
        return Response({'success': True, 'booking': serialize_booking(booking)}, status=status.HTTP_201_CREATED)

    user: User = request.user  # type: ignore[assignment]
    is_admin = user.role == User.ROLE_ADMIN
    q = request.query_params
    qs = Booking.objects.select_related('user', 'room')
    # Non-admins never see other users' bookings, whatever the filters say
    if not is_admin:
        qs = qs.filter(user=user)
    if q.get('status') in VALID_STATUSES:
        qs = qs.filter(status=q['status'])
    if q.get('roomId'):
        try:
            qs = qs.filter(room_id=int(q['roomId']))
        except ValueError:
            qs = qs.none()
    if is_admin and q.get('userId'):
        try:
            qs = qs.filter(user_id=int(q['userId']))
        except ValueError:
            qs = qs.none()
    search = (q.get('search') or '').strip()
    if search:
        qs = qs.filter(Q(user__full_name__icontains=search) | Q(user__email__icontains=search))

    page, limit = page_params(q, default_limit=20)
    bookings, total, pages = paginate(qs.order_by('-created_at', '-id'), page, limit)
    return Response({
        'success': True,
        'bookings': [serialize_booking(b) for b in bookings],
        'total': total,
        'page': page,
        'pages': pages,
        'limit': limit,
    })


@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated, IsEmailVerified])
def booking_detail(request, pk: int):
    if request.method == 'PATCH':
        s = BookingUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        booking = update_booking(pk, actor=request.user, changes=dict(s.validated_data))
        booking = Booking.objects.select_related('user', 'room').get(pk=booking.pk)
        return Response({'success': True, 'booking': serialize_booking(booking, with_history=True)})

    booking = Booking.objects.select_related('user', 'room').filter(pk=pk).first()
    if not booking:
        raise NotFound('Booking not found')
    if request.user.role != User.ROLE_ADMIN and booking.user_id != request.user.id:
        raise PermissionDenied('Forbidden')
    return Response({'success': True, 'booking': serialize_booking(booking, with_history=True)})
