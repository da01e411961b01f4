"""
Room inventory endpoints.

Reads are public so the booking site can browse rooms; create, update
and delete need an administrator. The list can be narrowed to rooms
free for a ``checkIn``/``checkOut`` range.
"""
from __future__ import annotations

import logging

from django.db.models import Q
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from core.exceptions import Conflict
from core.models import Room
from core.pagination import page_params, paginate
from core.permissions import IsAdminOrReadOnly
from core.serializers.bookings import parse_when
from core.serializers.rooms import RoomSerializer
from core.services.availability import booked_room_ids

logger = logging.getLogger(__name__)


def _serialize(r: Room) -> dict:
    return {
        'id': r.id,
        'roomNumber': r.room_number,
        'roomType': r.room_type,
        'totalBeds': r.total_beds,
        'availableBeds': r.available_beds,
        'pricePerBed': r.price_per_bed,
        'floor': r.floor,
        'amenities': r.amenities,
        'images': r.images,
        'title': r.title,
        'description': r.description,
        'status': r.status,
        'isActive': r.is_active,
        'createdAt': r.created_at,
        'updatedAt': r.updated_at,
    }


def _get_room(pk: int) -> Room:
    room = Room.objects.filter(pk=pk).first()
    if not room:
        raise NotFound('Room not found')
    return room


@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def rooms_collection(request):
    if request.method == 'POST':
        return _create_room(request)

    q = request.query_params
    qs = Room.objects.all()
    if q.get('roomType'):
        qs = qs.filter(room_type=q['roomType'])
    if q.get('status'):
        qs = qs.filter(status=q['status'])
    if 'isActive' in q:
        qs = qs.filter(is_active=q.get('isActive') == 'true')
    if q.get('floor'):
        try:
            qs = qs.filter(floor=int(q['floor']))
        except ValueError:
            pass
    search = (q.get('search') or '').strip()
    if search:
        qs = qs.filter(
            Q(room_number__icontains=search) | Q(title__icontains=search) | Q(description__icontains=search)
        )

    check_in, check_out = parse_when(q.get('checkIn')), parse_when(q.get('checkOut'))
    if check_in and check_out and check_out > check_in:
        booked = booked_room_ids(check_in, check_out)
        if booked:
            qs = qs.exclude(pk__in=booked)

    page, limit = page_params(q, default_limit=10)
    rooms, total, pages = paginate(qs.order_by('-created_at', '-id'), page, limit)
    return Response({
        'success': True,
        'count': len(rooms),
        'total': total,
        'page': page,
        'pages': pages,
        'limit': limit,
        'rooms': [_serialize(r) for r in rooms],
    })


def _create_room(request):
    s = RoomSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    fields = s.to_model_fields()
    if Room.objects.filter(room_number=fields['room_number']).exists():
        raise Conflict('Room number already exists')
    room = Room.objects.create(**fields)
    logger.info('Room %s created by user=%s', room.room_number, request.user.id)
    return Response({
        'success': True,
        'message': 'Room created successfully',
        'room': _serialize(room),
    }, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def room_detail(request, pk: int):
    room = _get_room(pk)
    if request.method == 'GET':
        return Response({'success': True, 'room': _serialize(room)})

    if request.method == 'DELETE':
        # Booking.room is PROTECT; the exception handler turns that into a 409
        room.delete()
        logger.info('Room %s deleted by user=%s', pk, request.user.id)
        return Response({'success': True, 'message': 'Room deleted successfully'})

    s = RoomSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    fields = s.to_model_fields()
    if Room.objects.filter(room_number=fields['room_number']).exclude(pk=room.pk).exists():
        raise Conflict('Room number already exists')
    for field, value in fields.items():
        setattr(room, field, value)
    room.save()
    return Response({
        'success': True,
        'message': 'Room updated successfully',
        'room': _serialize(room),
    })
