"""
Booking lifecycle.

Creation and status changes run in a transaction that locks the room
row before re-checking overlaps, so two requests racing for the same
dates serialise on databases with row locks. Every status change is
recorded as a :class:`BookingStatusChange`.
"""
from __future__ import annotations

import logging
from datetime import datetime

from django.db import transaction
from rest_framework.exceptions import NotFound, PermissionDenied

from core.exceptions import BadRequest, Conflict
from core.models import Booking, BookingStatusChange, Room, User

from .availability import CREATE_BLOCKING, MUTATE_BLOCKING, compute_total, has_overlap

logger = logging.getLogger(__name__)

TRANSITIONS = {
    Booking.STATUS_PENDING: [Booking.STATUS_APPROVED, Booking.STATUS_REJECTED, Booking.STATUS_CANCELLED],
    Booking.STATUS_APPROVED: [Booking.STATUS_CHECKED_IN, Booking.STATUS_CANCELLED],
    Booking.STATUS_CHECKED_IN: [Booking.STATUS_CHECKED_OUT],
    Booking.STATUS_REJECTED: [],
    Booking.STATUS_CHECKED_OUT: [],
    Booking.STATUS_CANCELLED: [],
}


def can_transition(current: str, new: str) -> bool:
    """Return True if a booking may move from ``current`` to ``new``."""
    return new in TRANSITIONS.get(current, [])


def serialize_booking(b: Booking, with_history: bool = False) -> dict:
    data = {
        'id': b.id,
        'user': {
            'id': b.user.id,
            'fullName': b.user.full_name,
            'email': b.user.email,
        },
        'room': {
            'id': b.room.id,
            'roomNumber': b.room.room_number,
            'title': b.room.title,
            'pricePerBed': b.room.price_per_bed,
            'status': b.room.status,
            'roomType': b.room.room_type,
        },
        'checkInDate': b.check_in_date,
        'checkOutDate': b.check_out_date,
        'status': b.status,
        'totalAmount': b.total_amount,
        'notes': b.notes,
        'paymentStatus': b.payment_status,
        'createdAt': b.created_at,
        'updatedAt': b.updated_at,
    }
    if with_history:
        data['history'] = [
            {
                'from': t.from_status,
                'to': t.to_status,
                'operator': t.operator.email if t.operator else '',
                'timestamp': t.timestamp,
            }
            for t in b.status_changes.select_related('operator').order_by('timestamp', 'id')
        ]
    return data


def _record(booking: Booking, from_status: str | None, to_status: str, operator) -> None:
    BookingStatusChange.objects.create(
        booking=booking,
        from_status=from_status,
        to_status=to_status,
        operator=operator if getattr(operator, 'pk', None) else None,
    )


def create_booking(*, actor: User, room_id: int, check_in: datetime, check_out: datetime,
                   notes: str = '', user_id: int | None = None) -> Booking:
    """Create a pending booking priced at ``nights x price_per_bed``.

    Admins may book on behalf of ``user_id``; for everybody else it is
    ignored.
    """
    owner = actor
    if actor.role == User.ROLE_ADMIN and user_id is not None:
        owner = User.objects.filter(pk=user_id).first()
        if not owner:
            raise NotFound('User not found')

    with transaction.atomic():
        room = Room.objects.select_for_update().filter(pk=room_id).first()
        if not room:
            raise NotFound('Room not found')
        if has_overlap(room.id, check_in, check_out, CREATE_BLOCKING):
            raise Conflict('Room is not available for the selected dates')
        booking = Booking.objects.create(
            user=owner,
            room=room,
            check_in_date=check_in,
            check_out_date=check_out,
            notes=notes or '',
            total_amount=compute_total(room.price_per_bed, check_in, check_out),
            status=Booking.STATUS_PENDING,
        )
        _record(booking, None, Booking.STATUS_PENDING, actor)
    logger.info('Booking %s created for room=%s user=%s', booking.id, room.id, owner.id)
    return booking


def update_booking(booking_id: int, *, actor: User, changes: dict) -> Booking:
    """Apply a validated ``{status?, notes?, paymentStatus?}`` update.

    Owners may cancel or annotate their own pending booking, and may
    mark their booking as paid in any status; everything else is for
    admins. Status moves follow :data:`TRANSITIONS` for all callers.
    """
    with transaction.atomic():
        booking = Booking.objects.select_for_update().filter(pk=booking_id).first()
        if not booking:
            raise NotFound('Booking not found')

        is_admin = actor.role == User.ROLE_ADMIN
        is_owner = booking.user_id == actor.id
        if not is_admin and not is_owner:
            raise PermissionDenied('Forbidden')

        only_marks_paid = (
            len(changes) == 1
            and changes.get('paymentStatus') == Booking.PAYMENT_PAID
            and is_owner
        )
        new_status = changes.get('status')
        if not is_admin and not only_marks_paid:
            if new_status and new_status != Booking.STATUS_CANCELLED:
                raise PermissionDenied('Only admins can change status to something other than cancelled')
            if booking.status != Booking.STATUS_PENDING:
                raise BadRequest('Only pending bookings can be cancelled')

        old_status = booking.status
        status_changed = bool(new_status) and new_status != old_status
        if status_changed:
            if not can_transition(old_status, new_status):
                raise BadRequest(f'Cannot change booking status from {old_status} to {new_status}')
            if new_status in MUTATE_BLOCKING:
                Room.objects.select_for_update().filter(pk=booking.room_id).first()
                if has_overlap(booking.room_id, booking.check_in_date, booking.check_out_date,
                               MUTATE_BLOCKING, exclude_id=booking.id):
                    raise Conflict('Room is not available for these dates')
            booking.status = new_status

        if 'notes' in changes:
            booking.notes = changes['notes'] or ''
        if 'paymentStatus' in changes:
            booking.payment_status = changes['paymentStatus']
        booking.save()

        if status_changed:
            _record(booking, old_status, new_status, actor)
            logger.info('Booking %s: %s -> %s by user=%s', booking.id, old_status, new_status, actor.id)
    return booking


def check_out_resident(booking_id: int, *, actor: User) -> Booking:
    """Move a checked-in booking to ``checked_out``."""
    with transaction.atomic():
        booking = (
            Booking.objects.select_for_update()
            .filter(pk=booking_id, status=Booking.STATUS_CHECKED_IN)
            .first()
        )
        if not booking:
            raise NotFound('Resident not found')
        booking.status = Booking.STATUS_CHECKED_OUT
        booking.save(update_fields=['status', 'updated_at'])
        _record(booking, Booking.STATUS_CHECKED_IN, Booking.STATUS_CHECKED_OUT, actor)
    return booking
