"""
Room availability rule.

A booking occupies its room over the half-open interval
``[check_in_date, check_out_date)``. Two intervals ``[a, b)`` and
``[c, d)`` overlap iff ``a < d and c < b``, so a stay that checks out on
the day the next one checks in does not conflict.

Which bookings count against availability depends on what the caller
is doing. A new request is refused while any pending, approved or
checked-in booking overlaps (:data:`CREATE_BLOCKING`); approving or
checking in only considers bookings that already hold the room
(:data:`MUTATE_BLOCKING`).
"""
from __future__ import annotations

import math
from datetime import datetime
from decimal import Decimal

from core.models import Booking

CREATE_BLOCKING = (Booking.STATUS_PENDING, Booking.STATUS_APPROVED, Booking.STATUS_CHECKED_IN)
MUTATE_BLOCKING = (Booking.STATUS_APPROVED, Booking.STATUS_CHECKED_IN)

SECONDS_PER_DAY = 86400


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    return a_start < b_end and b_start < a_end


def overlapping_bookings(room_id: int, check_in: datetime, check_out: datetime,
                         statuses=CREATE_BLOCKING, exclude_id: int | None = None):
    qs = Booking.objects.filter(
        room_id=room_id,
        status__in=statuses,
        check_in_date__lt=check_out,
        check_out_date__gt=check_in,
    )
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    return qs


def has_overlap(room_id: int, check_in: datetime, check_out: datetime,
                statuses=CREATE_BLOCKING, exclude_id: int | None = None) -> bool:
    return overlapping_bookings(room_id, check_in, check_out, statuses, exclude_id).exists()


def booked_room_ids(check_in: datetime, check_out: datetime, statuses=CREATE_BLOCKING) -> set[int]:
    """Ids of rooms holding a blocking booking that overlaps the range."""
    return set(
        Booking.objects.filter(
            status__in=statuses,
            check_in_date__lt=check_out,
            check_out_date__gt=check_in,
        ).values_list('room_id', flat=True).distinct()
    )


def compute_nights(check_in: datetime, check_out: datetime) -> int:
    """Whole nights, rounding any partial day up."""
    return math.ceil((check_out - check_in).total_seconds() / SECONDS_PER_DAY)


def compute_total(price_per_bed, check_in: datetime, check_out: datetime) -> Decimal:
    return Decimal(price_per_bed or 0) * compute_nights(check_in, check_out)
