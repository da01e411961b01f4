from datetime import timedelta
from decimal import Decimal

import pytest

from core.models import Booking
from core.services.availability import (
    CREATE_BLOCKING,
    MUTATE_BLOCKING,
    booked_room_ids,
    compute_nights,
    compute_total,
    has_overlap,
    overlaps,
)
from core.tests.factories import day, make_booking, make_room, make_user


def test_overlap_is_half_open():
    assert overlaps(day(2023, 1, 1), day(2023, 1, 5), day(2023, 1, 4), day(2023, 1, 6))
    assert overlaps(day(2023, 1, 1), day(2023, 1, 10), day(2023, 1, 3), day(2023, 1, 4))
    # touching boundaries do not overlap
    assert not overlaps(day(2023, 1, 1), day(2023, 1, 5), day(2023, 1, 5), day(2023, 1, 8))
    assert not overlaps(day(2023, 1, 5), day(2023, 1, 8), day(2023, 1, 1), day(2023, 1, 5))


def test_nights_round_partial_days_up():
    assert compute_nights(day(2023, 1, 1), day(2023, 1, 4)) == 3
    assert compute_nights(day(2023, 1, 1), day(2023, 1, 1) + timedelta(hours=1)) == 1
    assert compute_nights(day(2023, 1, 1), day(2023, 1, 2) + timedelta(minutes=1)) == 2


def test_total_is_nights_times_price():
    assert compute_total(Decimal('100.00'), day(2023, 1, 1), day(2023, 1, 4)) == Decimal('300.00')
    assert compute_total(Decimal('12.50'), day(2023, 1, 1), day(2023, 1, 3)) == Decimal('25.00')


def test_blocking_sets():
    assert set(CREATE_BLOCKING) == {'pending', 'approved', 'checked_in'}
    assert set(MUTATE_BLOCKING) == {'approved', 'checked_in'}


@pytest.mark.django_db
def test_has_overlap_respects_status_set_and_exclusion():
    user = make_user()
    room = make_room()
    pending = make_booking(user, room, day(2023, 1, 1), day(2023, 1, 5))

    assert has_overlap(room.id, day(2023, 1, 4), day(2023, 1, 6), CREATE_BLOCKING)
    # a pending booking does not hold the room when approving others
    assert not has_overlap(room.id, day(2023, 1, 4), day(2023, 1, 6), MUTATE_BLOCKING)
    assert not has_overlap(room.id, day(2023, 1, 1), day(2023, 1, 5), CREATE_BLOCKING, exclude_id=pending.id)
    assert not has_overlap(room.id, day(2023, 1, 5), day(2023, 1, 8), CREATE_BLOCKING)


@pytest.mark.django_db
def test_cancelled_and_finished_bookings_do_not_block():
    user = make_user()
    room = make_room()
    for status in (Booking.STATUS_CANCELLED, Booking.STATUS_REJECTED, Booking.STATUS_CHECKED_OUT):
        make_booking(user, room, day(2023, 1, 1), day(2023, 1, 5), status=status)
    assert not has_overlap(room.id, day(2023, 1, 2), day(2023, 1, 3), CREATE_BLOCKING)


@pytest.mark.django_db
def test_booked_room_ids():
    user = make_user()
    busy = make_room('101')
    free = make_room('102')
    make_booking(user, busy, day(2023, 1, 1), day(2023, 1, 5), status=Booking.STATUS_APPROVED)
    make_booking(user, free, day(2023, 1, 1), day(2023, 1, 5), status=Booking.STATUS_CANCELLED)

    assert booked_room_ids(day(2023, 1, 2), day(2023, 1, 3)) == {busy.id}
    assert booked_room_ids(day(2023, 1, 5), day(2023, 1, 9)) == set()
