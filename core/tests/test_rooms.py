"""
Integration tests for the room inventory API.

Reads are public; writes need a verified administrator. These use DRF's
APITestCase like the rest of the endpoint suites.
"""
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from core.models import Booking, Room
from core.tests.factories import auth_client, day, make_booking, make_room, make_user


def room_payload(**overrides):
    data = {
        'roomNumber': 'A-1',
        'roomType': 'triple',
        'totalBeds': 3,
        'availableBeds': 3,
        'pricePerBed': 45.5,
        'floor': 2,
        'amenities': ['WiFi', 'AC'],
        'images': ['https://cdn.example.com/a1.jpg'],
        'title': 'Triple by the garden',
        'description': 'Quiet side of the building',
    }
    data.update(overrides)
    return data


class RoomAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = make_user(email='admin@example.com', role='admin')
        self.guest = make_user(email='guest@example.com')
        self.admin_client = auth_client(self.admin)
        self.guest_client = auth_client(self.guest)
        self.anon = APIClient()

    def test_create_room(self):
        r = self.admin_client.post(reverse('rooms_collection'), room_payload(), format='json')
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        room = r.data['room']
        self.assertEqual(room['roomNumber'], 'A-1')
        self.assertEqual(room['status'], 'available')
        self.assertTrue(room['isActive'])
        self.assertEqual(Room.objects.get(pk=room['id']).price_per_bed, Decimal('45.50'))

    def test_create_requires_admin(self):
        r = self.guest_client.post(reverse('rooms_collection'), room_payload(), format='json')
        self.assertEqual(r.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(r.data['error'], 'Access denied. Admin privileges required.')
        r = self.anon.post(reverse('rooms_collection'), room_payload(), format='json')
        self.assertEqual(r.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_unverified_admin_cannot_write(self):
        admin = make_user(email='new-admin@example.com', role='admin', verified=False)
        r = auth_client(admin).post(reverse('rooms_collection'), room_payload(), format='json')
        self.assertEqual(r.status_code, status.HTTP_403_FORBIDDEN)
        self.assertIn('verify your email', r.data['error'])

    def test_available_beds_cannot_exceed_total(self):
        r = self.admin_client.post(reverse('rooms_collection'), room_payload(availableBeds=5), format='json')
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(r.data['details'], [
            {'field': 'availableBeds', 'message': 'Available beds cannot exceed total beds'},
        ])

    def test_invalid_fields_are_reported(self):
        r = self.admin_client.post(
            reverse('rooms_collection'),
            room_payload(roomType='suite', pricePerBed=0, images=['not a url']),
            format='json',
        )
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        fields = {d['field'] for d in r.data['details']}
        self.assertEqual(fields, {'roomType', 'pricePerBed', 'images.0'})

    def test_duplicate_room_number(self):
        make_room('A-1')
        r = self.admin_client.post(reverse('rooms_collection'), room_payload(), format='json')
        self.assertEqual(r.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(r.data['error'], 'Room number already exists')

    def test_public_detail_and_missing_room(self):
        room = make_room('B-2')
        r = self.anon.get(reverse('room_detail', args=[room.id]))
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data['room']['roomNumber'], 'B-2')
        r = self.anon.get(reverse('room_detail', args=[room.id + 100]))
        self.assertEqual(r.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(r.data, {'success': False, 'error': 'Room not found'})

    def test_update_room(self):
        room = make_room('A-1')
        r = self.admin_client.put(
            reverse('room_detail', args=[room.id]),
            room_payload(status='maintenance', isActive=False),
            format='json',
        )
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        room.refresh_from_db()
        self.assertEqual(room.status, 'maintenance')
        self.assertFalse(room.is_active)
        self.assertEqual(room.room_type, 'triple')

    def test_update_to_taken_number(self):
        make_room('A-1')
        room = make_room('A-2')
        r = self.admin_client.put(reverse('room_detail', args=[room.id]), room_payload(), format='json')
        self.assertEqual(r.status_code, status.HTTP_409_CONFLICT)

    def test_delete_room(self):
        room = make_room('C-3')
        r = self.admin_client.delete(reverse('room_detail', args=[room.id]))
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertFalse(Room.objects.filter(pk=room.id).exists())

    def test_delete_room_with_bookings_conflicts(self):
        room = make_room('C-3')
        make_booking(self.guest, room, day(2023, 1, 1), day(2023, 1, 2))
        r = self.admin_client.delete(reverse('room_detail', args=[room.id]))
        self.assertEqual(r.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(Room.objects.filter(pk=room.id).exists())


class RoomListTests(APITestCase):
    def setUp(self) -> None:
        self.guest = make_user()
        self.r1 = make_room('101', title='Garden single', room_type='single', floor=1)
        self.r2 = make_room('102', title='Sea view double', floor=1, description='Balcony')
        self.r3 = make_room('201', title='Dorm', room_type='dorm', floor=2, status='maintenance', is_active=False)

    def _list(self, **params):
        return APIClient().get(reverse('rooms_collection'), params)

    def test_list_is_newest_first(self):
        r = self._list()
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual([x['roomNumber'] for x in r.data['rooms']], ['201', '102', '101'])
        self.assertEqual((r.data['count'], r.data['total'], r.data['page'], r.data['pages'], r.data['limit']),
                         (3, 3, 1, 1, 10))

    def test_filters(self):
        self.assertEqual(self._list(roomType='single').data['total'], 1)
        self.assertEqual(self._list(status='maintenance').data['total'], 1)
        self.assertEqual(self._list(isActive='true').data['total'], 2)
        self.assertEqual(self._list(isActive='no').data['total'], 1)
        self.assertEqual(self._list(floor=1).data['total'], 2)
        self.assertEqual(self._list(search='balcony').data['total'], 1)
        self.assertEqual(self._list(search='SEA').data['rooms'][0]['roomNumber'], '102')

    def test_pagination(self):
        r = self._list(limit=2, page=2)
        self.assertEqual((r.data['count'], r.data['total'], r.data['pages']), (1, 3, 2))
        self.assertEqual(r.data['rooms'][0]['roomNumber'], '101')

    def test_availability_window_hides_booked_rooms(self):
        make_booking(self.guest, self.r1, day(2023, 3, 1), day(2023, 3, 5), status=Booking.STATUS_PENDING)
        make_booking(self.guest, self.r2, day(2023, 3, 1), day(2023, 3, 5), status=Booking.STATUS_CANCELLED)
        r = self._list(checkIn='2023-03-02', checkOut='2023-03-03')
        self.assertEqual({x['roomNumber'] for x in r.data['rooms']}, {'102', '201'})
        # touching the existing stay leaves the room free
        r = self._list(checkIn='2023-03-05', checkOut='2023-03-07')
        self.assertEqual(r.data['total'], 3)

    def test_inverted_or_bad_window_is_ignored(self):
        make_booking(self.guest, self.r1, day(2023, 3, 1), day(2023, 3, 5), status=Booking.STATUS_APPROVED)
        self.assertEqual(self._list(checkIn='2023-03-04', checkOut='2023-03-02').data['total'], 3)
        self.assertEqual(self._list(checkIn='yesterday', checkOut='2023-03-02').data['total'], 3)
