"""
Facility listing with a cache in front of it.

Facilities change rarely (an admin toggling availability), so the
ordered list is kept in the Django cache and dropped whenever a
facility is saved through :func:`update_facility`.
"""
from __future__ import annotations

import logging

from django.conf import settings
from django.core.cache import cache

from core.models import Facility

logger = logging.getLogger(__name__)

CACHE_KEY = 'facilities:all'

DEFAULT_FACILITIES = [
    {'id': 'wifi', 'name': 'High-Speed WiFi',
     'description': 'Free unlimited high-speed internet access throughout the premises',
     'icon': 'wifi', 'is_available': True, 'color': 'text-primary', 'order': 1},
    {'id': 'laundry', 'name': 'Laundry Service',
     'description': 'Self-service washing machines and dryers available 24/7',
     'icon': 'laundry', 'is_available': True, 'color': 'text-stat-residents', 'order': 2},
    {'id': 'kitchen', 'name': 'Mess / Kitchen',
     'description': 'Fully equipped communal kitchen with dining area',
     'icon': 'kitchen', 'is_available': True, 'color': 'text-accent', 'order': 3},
    {'id': 'security', 'name': '24/7 Security',
     'description': 'Round-the-clock security with CCTV surveillance',
     'icon': 'security', 'is_available': True, 'color': 'text-stat-available', 'order': 4},
    {'id': 'parking', 'name': 'Parking Area',
     'description': "Secure parking space for residents' vehicles",
     'icon': 'parking', 'is_available': False, 'color': 'text-muted-foreground', 'order': 5},
    {'id': 'gym', 'name': 'Fitness Center',
     'description': 'Well-equipped gym with modern exercise equipment',
     'icon': 'gym', 'is_available': True, 'color': 'text-stat-occupied', 'order': 6},
    {'id': 'cafe', 'name': 'Common Lounge',
     'description': 'Comfortable lounge area with TV and coffee machine',
     'icon': 'cafe', 'is_available': True, 'color': 'text-primary', 'order': 7},
    {'id': 'ac', 'name': 'Air Conditioning',
     'description': 'Climate control in all rooms and common areas',
     'icon': 'ac', 'is_available': True, 'color': 'text-stat-rooms', 'order': 8},
]


def serialize_facility(f: Facility) -> dict:
    return {
        'id': f.id,
        'name': f.name,
        'description': f.description,
        'icon': f.icon,
        'isAvailable': f.is_available,
        'color': f.color,
        'order': f.order,
        'createdAt': f.created_at,
        'updatedAt': f.updated_at,
    }


def seed_facilities(replace: bool = False) -> int:
    """Insert the default facilities; with ``replace`` existing rows are overwritten.

    Returns the number of rows created or updated.
    """
    written = 0
    for entry in DEFAULT_FACILITIES:
        values = {k: v for k, v in entry.items() if k != 'id'}
        if replace:
            Facility.objects.update_or_create(id=entry['id'], defaults=values)
            written += 1
        else:
            _, created = Facility.objects.get_or_create(id=entry['id'], defaults=values)
            written += int(created)
    invalidate_facilities()
    logger.info('Seeded %d facilities', written)
    return written


def seed_facilities_if_empty() -> bool:
    if Facility.objects.exists():
        return False
    seed_facilities()
    return True


def list_facilities(available_only: bool = False) -> list[dict]:
    data = cache.get(CACHE_KEY)
    if data is None:
        data = [serialize_facility(f) for f in Facility.objects.order_by('order', 'id')]
        cache.set(CACHE_KEY, data, getattr(settings, 'FACILITIES_CACHE_TTL', 300))
    if available_only:
        return [f for f in data if f['isAvailable']]
    return data


def update_facility(facility: Facility, changes: dict) -> Facility:
    """Apply ``changes`` (model field names) and drop the cached list."""
    for field, value in changes.items():
        setattr(facility, field, value)
    if changes:
        facility.save(update_fields=[*changes.keys(), 'updated_at'])
        invalidate_facilities()
    return facility


def invalidate_facilities() -> None:
    cache.delete(CACHE_KEY)
