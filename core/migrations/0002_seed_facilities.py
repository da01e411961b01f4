from django.db import migrations

FACILITIES = [
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


def seed_facilities(apps, schema_editor):
    Facility = apps.get_model('core', 'Facility')
    if Facility.objects.exists():
        return
    Facility.objects.bulk_create([Facility(**row) for row in FACILITIES])


class Migration(migrations.Migration):

    dependencies = [
        ('core', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed_facilities, migrations.RunPython.noop),
    ]
