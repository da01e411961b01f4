import logging

import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from core.exceptions import flatten_errors
from core.tests.factories import auth_client, make_user

pytestmark = pytest.mark.django_db


def test_missing_token_is_401():
    r = APIClient().get(reverse('bookings_collection'))
    assert r.status_code == 401
    assert r.data == {'success': False, 'error': 'Authentication required. Please provide a valid token.'}


def test_garbage_token_is_401():
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION='Bearer not-a-jwt')
    r = client.get(reverse('me_view'))
    assert r.status_code == 401
    assert r.data['error'] == 'Invalid or expired token. Please login again.'


def test_legacy_token_scheme_is_not_accepted(guest):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION='Token abc123')
    assert client.get(reverse('me_view')).status_code == 401


def test_unverified_user_is_403_everywhere():
    user = make_user(email='new@example.com', verified=False)
    client = auth_client(user)
    for url in (reverse('me_view'), reverse('bookings_collection')):
        r = client.get(url)
        assert r.status_code == 403
        assert r.data['error'] == 'Please verify your email address before accessing this resource.'


def test_no_role_escalation_through_register():
    payload = {
        'fullName': 'Sneaky', 'email': 'sneaky@example.com', 'password': 'secret123',
        'cnicFront': 'f', 'cnicBack': 'b', 'role': 'admin', 'isEmailVerified': True,
    }
    r = APIClient().post(reverse('register_view'), payload, format='json')
    assert r.status_code == 201
    from core.models import User
    u = User.objects.get(email='sneaky@example.com')
    assert u.role == 'user'
    assert u.is_email_verified is False


def test_full_name_is_sanitised():
    payload = {
        'fullName': '<b>Ali</b> Raza<script>x</script>', 'email': 'ali@example.com', 'password': 'secret123',
        'cnicFront': 'f', 'cnicBack': 'b',
    }
    r = APIClient().post(reverse('register_view'), payload, format='json')
    assert r.status_code == 201
    assert '<' not in r.data['user']['fullName']


def test_unknown_route_is_json_404():
    r = APIClient().get('/api/does-not-exist')
    assert r.status_code == 404
    assert r.json() == {'success': False, 'error': 'Route not found'}


def test_health_and_banner():
    client = APIClient()
    r = client.get(reverse('health'))
    assert r.status_code == 200
    assert r.json()['status'] == 'OK'
    assert r.json()['db'] is True
    assert client.get(reverse('index')).json()['status'] == 'running'


def test_contact_form_strips_markup():
    r = APIClient().post(reverse('submit_contact'), {
        'name': 'Visitor', 'email': 'v@example.com', 'message': '<script>alert(1)</script>Is parking free?',
    }, format='json')
    assert r.status_code == 200
    assert r.data['message'] == 'Thank you for contacting us. We will get back to you soon.'


def test_contact_form_logs_sender_not_message(caplog, monkeypatch):
    monkeypatch.setattr(logging.getLogger('core'), 'propagate', True)
    with caplog.at_level(logging.INFO, logger='core.views.contact'):
        r = APIClient().post(reverse('submit_contact'), {
            'name': 'Visitor', 'email': 'v@example.com', 'message': 'My room key code is 4471',
        }, format='json')
    assert r.status_code == 200
    logged = [rec.getMessage() for rec in caplog.records if rec.name == 'core.views.contact']
    assert logged == ['Contact form submission from v@example.com (24 chars)']


def test_contact_form_requires_fields():
    r = APIClient().post(reverse('submit_contact'), {'name': 'Visitor'}, format='json')
    assert r.status_code == 400
    assert {d['field'] for d in r.data['details']} == {'email', 'message'}


def test_flatten_errors_joins_nested_paths():
    errors = {
        'non_field_errors': ['bad combo'],
        'images': {0: ['Each image must be a valid URL']},
        'address': {'city': ['required']},
    }
    assert flatten_errors(errors) == [
        {'field': '', 'message': 'bad combo'},
        {'field': 'images.0', 'message': 'Each image must be a valid URL'},
        {'field': 'address.city', 'message': 'required'},
    ]
