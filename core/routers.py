"""
URL mappings for the hostel backend API.

This module registers all API endpoints with their corresponding view
functions. Trailing slashes are deliberately omitted; the front-end
calls ``/api/rooms``, not ``/api/rooms/``.
"""
from django.urls import include, path

from .auth_views import (
    admin_login_view,
    change_password_view,
    forgot_password_view,
    login_view,
    me_view,
    register_view,
    reset_password_view,
    verify_email_view,
)
from .views import health
from .views.bookings import booking_detail, bookings_collection
from .views.contact import submit_contact
from .views.dashboard import admin_dashboard
from .views.facilities import facilities_collection, facility_detail
from .views.residents import resident_detail, residents_collection
from .views.rooms import room_detail, rooms_collection
from .views.users import list_users, set_user_role


urlpatterns = [
    path('', health.index, name='index'),
    path('health', health.healthz, name='health'),
    path('', include('django_prometheus.urls')),
    # Authentication
    path('api/auth/register', register_view, name='register_view'),
    path('api/auth/verify-email', verify_email_view, name='verify_email_view'),
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/forgot-password', forgot_password_view, name='forgot_password_view'),
    path('api/auth/reset-password', reset_password_view, name='reset_password_view'),
    path('api/auth/me', me_view, name='me_view'),
    path('api/auth/change-password', change_password_view, name='change_password_view'),
    # Rooms
    path('api/rooms', rooms_collection, name='rooms_collection'),
    path('api/rooms/<int:pk>', room_detail, name='room_detail'),
    # Bookings
    path('api/bookings', bookings_collection, name='bookings_collection'),
    path('api/bookings/<int:pk>', booking_detail, name='booking_detail'),
    # Facilities
    path('api/facilities', facilities_collection, name='facilities_collection'),
    path('api/facilities/<str:facility_id>', facility_detail, name='facility_detail'),
    # Residents
    path('api/residents', residents_collection, name='residents_collection'),
    path('api/residents/<int:pk>', resident_detail, name='resident_detail'),
    # Admin
    path('api/admin/login', admin_login_view, name='admin_login_view'),
    path('api/admin/dashboard', admin_dashboard, name='admin_dashboard'),
    path('api/admin/users', list_users, name='list_users'),
    path('api/admin/users/<int:pk>/role', set_user_role, name='set_user_role'),
    # Contact form
    path('api/contact', submit_contact, name='submit_contact'),
]
