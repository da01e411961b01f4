"""Core application for the hostel backend.

This package contains models, serializers, services, views and route
registrations implementing the REST API consumed by the front-end.
"""
