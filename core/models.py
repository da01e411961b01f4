"""
Database models for the hostels backend.

These models capture the core concepts of the system: users, rooms,
bookings (with their status history) and facilities. Residents are not
stored; a resident is a booking in ``checked_in`` status. Field names
are snake_case here and are rendered as camelCase by the views.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models


class UserManager(BaseUserManager):
    """Manager for the email-keyed :class:`User` model."""

    def create_user(self, email: str, password: str | None = None, **extra_fields) -> "User":
        if not email:
            raise ValueError('Email is required')
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email: str, password: str | None = None, **extra_fields) -> "User":
        extra_fields.setdefault('role', User.ROLE_ADMIN)
        extra_fields.setdefault('is_email_verified', True)
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """A hostel guest or administrator, identified by email.

    Users register unverified and must confirm their email before any
    authenticated route will accept them. The verification and reset
    tokens live on the row together with their expiry timestamps.
    """
    ROLE_USER = 'user'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_USER, 'User'),
        (ROLE_ADMIN, 'Administrator'),
    ]

    full_name = models.CharField(max_length=100)
    email = models.EmailField(max_length=254, unique=True)
    cnic_front = models.CharField(max_length=512, blank=True)
    cnic_back = models.CharField(max_length=512, blank=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_USER, db_index=True)
    is_email_verified = models.BooleanField(default=False)
    email_verify_token = models.CharField(max_length=64, blank=True, null=True, db_index=True)
    email_verify_token_expiry = models.DateTimeField(blank=True, null=True)
    reset_password_token = models.CharField(max_length=64, blank=True, null=True, db_index=True)
    reset_password_expiry = models.DateTimeField(blank=True, null=True)
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['full_name']

    @property
    def is_admin(self) -> bool:
        return self.role == self.ROLE_ADMIN

    def get_full_name(self) -> str:
        return self.full_name

    def get_short_name(self) -> str:
        return self.full_name.split(' ')[0] if self.full_name else self.email

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"


class Room(models.Model):
    """A bookable unit of inventory priced per bed."""
    TYPE_CHOICES = [
        ('single', 'Single'),
        ('double', 'Double'),
        ('triple', 'Triple'),
        ('dorm', 'Dormitory'),
    ]
    STATUS_AVAILABLE = 'available'
    STATUS_FULL = 'full'
    STATUS_MAINTENANCE = 'maintenance'
    STATUS_CHOICES = [
        (STATUS_AVAILABLE, 'Available'),
        (STATUS_FULL, 'Full'),
        (STATUS_MAINTENANCE, 'Maintenance'),
    ]

    room_number = models.CharField(max_length=20, unique=True)
    room_type = models.CharField(max_length=10, choices=TYPE_CHOICES)
    total_beds = models.PositiveIntegerField()
    available_beds = models.PositiveIntegerField()
    price_per_bed = models.DecimalField(max_digits=10, decimal_places=2)
    floor = models.IntegerField(null=True, blank=True)
    amenities = models.JSONField(default=list, blank=True)
    images = models.JSONField(default=list, blank=True)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_AVAILABLE, db_index=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Room {self.room_number} ({self.room_type})"


class Booking(models.Model):
    """A reservation of a room by a user for ``[check_in_date, check_out_date)``."""
    STATUS_PENDING = 'pending'
    STATUS_APPROVED = 'approved'
    STATUS_REJECTED = 'rejected'
    STATUS_CHECKED_IN = 'checked_in'
    STATUS_CHECKED_OUT = 'checked_out'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_REJECTED, 'Rejected'),
        (STATUS_CHECKED_IN, 'Checked in'),
        (STATUS_CHECKED_OUT, 'Checked out'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    PAYMENT_UNPAID = 'unpaid'
    PAYMENT_PAID = 'paid'
    PAYMENT_CHOICES = [
        (PAYMENT_UNPAID, 'Unpaid'),
        (PAYMENT_PAID, 'Paid'),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='bookings')
    # Rooms with booking history cannot be deleted out from under it
    room = models.ForeignKey(Room, on_delete=models.PROTECT, related_name='bookings')
    check_in_date = models.DateTimeField()
    check_out_date = models.DateTimeField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    notes = models.TextField(blank=True)
    payment_status = models.CharField(max_length=10, choices=PAYMENT_CHOICES, default=PAYMENT_UNPAID)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['room', 'check_in_date', 'check_out_date'], name='booking_room_dates_idx'),
            models.Index(fields=['user', '-created_at'], name='booking_user_created_idx'),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} room={self.room_id} {self.status}"


class BookingStatusChange(models.Model):
    """Records a status transition for a booking."""
    booking = models.ForeignKey(Booking, related_name='status_changes', on_delete=models.CASCADE)
    from_status = models.CharField(max_length=20, null=True, blank=True)
    to_status = models.CharField(max_length=20)
    operator = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='booking_status_changes'
    )
    timestamp = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.booking_id}: {self.from_status} → {self.to_status}"


class Facility(models.Model):
    """An amenity shown on the public site, toggled by administrators.

    The primary key is a short slug (e.g. 'wifi') shared with the
    front-end icon set.
    """
    id = models.CharField(max_length=50, primary_key=True)
    name = models.CharField(max_length=255)
    description = models.TextField()
    icon = models.CharField(max_length=50)
    is_available = models.BooleanField(default=True)
    color = models.CharField(max_length=50, default='text-primary')
    order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['order']
        verbose_name_plural = 'facilities'

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"
