"""
Django admin registrations for the core models.

This module hooks the core models into Django's built-in admin
interface so that superusers can inspect and manage data via the
``/admin/`` URL. Booking status history is shown inline on the
booking page.
"""

from django.contrib import admin

from .models import Booking, BookingStatusChange, Facility, Room, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'full_name', 'role', 'is_email_verified', 'is_active', 'created_at')
    list_filter = ('role', 'is_email_verified', 'is_active')
    search_fields = ('email', 'full_name')
    exclude = ('password', 'email_verify_token', 'reset_password_token')


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ('room_number', 'title', 'room_type', 'total_beds', 'available_beds', 'price_per_bed', 'status', 'is_active')
    list_filter = ('room_type', 'status', 'is_active')
    search_fields = ('room_number', 'title', 'description')


class BookingStatusChangeInline(admin.TabularInline):
    model = BookingStatusChange
    extra = 0
    readonly_fields = ('from_status', 'to_status', 'operator', 'timestamp')


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'room', 'check_in_date', 'check_out_date', 'status', 'payment_status', 'total_amount')
    list_filter = ('status', 'payment_status')
    search_fields = ('id', 'user__email', 'user__full_name', 'room__room_number')
    inlines = [BookingStatusChangeInline]


@admin.register(Facility)
class FacilityAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'is_available', 'order')
    list_filter = ('is_available',)
    search_fields = ('id', 'name')
