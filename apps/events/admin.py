from django.contrib import admin
from .models import Event, EventOrganizer, EventGuest


class EventOrganizerInline(admin.TabularInline):
    model = EventOrganizer
    extra = 0
    raw_id_fields = ['user']


class EventGuestInline(admin.TabularInline):
    model = EventGuest
    extra = 0
    raw_id_fields = ['user']


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ['name', 'location', 'start_time', 'end_time', 'capacity', 'published', 'points_remain', 'points_awarded']
    list_filter = ['published', 'start_time']
    search_fields = ['name', 'location']
    readonly_fields = ['points_remain', 'points_awarded', 'created_at']
    inlines = [EventOrganizerInline, EventGuestInline]
