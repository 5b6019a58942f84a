from django.contrib import admin
from .models import Promotion, UserPromotionUsage


@admin.register(Promotion)
class PromotionAdmin(admin.ModelAdmin):
    list_display = ['name', 'type', 'start_time', 'end_time', 'min_spending', 'rate', 'points']
    list_filter = ['type', 'start_time', 'end_time']
    search_fields = ['name', 'description']
    readonly_fields = ['created_at']


@admin.register(UserPromotionUsage)
class UserPromotionUsageAdmin(admin.ModelAdmin):
    list_display = ['user', 'promotion', 'used_at']
    list_filter = ['used_at']
    search_fields = ['user__utorid', 'promotion__name']
    readonly_fields = ['used_at']

    def has_add_permission(self, request):
        return False  # Usage is recorded by purchases
