from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User, ResetToken


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """User admin keyed on utorid; balances are read-only here"""
    list_display = ['utorid', 'name', 'email', 'role', 'points', 'verified', 'suspicious', 'last_login']
    list_filter = ['role', 'verified', 'suspicious', 'is_staff', 'created_at']
    search_fields = ['utorid', 'name', 'email']
    ordering = ['id']

    fieldsets = (
        (None, {'fields': ('utorid', 'password')}),
        ('Profile', {'fields': ('name', 'email', 'birthday', 'avatar_url')}),
        ('Loyalty', {'fields': ('role', 'points', 'verified', 'suspicious')}),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',)
        }),
        ('Timestamps', {
            'fields': ('last_login', 'created_at'),
            'classes': ('collapse',)
        }),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('utorid', 'name', 'email', 'role', 'password1', 'password2'),
        }),
    )
    readonly_fields = ['points', 'last_login', 'created_at']

    actions = ['mark_verified']

    def mark_verified(self, request, queryset):
        """Verify selected users"""
        updated = queryset.update(verified=True)
        self.message_user(request, f'{updated} users verified.')
    mark_verified.short_description = 'Verify selected users'


@admin.register(ResetToken)
class ResetTokenAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'expires_at', 'created_at']
    list_filter = ['expires_at']
    search_fields = ['user__utorid']
    readonly_fields = ['id', 'user', 'expires_at', 'created_at']

    def has_add_permission(self, request):
        return False  # Tokens are issued through the API
