from django.contrib import admin
from .models import Transaction, TransactionPromotion


class TransactionPromotionInline(admin.TabularInline):
    model = TransactionPromotion
    extra = 0
    can_delete = False
    readonly_fields = ['promotion']

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'type', 'amount', 'spent', 'suspicious', 'created_by', 'processed_by', 'created_at']
    list_filter = ['type', 'suspicious', 'created_at']
    search_fields = ['user__utorid', 'user__name', 'remark']
    readonly_fields = [
        'user', 'type', 'amount', 'spent', 'related_id', 'suspicious', 'remark',
        'created_by', 'processed_by', 'created_at',
    ]
    inlines = [TransactionPromotionInline]

    def has_add_permission(self, request):
        return False  # Transactions are created by the ledger

    def has_change_permission(self, request, obj=None):
        return False  # Balances follow the ledger; use the API to flag transactions

    def has_delete_permission(self, request, obj=None):
        return False
