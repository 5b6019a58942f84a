from django.urls import path
from . import views

urlpatterns = [
    path('transactions', views.TransactionListCreateView.as_view(), name='transaction-list'),
    path('transactions/<int:transaction_id>', views.TransactionDetailView.as_view(), name='transaction-detail'),
    path('transactions/<int:transaction_id>/suspicious', views.TransactionSuspiciousView.as_view(), name='transaction-suspicious'),
    path('transactions/<int:transaction_id>/processed', views.TransactionProcessedView.as_view(), name='transaction-processed'),
    path('users/me/transactions', views.MyTransactionListView.as_view(), name='user-me-transactions'),
    path('users/<int:user_id>/transactions', views.UserTransferView.as_view(), name='user-transactions'),
    path('events/<int:event_id>/transactions', views.EventTransactionView.as_view(), name='event-transactions'),
]
