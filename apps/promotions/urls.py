from django.urls import path
from . import views

urlpatterns = [
    path('promotions', views.PromotionListCreateView.as_view(), name='promotion-list'),
    path('promotions/<int:promotion_id>', views.PromotionDetailView.as_view(), name='promotion-detail'),
]
