from django.urls import path
from . import views

urlpatterns = [
    path('auth/tokens', views.LoginView.as_view(), name='auth-tokens'),
    path('auth/resets', views.ResetRequestView.as_view(), name='auth-resets'),
    path('auth/resets/<str:token>', views.ResetCompleteView.as_view(), name='auth-reset-complete'),
    path('users', views.UserListCreateView.as_view(), name='user-list'),
    path('users/me', views.UserProfileView.as_view(), name='user-me'),
    path('users/me/password', views.PasswordChangeView.as_view(), name='user-me-password'),
    path('users/<int:user_id>', views.UserDetailView.as_view(), name='user-detail'),
]
