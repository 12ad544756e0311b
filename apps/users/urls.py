from django.urls import path
from .views import (
    AuthLoginView, UserProfileView, SwitchRoleView, CanSwitchRoleView,
    ProfileSetupView, UpdateProfileView, ActiveJobsStatusView,
)

urlpatterns = [
    path('auth/login', AuthLoginView.as_view(), name='auth_login'),
    path('auth/switch-role', SwitchRoleView.as_view(), name='auth_switch_role'),
    path('auth/can-switch-role', CanSwitchRoleView.as_view(), name='auth_can_switch_role'),
    path('users/profile', UserProfileView.as_view(), name='user_profile'),
    path('users/profile-setup', ProfileSetupView.as_view(), name='user_profile_setup'),
    path('users/update-profile', UpdateProfileView.as_view(), name='user_update_profile'),
    path('users/active-jobs-status', ActiveJobsStatusView.as_view(), name='user_active_jobs_status'),
]
