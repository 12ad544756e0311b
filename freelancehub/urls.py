from django.contrib import admin
from django.urls import path, include
from drf_yasg.views import get_schema_view
from drf_yasg import openapi
from rest_framework.permissions import AllowAny

from core.utils import HealthView

schema_view = get_schema_view(
    openapi.Info(
        title="FreelanceHub API",
        default_version='v1',
        description="Jobs, offers, payments, wallets and freelancer verification",
    ),
    public=True,
    permission_classes=[AllowAny],
)

urlpatterns = [
    path('docs/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('health', HealthView.as_view(), name='health'),
    path('django-admin/', admin.site.urls),
    path('', include('apps.users.urls')),
    path('', include('apps.jobs.urls')),
    path('', include('apps.payments.urls')),
    path('', include('apps.wallets.urls')),
    path('', include('apps.verifications.urls')),
    path('admin/', include('apps.management.urls')),
]
