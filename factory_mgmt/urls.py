# factory_mgmt/urls.py
from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path


def healthz(request):
    return JsonResponse({"status": "ok"})


urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('production.api_urls')),
    path('api/', include('inventory.api_urls')),
    path('api/', include('maintenance.api_urls')),
    path("healthz/", healthz),
]
