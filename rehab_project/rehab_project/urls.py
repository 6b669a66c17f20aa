from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    # DJANGO ADMIN (STAFF ONLY)
    path("django/admin/", admin.site.urls),

    # ADMIN API
    path("admin/", include("admin_app.urls")),
]
