from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path, re_path

from . import views

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/health", views.health, name="health"),
    path("api/db-health", views.db_health, name="db_health"),
    path("api/", include("accounts.urls")),
    path("api/", include("jobs.urls")),
    path("api/", include("subscriptions.urls")),
    path("api/", include("resumes.urls")),
    path("api/", include("chat.urls")),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

# Must stay last: every unmatched path answers with the JSON 404 envelope.
urlpatterns += [re_path(r"^.*$", views.route_not_found)]

handler404 = "joblify.views.route_not_found"
handler500 = "joblify.views.server_error"
