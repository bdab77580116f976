from django.contrib import admin
from django.urls import include, path

from reports.views import TranscriptVerifyPage

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("accounts.urls")),
    path("api/", include("core.urls")),
    path("api/", include("enrollments.urls")),
    path("api/", include("assessments.urls")),
    path("api/", include("grading.urls")),
    path("api/", include("reports.urls")),
    path("api/", include("analytics.urls")),
    # page publique (QR code du relevé)
    path("reports/verify/<uuid:uid>/", TranscriptVerifyPage.as_view(), name="transcript-verify"),
]
