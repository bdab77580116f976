from django.urls import path
from rest_framework.routers import DefaultRouter
from .views import StudentGPAView, AcademicProgressView, AcademicRecordViewSet, TranscriptPDFView

router = DefaultRouter()
router.register(r"academic-records", AcademicRecordViewSet, basename="academic-records")

urlpatterns = [
    path("reports/gpa/", StudentGPAView.as_view(), name="report-gpa"),
    path("reports/progress/", AcademicProgressView.as_view(), name="report-progress"),
    path("reports/pdf/transcript/", TranscriptPDFView.as_view(), name="report-pdf-transcript"),
] + router.urls
