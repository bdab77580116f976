from rest_framework.routers import DefaultRouter
from .views import AssessmentConfigViewSet, AssessmentViewSet, StudentGradeViewSet

router = DefaultRouter()  # trailing slash par défaut
router.register(r"assessment-configs", AssessmentConfigViewSet, basename="assessment-configs")
router.register(r"assessments", AssessmentViewSet, basename="assessments")
router.register(r"student-grades", StudentGradeViewSet, basename="student-grades")
urlpatterns = router.urls
