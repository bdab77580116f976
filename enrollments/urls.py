from rest_framework.routers import DefaultRouter
from .views import StudentViewSet, CourseEnrollmentViewSet

router = DefaultRouter()
router.register(r"students", StudentViewSet, basename="students")
router.register(r"enrollments", CourseEnrollmentViewSet, basename="enrollments")
urlpatterns = router.urls
