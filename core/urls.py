from rest_framework.routers import DefaultRouter
from .views import AcademicProgramViewSet, CourseViewSet

router = DefaultRouter()
router.register(r"core/programs", AcademicProgramViewSet, basename="programs")
router.register(r"core/courses", CourseViewSet, basename="courses")
urlpatterns = router.urls
