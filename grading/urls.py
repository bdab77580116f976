from django.urls import path
from rest_framework.routers import DefaultRouter
from .views import GradeScaleViewSet, CourseGradeViewSet, course_sheet, calculate

router = DefaultRouter()
router.register(r"grade-scales", GradeScaleViewSet, basename="grade-scales")
router.register(r"course-grades", CourseGradeViewSet, basename="course-grades")

urlpatterns = [
    path("grading/sheet/", course_sheet, name="grading-sheet"),
    path("grading/calculate/", calculate, name="grading-calculate"),
] + router.urls
