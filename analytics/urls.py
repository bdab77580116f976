from django.urls import path
from .views import course_stats

urlpatterns = [
    path("analytics/courses/<int:course_id>/stats/", course_stats, name="analytics-course-stats"),
]
