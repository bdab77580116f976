from django.contrib import admin
from .models import AssessmentConfig, Assessment, StudentGrade
# Register your models here.

@admin.register(AssessmentConfig)
class AssessmentConfigAdmin(admin.ModelAdmin):
    list_display = ("name", "course", "semester_year", "category", "assessment_type", "max_marks", "weight_percentage", "is_active")
    list_filter = ("semester_year", "category", "assessment_type", "is_active")
    search_fields = ("name", "course__code", "course__name")

@admin.register(Assessment)
class AssessmentAdmin(admin.ModelAdmin):
    list_display = ("title", "config", "total_marks", "is_published")
    list_filter = ("config__semester_year", "config__category", "is_published")
    search_fields = ("title", "config__course__code")

@admin.register(StudentGrade)
class StudentGradeAdmin(admin.ModelAdmin):
    list_display = ("assessment", "enrollment", "marks_obtained", "percentage", "is_submitted", "is_graded")
    list_filter = ("assessment__config__semester_year", "is_submitted", "is_graded")
    search_fields = ("enrollment__student__student_number", "assessment__config__course__code")
