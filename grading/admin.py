from django.contrib import admin
from .models import GradeScale, GradeBand, CourseGrade
# Register your models here.
class GradeBandInline(admin.TabularInline):
    model = GradeBand
    extra = 0

@admin.register(GradeScale)
class GradeScaleAdmin(admin.ModelAdmin):
    list_display = ("name", "is_default")
    inlines = [GradeBandInline]

@admin.register(CourseGrade)
class CourseGradeAdmin(admin.ModelAdmin):
    list_display = ("enrollment", "final_percentage", "final_grade_letter", "quality_points", "is_finalized")
    list_filter = ("enrollment__semester_year", "final_grade_letter", "is_finalized")
    search_fields = ("enrollment__student__student_number", "enrollment__course__code")
    readonly_fields = ("finalized_by", "finalized_at")
