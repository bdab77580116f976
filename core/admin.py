from django.contrib import admin
from .models import AcademicProgram, Course
# Register your models here.
class CourseInline(admin.TabularInline):
    model = Course
    extra = 1

@admin.register(AcademicProgram)
class AcademicProgramAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "duration_semesters", "total_credits", "is_active")
    list_filter  = ("is_active",)
    search_fields = ("code", "name")
    inlines = [CourseInline]

@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "program", "credits", "semester", "is_active")
    list_filter  = ("program", "semester", "is_active")
    search_fields = ("code", "name")
