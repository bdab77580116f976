from django.contrib import admin
from .models import Student, CourseEnrollment
# Register your models here.

@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ("student_number", "last_name", "first_name", "program")
    list_filter = ("program",)
    search_fields = ("student_number", "last_name", "first_name")

@admin.register(CourseEnrollment)
class CourseEnrollmentAdmin(admin.ModelAdmin):
    list_display = ("student", "course", "semester_year", "status", "enrollment_date")
    list_filter = ("semester_year", "status", "course__program")
    search_fields = ("student__student_number", "student__last_name", "course__code")
