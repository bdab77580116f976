from django.db import models
from django.conf import settings
from core.models import AcademicProgram, Course
# Create your models here.

class Student(models.Model):
    student_number = models.CharField(max_length=32, unique=True)
    last_name = models.CharField(max_length=64)
    first_name = models.CharField(max_length=64)
    email = models.EmailField(blank=True)
    program = models.ForeignKey(AcademicProgram, on_delete=models.PROTECT, null=True, blank=True, related_name="students")
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="student")

    class Meta:
        ordering = ["last_name","first_name"]

    @property
    def full_name(self):
        return f"{self.last_name} {self.first_name}"

    def __str__(self):
        return f"{self.student_number} - {self.full_name}"

class CourseEnrollment(models.Model):
    class Status(models.TextChoices):
        ENROLLED = "enrolled", "Enrolled"
        DROPPED = "dropped", "Dropped"
        COMPLETED = "completed", "Completed"

    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="enrollments")
    course = models.ForeignKey(Course, on_delete=models.PROTECT, related_name="enrollments")
    semester_year = models.CharField(max_length=16)  # ex: "2025 Spring"
    enrollment_date = models.DateField(auto_now_add=True)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.ENROLLED)

    class Meta:
        unique_together = (("student","course","semester_year"),)
        ordering = ["-semester_year","course__code","student__last_name","student__first_name"]

    def __str__(self):
        return f"{self.student} @ {self.course.code} ({self.semester_year})"
