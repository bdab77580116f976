from django.db import models
from django.conf import settings
from django.core.validators import MaxValueValidator
from enrollments.models import CourseEnrollment
# Create your models here.

class GradeScale(models.Model):
    name = models.CharField(max_length=32, unique=True)
    is_default = models.BooleanField(default=False)

    class Meta:
        ordering = ["-is_default", "name"]

    def __str__(self):
        return f"{self.name}{' (default)' if self.is_default else ''}"

class GradeBand(models.Model):
    scale = models.ForeignKey(GradeScale, on_delete=models.CASCADE, related_name="bands")
    letter = models.CharField(max_length=2)  # A, B, C, ...
    min_mark = models.PositiveSmallIntegerField(validators=[MaxValueValidator(100)])  # inclusif
    max_mark = models.PositiveSmallIntegerField(validators=[MaxValueValidator(100)])  # inclusif
    gpa = models.DecimalField(max_digits=3, decimal_places=2, default=0)
    description = models.CharField(max_length=32, blank=True)

    class Meta:
        unique_together = (("scale", "letter"),)
        ordering = ["-min_mark"]

    def __str__(self):
        return f"{self.letter}: {self.min_mark}-{self.max_mark}"

class CourseGrade(models.Model):
    """Note de cours d'une inscription; figée une fois finalisée."""
    enrollment = models.OneToOneField(CourseEnrollment, on_delete=models.CASCADE, related_name="course_grade")
    internal_total_marks = models.DecimalField(max_digits=8, decimal_places=2, default=0)
    internal_obtained_marks = models.DecimalField(max_digits=8, decimal_places=2, default=0)
    internal_percentage = models.DecimalField(max_digits=6, decimal_places=2, default=0)
    external_total_marks = models.DecimalField(max_digits=8, decimal_places=2, default=0)
    external_obtained_marks = models.DecimalField(max_digits=8, decimal_places=2, default=0)
    external_percentage = models.DecimalField(max_digits=6, decimal_places=2, default=0)
    final_exam_percentage = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)
    continuous_assessment = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)
    final_percentage = models.DecimalField(max_digits=6, decimal_places=2, default=0)
    final_grade_letter = models.CharField(max_length=2, blank=True)
    quality_points = models.DecimalField(max_digits=3, decimal_places=2, null=True, blank=True)
    is_finalized = models.BooleanField(default=False)
    finalized_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                     related_name="finalized_grades")
    finalized_at = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-enrollment__semester_year", "enrollment__course__code"]

    def __str__(self):
        return f"{self.enrollment}: {self.final_percentage} ({self.final_grade_letter or '-'})"
