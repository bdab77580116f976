from django.db import models
from django.core.validators import MinValueValidator

# Create your models here.
class AcademicProgram(models.Model):
    name = models.CharField(max_length=128)
    code = models.CharField(max_length=16, unique=True)
    description = models.TextField(blank=True)
    duration_semesters = models.PositiveSmallIntegerField(default=8)
    total_credits = models.PositiveSmallIntegerField(default=120)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["code"]

    def __str__(self):
        return f"{self.name} [{self.code}]"

class Course(models.Model):
    program = models.ForeignKey(AcademicProgram, on_delete=models.PROTECT, related_name="courses")
    name = models.CharField(max_length=128)
    code = models.CharField(max_length=16, unique=True)
    description = models.TextField(blank=True)
    credits = models.PositiveSmallIntegerField(default=3, validators=[MinValueValidator(1)])
    semester = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])  # rang dans le cursus
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["program", "semester", "code"]

    def __str__(self):
        return f"{self.code} - {self.name} ({self.credits} cr)"
