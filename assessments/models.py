from django.db import models
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, MaxValueValidator
from django.utils import timezone
from core.models import Course
from enrollments.models import CourseEnrollment
from .scoring import percentage

# Create your models here.

class AssessmentConfig(models.Model):
    """Composante notée d'un cours pour un semestre (devoir, projet, test, examen final...)."""
    class Type(models.TextChoices):
        QUIZ = "quiz", "Quiz"
        TEST = "test", "Test"
        ASSIGNMENT = "assignment", "Assignment"
        PROJECT = "project", "Project"
        LAB = "lab", "Lab"
        PARTICIPATION = "participation", "Participation"
        FINAL_EXAM = "final_exam", "Final exam"

    class Category(models.TextChoices):
        INTERNAL = "internal", "Internal"
        EXTERNAL = "external", "External"

    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name="assessment_configs")
    semester_year = models.CharField(max_length=16)
    assessment_type = models.CharField(max_length=16, choices=Type.choices)
    category = models.CharField(max_length=8, choices=Category.choices)
    name = models.CharField(max_length=128)
    description = models.TextField(blank=True)
    max_marks = models.DecimalField(max_digits=6, decimal_places=2, default=100,
                                    validators=[MinValueValidator(0.01)])
    # somme à 100 par catégorie attendue mais non imposée
    weight_percentage = models.DecimalField(max_digits=5, decimal_places=2, default=25,
                                            validators=[MinValueValidator(0), MaxValueValidator(100)])
    due_date = models.DateField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name="assessment_configs")

    class Meta:
        ordering = ["course__code", "semester_year", "category", "due_date", "id"]

    def __str__(self):
        return f"{self.course.code} {self.semester_year} | {self.name} ({self.category}, {self.weight_percentage}%)"

class Assessment(models.Model):
    config = models.ForeignKey(AssessmentConfig, on_delete=models.CASCADE, related_name="assessments")
    title = models.CharField(max_length=128)
    description = models.TextField(blank=True)
    instructions = models.TextField(blank=True)
    start_time = models.DateTimeField(null=True, blank=True)
    end_time = models.DateTimeField(null=True, blank=True)
    duration_minutes = models.PositiveIntegerField(null=True, blank=True)
    total_marks = models.DecimalField(max_digits=6, decimal_places=2, default=100,
                                      validators=[MinValueValidator(0.01)])
    is_published = models.BooleanField(default=False)

    class Meta:
        ordering = ["config", "start_time", "id"]

    def __str__(self):
        return f"{self.config.course.code} | {self.title}"

class StudentGrade(models.Model):
    """
    Note d'un élève pour une épreuve.
    Cycle: non rendu -> rendu -> noté (à sens unique, pas de retour arrière).
    """
    assessment = models.ForeignKey(Assessment, on_delete=models.CASCADE, related_name="grades")
    enrollment = models.ForeignKey(CourseEnrollment, on_delete=models.CASCADE, related_name="grades")
    marks_obtained = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True,
                                         validators=[MinValueValidator(0)])
    percentage = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    grade_letter = models.CharField(max_length=2, blank=True)
    comments = models.TextField(blank=True)
    submitted_at = models.DateTimeField(null=True, blank=True)
    graded_at = models.DateTimeField(null=True, blank=True)
    graded_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                  related_name="graded_marks")
    is_submitted = models.BooleanField(default=False)
    is_graded = models.BooleanField(default=False)

    class Meta:
        unique_together = (("assessment", "enrollment"),)
        ordering = ["assessment", "enrollment"]

    def __str__(self):
        return f"{self.enrollment.student} → {self.assessment}: {self.marks_obtained}"

    @property
    def status(self):
        if self.is_graded:
            return "graded"
        if self.is_submitted:
            return "submitted"
        return "not_submitted"

    def mark_submitted(self, when=None):
        if self.is_submitted:
            return self
        self.is_submitted = True
        self.submitted_at = when or timezone.now()
        return self

    def record_marks(self, marks, graded_by=None, when=None):
        """Noter vaut rendu (examens sur table). Re-noter met à jour, jamais de 'dé-notation'."""
        if marks is None:
            raise ValidationError("marks_obtained is required to grade.")
        if marks < 0 or marks > self.assessment.total_marks:
            raise ValidationError(f"marks_obtained must be between 0 and {self.assessment.total_marks}.")
        self.mark_submitted(when)
        self.marks_obtained = marks
        self.percentage = percentage(marks, self.assessment.total_marks)
        self.is_graded = True
        self.graded_at = when or timezone.now()
        if graded_by is not None:
            self.graded_by = graded_by
        return self
