import uuid
from django.db import models
from core.models import AcademicProgram
from enrollments.models import Student, CourseEnrollment

# Create your models here.
class AcademicRecord(models.Model):
    """Bilan semestriel d'un élève (GPA semestre + cumul), reconstruit depuis les CourseGrade finalisées."""
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="academic_records")
    program = models.ForeignKey(AcademicProgram, on_delete=models.PROTECT, null=True, blank=True, related_name="academic_records")
    semester_year = models.CharField(max_length=16)
    total_credits_attempted = models.PositiveIntegerField(default=0)
    total_credits_earned = models.PositiveIntegerField(default=0)
    semester_gpa = models.DecimalField(max_digits=3, decimal_places=2, default=0)
    cumulative_gpa = models.DecimalField(max_digits=3, decimal_places=2, default=0)
    total_quality_points = models.DecimalField(max_digits=8, decimal_places=2, default=0)
    academic_status = models.CharField(max_length=32, blank=True)
    is_finalized = models.BooleanField(default=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = (("student", "semester_year"),)
        ordering = ["student", "-semester_year"]

    def __str__(self):
        return f"{self.student.student_number} - {self.semester_year}: {self.semester_gpa}/{self.cumulative_gpa}"

class TranscriptToken(models.Model):
    uid = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    enrollment = models.ForeignKey(CourseEnrollment, on_delete=models.CASCADE, related_name="transcript_tokens")
    created_at = models.DateTimeField(auto_now_add=True)
    valid = models.BooleanField(default=True)
    # Snapshot JSON (facultatif mais utile pour l’archivage)
    payload = models.JSONField(default=dict, blank=True)
    pdf_sha1 = models.CharField(max_length=64, blank=True)

    def __str__(self):
        s = self.enrollment.student
        return f"{self.uid} - {s.student_number} - {self.enrollment.course.code}"
