import uuid
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("core", "0001_initial"),
        ("enrollments", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="AcademicRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("semester_year", models.CharField(max_length=16)),
                ("total_credits_attempted", models.PositiveIntegerField(default=0)),
                ("total_credits_earned", models.PositiveIntegerField(default=0)),
                ("semester_gpa", models.DecimalField(decimal_places=2, default=0, max_digits=3)),
                ("cumulative_gpa", models.DecimalField(decimal_places=2, default=0, max_digits=3)),
                ("total_quality_points", models.DecimalField(decimal_places=2, default=0, max_digits=8)),
                ("academic_status", models.CharField(blank=True, max_length=32)),
                ("is_finalized", models.BooleanField(default=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("program", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="academic_records", to="core.academicprogram")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="academic_records", to="enrollments.student")),
            ],
            options={
                "ordering": ["student", "-semester_year"],
                "unique_together": {("student", "semester_year")},
            },
        ),
        migrations.CreateModel(
            name="TranscriptToken",
            fields=[
                ("uid", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("valid", models.BooleanField(default=True)),
                ("payload", models.JSONField(blank=True, default=dict)),
                ("pdf_sha1", models.CharField(blank=True, max_length=64)),
                ("enrollment", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="transcript_tokens", to="enrollments.courseenrollment")),
            ],
        ),
    ]
