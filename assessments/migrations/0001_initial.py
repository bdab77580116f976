import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("core", "0001_initial"),
        ("enrollments", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="AssessmentConfig",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("semester_year", models.CharField(max_length=16)),
                ("assessment_type", models.CharField(choices=[("quiz", "Quiz"), ("test", "Test"), ("assignment", "Assignment"), ("project", "Project"), ("lab", "Lab"), ("participation", "Participation"), ("final_exam", "Final exam")], max_length=16)),
                ("category", models.CharField(choices=[("internal", "Internal"), ("external", "External")], max_length=8)),
                ("name", models.CharField(max_length=128)),
                ("description", models.TextField(blank=True)),
                ("max_marks", models.DecimalField(decimal_places=2, default=100, max_digits=6, validators=[django.core.validators.MinValueValidator(0.01)])),
                ("weight_percentage", models.DecimalField(decimal_places=2, default=25, max_digits=5, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ("due_date", models.DateField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("course", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="assessment_configs", to="core.course")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="assessment_configs", to=settings.AUTH_USER_MODEL)),
            ],
            options={"ordering": ["course__code", "semester_year", "category", "due_date", "id"]},
        ),
        migrations.CreateModel(
            name="Assessment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=128)),
                ("description", models.TextField(blank=True)),
                ("instructions", models.TextField(blank=True)),
                ("start_time", models.DateTimeField(blank=True, null=True)),
                ("end_time", models.DateTimeField(blank=True, null=True)),
                ("duration_minutes", models.PositiveIntegerField(blank=True, null=True)),
                ("total_marks", models.DecimalField(decimal_places=2, default=100, max_digits=6, validators=[django.core.validators.MinValueValidator(0.01)])),
                ("is_published", models.BooleanField(default=False)),
                ("config", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="assessments", to="assessments.assessmentconfig")),
            ],
            options={"ordering": ["config", "start_time", "id"]},
        ),
        migrations.CreateModel(
            name="StudentGrade",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("marks_obtained", models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True, validators=[django.core.validators.MinValueValidator(0)])),
                ("percentage", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("grade_letter", models.CharField(blank=True, max_length=2)),
                ("comments", models.TextField(blank=True)),
                ("submitted_at", models.DateTimeField(blank=True, null=True)),
                ("graded_at", models.DateTimeField(blank=True, null=True)),
                ("is_submitted", models.BooleanField(default=False)),
                ("is_graded", models.BooleanField(default=False)),
                ("assessment", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="grades", to="assessments.assessment")),
                ("enrollment", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="grades", to="enrollments.courseenrollment")),
                ("graded_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="graded_marks", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["assessment", "enrollment"],
                "unique_together": {("assessment", "enrollment")},
            },
        ),
    ]
