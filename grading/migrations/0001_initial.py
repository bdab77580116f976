import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("enrollments", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="GradeScale",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=32, unique=True)),
                ("is_default", models.BooleanField(default=False)),
            ],
            options={"ordering": ["-is_default", "name"]},
        ),
        migrations.CreateModel(
            name="GradeBand",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("letter", models.CharField(max_length=2)),
                ("min_mark", models.PositiveSmallIntegerField(validators=[django.core.validators.MaxValueValidator(100)])),
                ("max_mark", models.PositiveSmallIntegerField(validators=[django.core.validators.MaxValueValidator(100)])),
                ("gpa", models.DecimalField(decimal_places=2, default=0, max_digits=3)),
                ("description", models.CharField(blank=True, max_length=32)),
                ("scale", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="bands", to="grading.gradescale")),
            ],
            options={
                "ordering": ["-min_mark"],
                "unique_together": {("scale", "letter")},
            },
        ),
        migrations.CreateModel(
            name="CourseGrade",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("internal_total_marks", models.DecimalField(decimal_places=2, default=0, max_digits=8)),
                ("internal_obtained_marks", models.DecimalField(decimal_places=2, default=0, max_digits=8)),
                ("internal_percentage", models.DecimalField(decimal_places=2, default=0, max_digits=6)),
                ("external_total_marks", models.DecimalField(decimal_places=2, default=0, max_digits=8)),
                ("external_obtained_marks", models.DecimalField(decimal_places=2, default=0, max_digits=8)),
                ("external_percentage", models.DecimalField(decimal_places=2, default=0, max_digits=6)),
                ("final_exam_percentage", models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ("continuous_assessment", models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ("final_percentage", models.DecimalField(decimal_places=2, default=0, max_digits=6)),
                ("final_grade_letter", models.CharField(blank=True, max_length=2)),
                ("quality_points", models.DecimalField(blank=True, decimal_places=2, max_digits=3, null=True)),
                ("is_finalized", models.BooleanField(default=False)),
                ("finalized_at", models.DateTimeField(blank=True, null=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("enrollment", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="course_grade", to="enrollments.courseenrollment")),
                ("finalized_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="finalized_grades", to=settings.AUTH_USER_MODEL)),
            ],
            options={"ordering": ["-enrollment__semester_year", "enrollment__course__code"]},
        ),
    ]
