import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("core", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Student",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("student_number", models.CharField(max_length=32, unique=True)),
                ("last_name", models.CharField(max_length=64)),
                ("first_name", models.CharField(max_length=64)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("program", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="students", to="core.academicprogram")),
                ("user", models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="student", to=settings.AUTH_USER_MODEL)),
            ],
            options={"ordering": ["last_name", "first_name"]},
        ),
        migrations.CreateModel(
            name="CourseEnrollment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("semester_year", models.CharField(max_length=16)),
                ("enrollment_date", models.DateField(auto_now_add=True)),
                ("status", models.CharField(choices=[("enrolled", "Enrolled"), ("dropped", "Dropped"), ("completed", "Completed")], default="enrolled", max_length=16)),
                ("course", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="enrollments", to="core.course")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="enrollments", to="enrollments.student")),
            ],
            options={
                "ordering": ["-semester_year", "course__code", "student__last_name", "student__first_name"],
                "unique_together": {("student", "course", "semester_year")},
            },
        ),
    ]
