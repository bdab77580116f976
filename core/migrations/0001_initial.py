import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AcademicProgram",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=128)),
                ("code", models.CharField(max_length=16, unique=True)),
                ("description", models.TextField(blank=True)),
                ("duration_semesters", models.PositiveSmallIntegerField(default=8)),
                ("total_credits", models.PositiveSmallIntegerField(default=120)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={"ordering": ["code"]},
        ),
        migrations.CreateModel(
            name="Course",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=128)),
                ("code", models.CharField(max_length=16, unique=True)),
                ("description", models.TextField(blank=True)),
                ("credits", models.PositiveSmallIntegerField(default=3, validators=[django.core.validators.MinValueValidator(1)])),
                ("semester", models.PositiveSmallIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ("is_active", models.BooleanField(default=True)),
                ("program", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="courses", to="core.academicprogram")),
            ],
            options={"ordering": ["program", "semester", "code"]},
        ),
    ]
