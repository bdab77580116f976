from django.db import migrations

def seed(apps, schema_editor):
    GradeScale = apps.get_model("grading", "GradeScale")
    GradeBand = apps.get_model("grading", "GradeBand")

    scale, _ = GradeScale.objects.get_or_create(name="Default A-F", defaults={"is_default": True})

    bands = [
        ("A", 80, 100, 4.0, "Excellent"),
        ("B", 65, 79, 3.0, "Good"),
        ("C", 50, 64, 2.0, "Satisfactory"),
        ("D", 40, 49, 1.0, "Pass"),
        ("F", 0, 39, 0.0, "Fail"),
    ]
    for letter, lo, hi, gpa, description in bands:
        GradeBand.objects.get_or_create(
            scale=scale, letter=letter,
            defaults={"min_mark": lo, "max_mark": hi, "gpa": gpa, "description": description}
        )

def unseed(apps, schema_editor):
    GradeScale = apps.get_model("grading", "GradeScale")
    GradeScale.objects.filter(name="Default A-F").delete()

class Migration(migrations.Migration):

    dependencies = [
        ("grading", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed, reverse_code=unseed),
    ]
