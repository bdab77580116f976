from rest_framework import serializers
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from decimal import Decimal, InvalidOperation

from .models import AssessmentConfig, Assessment, StudentGrade
from enrollments.models import CourseEnrollment


# -------------------------
#  Model Serializers
# -------------------------

class AssessmentConfigSerializer(serializers.ModelSerializer):
    course_code = serializers.CharField(source="course.code", read_only=True)

    class Meta:
        model = AssessmentConfig
        fields = [
            "id", "course", "course_code", "semester_year", "assessment_type", "category",
            "name", "description", "max_marks", "weight_percentage", "due_date",
            "is_active", "created_by",
        ]
        read_only_fields = ["created_by"]

    def validate(self, data):
        # max_marks > 0: une épreuve à 0 point n'est pas convertible en pourcentage
        max_marks = data.get("max_marks", getattr(self.instance, "max_marks", None))
        if max_marks is not None and Decimal(str(max_marks)) <= 0:
            raise serializers.ValidationError("'max_marks' must be positive.")
        return data


class AssessmentSerializer(serializers.ModelSerializer):
    # Expose la catégorie/type de la config pour le front
    category = serializers.CharField(source="config.category", read_only=True)
    assessment_type = serializers.CharField(source="config.assessment_type", read_only=True)

    class Meta:
        model = Assessment
        fields = [
            "id", "config", "category", "assessment_type", "title", "description", "instructions",
            "start_time", "end_time", "duration_minutes", "total_marks", "is_published",
        ]


class StudentGradeSerializer(serializers.ModelSerializer):
    status = serializers.CharField(read_only=True)

    class Meta:
        model = StudentGrade
        fields = [
            "id", "assessment", "enrollment", "marks_obtained", "percentage", "grade_letter",
            "comments", "submitted_at", "graded_at", "graded_by", "is_submitted", "is_graded", "status",
        ]
        read_only_fields = ["percentage", "submitted_at", "graded_at", "graded_by", "is_submitted", "is_graded"]

    def to_representation(self, instance):
        data = super().to_representation(instance)
        # Decimal -> float pour confort front
        for key in ("marks_obtained", "percentage"):
            if data.get(key) is not None:
                data[key] = float(data[key])
        return data

    def validate(self, data):
        a = data.get("assessment", getattr(self.instance, "assessment", None))
        e = data.get("enrollment", getattr(self.instance, "enrollment", None))
        # L'inscription doit porter sur le cours/semestre de l'épreuve
        if a is not None and e is not None and (
            e.course_id != a.config.course_id or e.semester_year != a.config.semester_year
        ):
            raise serializers.ValidationError("Enrollment does not belong to the assessment's course/semester.")
        return data

    def _apply_marks(self, instance, marks):
        if marks is None:
            return instance
        user = self.context["request"].user if "request" in self.context else None
        try:
            instance.record_marks(marks, graded_by=user if getattr(user, "is_authenticated", False) else None)
        except DjangoValidationError as exc:
            raise serializers.ValidationError({"marks_obtained": exc.messages})
        return instance

    def create(self, validated):
        marks = validated.pop("marks_obtained", None)
        instance = StudentGrade(**validated)
        self._apply_marks(instance, marks)
        instance.save()
        return instance

    def update(self, instance, validated):
        marks = validated.pop("marks_obtained", None)
        for k, v in validated.items():
            setattr(instance, k, v)
        self._apply_marks(instance, marks)
        instance.save()
        return instance


# -------------------------
#  BULK SERIALIZERS
# -------------------------

class BulkGradesUpsertSerializer(serializers.Serializer):
    """
    Upsert des notes pour UNE épreuve.

    Body:
    {
      "assessment": 10,
      "entries": [
        { "enrollment": 101, "marks_obtained": 17.5 },
        { "enrollment": 102, "marks_obtained": 12 }
      ]
    }
    """
    assessment = serializers.IntegerField()
    entries = serializers.ListField(child=serializers.DictField(), allow_empty=True)

    def validate(self, attrs):
        try:
            assessment = Assessment.objects.select_related("config").get(id=attrs["assessment"])
        except Assessment.DoesNotExist:
            raise serializers.ValidationError("Assessment not found.")
        attrs["assessment_obj"] = assessment

        # Validation basique des entrées
        for e in attrs.get("entries", []):
            if "enrollment" not in e:
                raise serializers.ValidationError("Each entry must have 'enrollment'.")
            if "marks_obtained" not in e:
                raise serializers.ValidationError("Each entry must have 'marks_obtained'.")
            # cast/plage vérifiés au create() pour différencier les raisons de skip
        return attrs

    @transaction.atomic
    def create(self, validated):
        assessment = validated["assessment_obj"]
        config = assessment.config
        user = self.context.get("request").user if self.context.get("request") else None
        graded_by = user if getattr(user, "is_authenticated", False) else None

        # Index des notes existantes pour cette épreuve
        existing = {
            g.enrollment_id: g for g in StudentGrade.objects.filter(assessment=assessment)
        }

        results = {"created": [], "updated": [], "skipped": []}

        for e in validated.get("entries", []):
            en_id = e.get("enrollment")
            raw_val = e.get("marks_obtained")

            # 1) Cast propre en Decimal
            try:
                val = Decimal(str(raw_val))
            except (InvalidOperation, TypeError):
                results["skipped"].append({"enrollment": en_id, "reason": "Invalid value"})
                continue
            if not (Decimal("0") <= val <= Decimal(assessment.total_marks)):
                results["skipped"].append({"enrollment": en_id, "reason": "Out of range"})
                continue

            # 2) L'inscription doit exister et porter sur le même cours/semestre
            try:
                enrollment = CourseEnrollment.objects.get(id=en_id)
            except CourseEnrollment.DoesNotExist:
                results["skipped"].append({"enrollment": en_id, "reason": "Enrollment not found"})
                continue
            if enrollment.course_id != config.course_id or enrollment.semester_year != config.semester_year:
                results["skipped"].append({"enrollment": en_id, "reason": "Course mismatch"})
                continue
            if enrollment.status == CourseEnrollment.Status.DROPPED:
                results["skipped"].append({"enrollment": en_id, "reason": "Enrollment dropped"})
                continue

            # 3) Upsert
            grade = existing.get(en_id)
            created = grade is None
            if created:
                grade = StudentGrade(assessment=assessment, enrollment=enrollment)
            grade.record_marks(val, graded_by=graded_by)
            grade.save()
            (results["created"] if created else results["updated"]).append(grade.id)

        return results
