from rest_framework import serializers
from django.db import transaction

from .models import GradeScale, GradeBand, CourseGrade
from .aggregator import WeightingStrategy, RoundingPolicy


class GradeBandSerializer(serializers.ModelSerializer):
    class Meta:
        model = GradeBand
        fields = ["id", "letter", "min_mark", "max_mark", "gpa", "description"]


class GradeScaleSerializer(serializers.ModelSerializer):
    bands = GradeBandSerializer(many=True)

    class Meta:
        model = GradeScale
        fields = ["id", "name", "is_default", "bands"]

    def validate_bands(self, bands):
        if not bands:
            raise serializers.ValidationError("A grade scale needs at least one band.")
        spans = sorted((b["min_mark"], b["max_mark"], b["letter"]) for b in bands)
        for lo, hi, letter in spans:
            if lo > hi:
                raise serializers.ValidationError(f"Band {letter}: min_mark > max_mark.")
        for (lo1, hi1, l1), (lo2, hi2, l2) in zip(spans, spans[1:]):
            if lo2 <= hi1:
                raise serializers.ValidationError(f"Bands {l1} and {l2} overlap.")
        return bands

    @transaction.atomic
    def create(self, validated):
        bands = validated.pop("bands")
        scale = GradeScale.objects.create(**validated)
        GradeBand.objects.bulk_create([GradeBand(scale=scale, **b) for b in bands])
        self._single_default(scale)
        return scale

    @transaction.atomic
    def update(self, instance, validated):
        bands = validated.pop("bands", None)
        for k, v in validated.items():
            setattr(instance, k, v)
        instance.save()
        if bands is not None:
            instance.bands.all().delete()
            GradeBand.objects.bulk_create([GradeBand(scale=instance, **b) for b in bands])
        self._single_default(instance)
        return instance

    def _single_default(self, scale):
        # un seul barème par défaut
        if scale.is_default:
            GradeScale.objects.exclude(id=scale.id).filter(is_default=True).update(is_default=False)


class CourseGradeSerializer(serializers.ModelSerializer):
    student_number = serializers.CharField(source="enrollment.student.student_number", read_only=True)
    course_code = serializers.CharField(source="enrollment.course.code", read_only=True)
    semester_year = serializers.CharField(source="enrollment.semester_year", read_only=True)
    credits = serializers.IntegerField(source="enrollment.course.credits", read_only=True)

    class Meta:
        model = CourseGrade
        fields = [
            "id", "enrollment", "student_number", "course_code", "semester_year", "credits",
            "internal_total_marks", "internal_obtained_marks", "internal_percentage",
            "external_total_marks", "external_obtained_marks", "external_percentage",
            "final_exam_percentage", "continuous_assessment",
            "final_percentage", "final_grade_letter", "quality_points",
            "is_finalized", "finalized_by", "finalized_at",
        ]
        read_only_fields = fields


# -------------------------
#  Calculateur sans état
# -------------------------

class WeightConfigSerializer(serializers.Serializer):
    strategy = serializers.ChoiceField(choices=WeightingStrategy.choices)
    internal_weight = serializers.DecimalField(max_digits=7, decimal_places=6, default="0.4")
    external_weight = serializers.DecimalField(max_digits=7, decimal_places=6, default="0.6")
    continuous_weight = serializers.DecimalField(max_digits=7, decimal_places=6, required=False)
    final_exam_weight = serializers.DecimalField(max_digits=7, decimal_places=6, required=False)


class CourseInputSerializer(serializers.Serializer):
    key = serializers.CharField(required=False, allow_blank=True)
    internal_average = serializers.DecimalField(max_digits=8, decimal_places=4, required=False, allow_null=True)
    external_average = serializers.DecimalField(max_digits=8, decimal_places=4, required=False, allow_null=True)
    final_exam_score = serializers.DecimalField(max_digits=8, decimal_places=4, required=False, allow_null=True)


class CalculateRequestSerializer(serializers.Serializer):
    """
    {
      "weights": {"strategy": "composed_internal", ...},   // optionnel: settings.GRADING sinon
      "rounding": "integer",                                 // optionnel
      "students": [{"key": "ST001", "internal_average": 94.5, "external_average": 79, "final_exam_score": 78}]
    }
    """
    weights = WeightConfigSerializer(required=False)
    rounding = serializers.ChoiceField(choices=RoundingPolicy.choices, required=False)
    rank_method = serializers.ChoiceField(choices=["dense", "competition"], default="dense")
    students = CourseInputSerializer(many=True)
