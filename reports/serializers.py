from rest_framework import serializers
from .models import AcademicRecord

class AcademicRecordSerializer(serializers.ModelSerializer):
    student_number = serializers.CharField(source="student.student_number", read_only=True)

    class Meta:
        model = AcademicRecord
        fields = [
            "id", "student", "student_number", "program", "semester_year",
            "total_credits_attempted", "total_credits_earned",
            "semester_gpa", "cumulative_gpa", "total_quality_points",
            "academic_status", "is_finalized", "updated_at",
        ]
        read_only_fields = fields
