from rest_framework import serializers
from .models import AcademicProgram, Course

class AcademicProgramSerializer(serializers.ModelSerializer):
    class Meta:
        model = AcademicProgram
        fields = ["id","name","code","description","duration_semesters","total_credits","is_active"]

class CourseSerializer(serializers.ModelSerializer):
    program_code = serializers.CharField(source="program.code", read_only=True)

    class Meta:
        model = Course
        fields = ["id","program","program_code","name","code","description","credits","semester","is_active"]
