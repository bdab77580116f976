# enrollments/serializers.py
from rest_framework import serializers
from .models import Student, CourseEnrollment

class StudentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Student
        fields = ["id","student_number","last_name","first_name","email","program"]

class CourseEnrollmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = CourseEnrollment
        fields = ["id","student","course","semester_year","status","enrollment_date"]
        read_only_fields = ["enrollment_date"]

# détaillé (noms, cours, crédits)
class CourseEnrollmentDetailSerializer(serializers.ModelSerializer):
    student_number = serializers.CharField(source="student.student_number", read_only=True)
    student_name = serializers.CharField(source="student.full_name", read_only=True)
    course_code = serializers.CharField(source="course.code", read_only=True)
    course_name = serializers.CharField(source="course.name", read_only=True)
    credits = serializers.IntegerField(source="course.credits", read_only=True)

    class Meta:
        model = CourseEnrollment
        fields = [
            "id","student","student_number","student_name",
            "course","course_code","course_name","credits",
            "semester_year","status","enrollment_date",
        ]
