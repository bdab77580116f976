# enrollments/views.py
from rest_framework import viewsets, permissions, filters
from django_filters.rest_framework import DjangoFilterBackend
from .models import Student, CourseEnrollment
from .serializers import (
    StudentSerializer, CourseEnrollmentSerializer, CourseEnrollmentDetailSerializer
)

class StudentViewSet(viewsets.ModelViewSet):
    queryset = Student.objects.select_related("program").all()
    serializer_class = StudentSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ["program"]
    search_fields = ["student_number","last_name","first_name"]

class CourseEnrollmentViewSet(viewsets.ModelViewSet):
    queryset = CourseEnrollment.objects.select_related("student","course").all()
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = CourseEnrollmentSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["student","course","semester_year","status"]

    def get_serializer_class(self):
        # list/retrieve → serializer enrichi (noms, cours, crédits)
        if self.action in ("list","retrieve"):
            return CourseEnrollmentDetailSerializer
        return CourseEnrollmentSerializer
