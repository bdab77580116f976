# assessments/views.py
from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from django_filters.rest_framework import DjangoFilterBackend

from .models import AssessmentConfig, Assessment, StudentGrade
from .serializers import (
    AssessmentConfigSerializer, AssessmentSerializer, StudentGradeSerializer,
    BulkGradesUpsertSerializer
)
from .permissions import IsFacultyOrAdminWrite, faculty_can_edit

def _check_config_write(request, config_id):
    if getattr(request.user, "role", None) == "FACULTY" and not faculty_can_edit(request.user, config_id):
        raise PermissionDenied("Not allowed to edit assessments for this course.")

class AssessmentConfigViewSet(viewsets.ModelViewSet):
    queryset = AssessmentConfig.objects.select_related("course", "created_by")
    serializer_class = AssessmentConfigSerializer
    permission_classes = [IsFacultyOrAdminWrite]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["course", "semester_year", "category", "assessment_type", "is_active", "created_by"]

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)

    def perform_update(self, serializer):
        _check_config_write(self.request, serializer.instance.id)
        serializer.save()

    def perform_destroy(self, instance):
        _check_config_write(self.request, instance.id)
        instance.delete()

class AssessmentViewSet(viewsets.ModelViewSet):
    queryset = Assessment.objects.select_related("config__course")
    serializer_class = AssessmentSerializer
    permission_classes = [IsFacultyOrAdminWrite]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["config", "config__course", "config__semester_year", "is_published"]

    def perform_create(self, serializer):
        _check_config_write(self.request, serializer.validated_data["config"].id)
        serializer.save()

    def perform_update(self, serializer):
        _check_config_write(self.request, serializer.instance.config_id)
        serializer.save()

    @action(detail=True, methods=["get"], url_path="grades")
    def grades(self, request, pk=None):
        """Liste des notes pour cette épreuve (id = pk)."""
        assessment = self.get_object()
        qs = StudentGrade.objects.filter(assessment=assessment).select_related("enrollment__student")
        data = [
            {
                "id": g.id,
                "enrollment": g.enrollment_id,
                "student": {
                    "id": g.enrollment.student.id,
                    "student_number": g.enrollment.student.student_number,
                    "name": g.enrollment.student.full_name,
                },
                "marks_obtained": float(g.marks_obtained) if g.marks_obtained is not None else None,
                "percentage": float(g.percentage) if g.percentage is not None else None,
                "status": g.status,
            }
            for g in qs
        ]
        return Response(data)

class StudentGradeViewSet(viewsets.ModelViewSet):
    queryset = StudentGrade.objects.select_related(
        "assessment__config", "enrollment__student", "graded_by"
    )
    serializer_class = StudentGradeSerializer
    permission_classes = [IsFacultyOrAdminWrite]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["assessment", "enrollment", "is_graded", "is_submitted"]  # GET /api/student-grades/?assessment=<id>

    def perform_create(self, serializer):
        _check_config_write(self.request, serializer.validated_data["assessment"].config_id)
        serializer.save()

    def perform_update(self, serializer):
        _check_config_write(self.request, serializer.instance.assessment.config_id)
        serializer.save()

    @action(detail=True, methods=["post"], url_path="submit")
    def submit(self, request, pk=None):
        grade = self.get_object()
        grade.mark_submitted()
        grade.save(update_fields=["is_submitted", "submitted_at"])
        return Response(self.get_serializer(grade).data)

    @action(detail=False, methods=["post"], url_path="bulk")
    def bulk(self, request, *args, **kwargs):
        """Upsert de notes pour une épreuve."""
        ser = BulkGradesUpsertSerializer(data=request.data, context={"request": request})
        ser.is_valid(raise_exception=True)
        assessment = ser.validated_data["assessment_obj"]
        _check_config_write(request, assessment.config_id)

        result = ser.save()
        return Response(result, status=status.HTTP_200_OK)
