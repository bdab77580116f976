from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend

from assessments.permissions import IsFacultyOrAdminWrite, faculty_can_grade_course
from core.models import Course
from core.views import IsRegistrarOrAdmin, parse_id
from enrollments.models import CourseEnrollment
from .models import GradeScale, CourseGrade
from .serializers import (
    GradeScaleSerializer, CourseGradeSerializer, CalculateRequestSerializer
)
from .aggregator import (
    CourseInput, WeightConfig, WeightingStrategy, compute_course_result,
    rank_results, class_statistics,
)
from .conf import weight_config_from_settings, rounding_from_settings, pass_mark
from .services import (
    compute_course_grade, finalize_course_grade, compute_course_sheet,
    load_grade_scale, statistics_payload,
)

class GradeScaleViewSet(viewsets.ModelViewSet):
    queryset = GradeScale.objects.prefetch_related("bands")
    serializer_class = GradeScaleSerializer
    permission_classes = [IsRegistrarOrAdmin]

class CourseGradeViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = CourseGrade.objects.select_related("enrollment__student", "enrollment__course")
    serializer_class = CourseGradeSerializer
    permission_classes = [IsFacultyOrAdminWrite]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = {
        "enrollment__student": ["exact"],
        "enrollment__course": ["exact"],
        "enrollment__semester_year": ["exact"],
        "is_finalized": ["exact"],
    }

    def _check_course(self, course_id):
        if not faculty_can_grade_course(self.request.user, course_id):
            raise PermissionDenied("Not allowed to grade this course.")

    @action(detail=False, methods=["post"], url_path="compute")
    def compute(self, request):
        """
        Recalcule les CourseGrade: {"enrollment": id} ou {"course": id, "semester_year": "..."}.
        Les notes finalisées sont laissées telles quelles (liste "finalized").
        """
        body = request.data or {}
        if body.get("enrollment"):
            enrollment = get_object_or_404(CourseEnrollment, id=parse_id(body["enrollment"], "enrollment"))
            self._check_course(enrollment.course_id)
            ids = [enrollment.id]
        elif body.get("course") and body.get("semester_year"):
            course = get_object_or_404(Course, id=parse_id(body["course"], "course"))
            self._check_course(course.id)
            ids = list(CourseEnrollment.objects
                       .filter(course=course, semester_year=body["semester_year"])
                       .exclude(status=CourseEnrollment.Status.DROPPED)
                       .values_list("id", flat=True))
        else:
            return Response({"detail": "enrollment or (course, semester_year) is required"},
                            status=status.HTTP_400_BAD_REQUEST)

        finalized = set(CourseGrade.objects.filter(enrollment_id__in=ids, is_finalized=True)
                        .values_list("enrollment_id", flat=True))
        computed = [compute_course_grade(i) for i in ids if i not in finalized]
        return Response({
            "computed": CourseGradeSerializer(computed, many=True).data,
            "finalized": sorted(finalized),
        })

    @action(detail=True, methods=["post"], url_path="finalize")
    def finalize(self, request, pk=None):
        grade = self.get_object()
        self._check_course(grade.enrollment.course_id)
        grade = finalize_course_grade(grade.enrollment_id, request.user)
        return Response(CourseGradeSerializer(grade).data)

@api_view(["GET"])
@permission_classes([IsFacultyOrAdminWrite])
def course_sheet(request):
    course_id = request.GET.get("course")
    semester = request.GET.get("semester")
    if not course_id or not semester:
        return Response({"detail": "course and semester are required"}, status=400)
    course = get_object_or_404(Course, id=parse_id(course_id, "course"))
    with_details = request.GET.get("details", "0") == "1"
    return Response(compute_course_sheet(course.id, semester, with_details=with_details))

@api_view(["POST"])
@permission_classes([IsAuthenticated])
def calculate(request):
    """Calcul à partir de moyennes postées (aucune lecture/écriture en base hors barème)."""
    ser = CalculateRequestSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    data = ser.validated_data

    w = data.get("weights")
    if w is None:
        weights = weight_config_from_settings()
    elif w["strategy"] == WeightingStrategy.DIRECT_INTERNAL_EXTERNAL:
        weights = WeightConfig.direct(w["internal_weight"], w["external_weight"])
    else:
        weights = WeightConfig.composed(
            w["internal_weight"], w["external_weight"],
            w.get("continuous_weight", "0.4"), w.get("final_exam_weight", "0.6"),
        )
    rounding = data.get("rounding") or rounding_from_settings()
    scale = load_grade_scale()

    results = [
        compute_course_result(CourseInput(
            internal_average=s.get("internal_average"),
            external_average=s.get("external_average"),
            final_exam_score=s.get("final_exam_score"),
            key=s.get("key") or str(i),
        ), weights, scale, rounding)
        for i, s in enumerate(data["students"], start=1)
    ]
    ranked = rank_results(results, method=data["rank_method"])
    stats = class_statistics(results, pass_mark=pass_mark())

    return Response({
        "results": [
            {
                "key": r.key,
                "continuous_assessment": float(r.continuous_assessment) if r.continuous_assessment is not None else None,
                "final_percentage": float(r.final_percentage),
                "letter_grade": r.letter_grade,
                "quality_points": float(r.quality_points),
                "rank": r.rank,
                "issues": list(r.issues),
            }
            for r in ranked
        ],
        "statistics": statistics_payload(stats),
    })
