from django.http import HttpResponse, Http404
from django.urls import reverse
from django.views.generic import TemplateView

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from django_filters.rest_framework import DjangoFilterBackend

from assessments.permissions import STAFF_ROLES
from core.views import parse_id
from enrollments.models import Student, CourseEnrollment
from .models import AcademicRecord, TranscriptToken
from .serializers import AcademicRecordSerializer
from .services import (
    compute_student_gpa, compute_academic_progress, rebuild_academic_records,
    compute_transcript, build_transcript_html, render_pdf_from_html, sha1_bytes,
)


def _check_student_access(user, student_id):
    """Le personnel voit tout; un STUDENT ne voit que son propre dossier."""
    if getattr(user, "role", None) in STAFF_ROLES:
        return
    student = getattr(user, "student", None)
    if student is None or student.id != student_id:
        raise PermissionDenied("Not allowed to view this student's records.")

def _student_param(request):
    student_id = request.query_params.get("student")
    if not student_id:
        student = getattr(request.user, "student", None)
        return student.id if student else None
    return parse_id(student_id, "student")

class StudentGPAView(APIView):
    permission_classes = [IsAuthenticated]
    def get(self, request):
        student_id = _student_param(request)
        if not student_id:
            return Response({"detail":"student is required"}, status=status.HTTP_400_BAD_REQUEST)
        _check_student_access(request.user, student_id)
        if not Student.objects.filter(id=student_id).exists():
            raise Http404("Unknown student")
        semester = request.query_params.get("semester")
        return Response(compute_student_gpa(student_id, semester))

class AcademicProgressView(APIView):
    permission_classes = [IsAuthenticated]
    def get(self, request):
        student_id = _student_param(request)
        if not student_id:
            return Response({"detail":"student is required"}, status=status.HTTP_400_BAD_REQUEST)
        _check_student_access(request.user, student_id)
        try:
            data = compute_academic_progress(student_id)
        except Student.DoesNotExist:
            raise Http404("Unknown student")
        return Response(data)

class AcademicRecordViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = AcademicRecord.objects.select_related("student", "program")
    serializer_class = AcademicRecordSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["student", "program", "semester_year", "academic_status"]

    def get_queryset(self):
        qs = super().get_queryset()
        if getattr(self.request.user, "role", None) not in STAFF_ROLES:
            student = getattr(self.request.user, "student", None)
            qs = qs.filter(student=student) if student else qs.none()
        return qs

    @action(detail=False, methods=["post"], url_path="rebuild")
    def rebuild(self, request):
        if getattr(request.user, "role", None) not in ("REGISTRAR", "ADMIN", "HOD"):
            raise PermissionDenied("Only registrar/HOD/admin can rebuild academic records.")
        student_id = (request.data or {}).get("student")
        if not student_id:
            return Response({"detail":"student is required"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            records = rebuild_academic_records(parse_id(student_id, "student"))
        except Student.DoesNotExist:
            raise Http404("Unknown student")
        return Response(AcademicRecordSerializer(records, many=True).data)

class TranscriptPDFView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        enrollment_id = request.GET.get("enrollment")
        if not enrollment_id:
            return Response({"detail":"enrollment is required"}, status=400)
        try:
            enrollment = CourseEnrollment.objects.get(id=parse_id(enrollment_id, "enrollment"))
        except CourseEnrollment.DoesNotExist:
            raise Http404("Unknown enrollment")
        _check_student_access(request.user, enrollment.student_id)

        payload = compute_transcript(enrollment.id)
        # token
        token = TranscriptToken.objects.create(enrollment=enrollment, payload=payload)
        verify_url = request.build_absolute_uri(reverse("transcript-verify", args=[str(token.uid)]))
        html = build_transcript_html(payload, verify_url)
        pdf = render_pdf_from_html(html)
        token.pdf_sha1 = sha1_bytes(pdf)
        token.save(update_fields=["pdf_sha1"])

        filename = f"{payload['student']['student_number']}_{payload['course']['code']}_{enrollment.semester_year.replace(' ', '_')}.pdf"
        resp = HttpResponse(pdf, content_type="application/pdf")
        resp["Content-Disposition"] = f'inline; filename="{filename}"'
        return resp

class TranscriptVerifyPage(TemplateView):
    template_name = "reports/verify.html"  # page publique

    def get(self, request, uid):
        try:
            token = TranscriptToken.objects.select_related("enrollment__student","enrollment__course").get(uid=uid)
        except TranscriptToken.DoesNotExist:
            raise Http404("Unknown transcript UID")
        ctx = {
            "valid": token.valid,
            "student": {
                "student_number": token.enrollment.student.student_number,
                "name": token.enrollment.student.full_name,
            },
            "course": token.enrollment.course.code,
            "semester_year": token.enrollment.semester_year,
            "letter_grade": token.payload.get("grading", {}).get("letter_grade", ""),
            "created_at": token.created_at,
            "pdf_sha1": token.pdf_sha1,
        }
        return self.render_to_response(ctx)
