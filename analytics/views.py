from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from django.http import Http404

from assessments.permissions import IsFacultyOrAdminWrite
from core.models import Course
from enrollments.models import CourseEnrollment
from assessments.models import Assessment, StudentGrade
from grading.services import compute_course_sheet

# Create your views here.

def distribution_bins(values):
    """Histogramme des notes finales par tranches de 10 (100 tombe dans 90-100)."""
    bins = [{"range": f"{i*10}-{(i+1)*10}", "count": 0} for i in range(10)]
    for v in values:
        idx = int(min(max(v, 0), 100)) // 10
        if idx == 10: idx = 9
        bins[idx]["count"] += 1
    return bins

@api_view(["GET"])
@permission_classes([IsFacultyOrAdminWrite])
def course_stats(request, course_id: int):
    semester = request.GET.get("semester")
    if not semester:
        return Response({"detail": "semester is required"}, status=400)

    try:
        course = Course.objects.select_related("program").get(id=course_id)
    except Course.DoesNotExist:
        raise Http404("Unknown course")

    sheet = compute_course_sheet(course_id, semester)
    rows = sheet["results"]

    # Completion (remplissage des notes attendues)
    enroll_ids = list(
        CourseEnrollment.objects.filter(course_id=course_id, semester_year=semester)
        .exclude(status=CourseEnrollment.Status.DROPPED)
        .values_list("id", flat=True)
    )
    assess_ids = list(
        Assessment.objects.filter(config__course_id=course_id, config__semester_year=semester, config__is_active=True)
        .values_list("id", flat=True)
    )
    expected_total = len(enroll_ids) * len(assess_ids)
    graded = StudentGrade.objects.filter(
        enrollment_id__in=enroll_ids, assessment_id__in=assess_ids, is_graded=True
    ).count()
    completion_rate = round((graded / expected_total) * 100, 2) if expected_total else 0.0

    # Top 3 (déjà triés par rang)
    top3 = [
        {"enrollment_id": r["enrollment_id"], "student_number": r["student"]["student_number"],
         "student_name": r["student"]["name"], "final_percentage": r["final_percentage"], "rank": r["rank"]}
        for r in rows[:3]
    ]

    return Response({
        "course": {"id": course.id, "code": course.code, "name": course.name, "program": course.program.code},
        "semester_year": semester,
        "statistics": sheet["statistics"],
        "completion_rate": completion_rate,
        "top_students": top3,
        "distribution": distribution_bins([r["final_percentage"] for r in rows]),
        "students": rows,
    })
