import io, base64, hashlib
import logging
from collections import Counter
from django.template.loader import render_to_string
from django.conf import settings
from django.db import transaction
from xhtml2pdf import pisa
import qrcode

from enrollments.models import Student, CourseEnrollment
from assessments.models import Assessment, StudentGrade
from grading.models import CourseGrade
from grading.conf import (
    weight_config_from_settings, good_standing_gpa, failing_grades, degree_credits,
)
from grading.services import compute_course_sheet
from reports.models import AcademicRecord
from .gpa import (
    GradeRecord, gpa, semester_gpa, credits_attempted, credits_earned, academic_standing,
    degree_progress, completion_rate, term_summaries, semester_sort_key,
)

logger = logging.getLogger(__name__)

TIMES_STACK = '"Times New Roman", Times, serif'


def _f(x):
    return float(x) if x is not None else None


def grade_records_for_student(student_id: int):
    """CourseGrade (+ crédits du cours) -> GradeRecord, finalisées ou non: le filtre est fait par gpa()."""
    qs = (CourseGrade.objects
          .select_related("enrollment__course")
          .filter(enrollment__student_id=student_id))
    return [
        GradeRecord(
            quality_points=g.quality_points,
            credits=g.enrollment.course.credits,
            is_finalized=g.is_finalized,
            semester_year=g.enrollment.semester_year,
            letter_grade=g.final_grade_letter or None,
        )
        for g in qs
    ]


def gpa_payload(result):
    return {
        "gpa": float(result.gpa),
        "total_credits": result.total_credits,
        "quality_points": float(result.quality_points),
    }


def compute_student_gpa(student_id: int, semester_year=None):
    records = grade_records_for_student(student_id)
    result = semester_gpa(records, semester_year) if semester_year else gpa(records)
    return gpa_payload(result)


def compute_academic_progress(student_id: int):
    """
    Vue d'ensemble d'un élève: GPA global, crédits obtenus/tentés,
    progression du diplôme, statut académique, tendance par semestre.
    """
    student = Student.objects.select_related("program").get(id=student_id)
    records = grade_records_for_student(student_id)
    fails = failing_grades()
    threshold = good_standing_gpa()

    overall = gpa(records)
    earned = credits_earned(records, fails)
    attempted = credits_attempted(records)
    required = student.program.total_credits if student.program and student.program.total_credits else degree_credits()

    distribution = Counter(r.letter_grade for r in records if r.is_finalized and r.letter_grade)
    trend = [
        {
            "semester_year": t.semester_year,
            "semester_gpa": float(t.semester_gpa),
            "cumulative_gpa": float(t.cumulative_gpa),
        }
        for t in term_summaries(records, threshold, fails)
    ]

    current = (CourseEnrollment.objects.select_related("course")
               .filter(student=student, status=CourseEnrollment.Status.ENROLLED)
               .order_by("course__code"))

    return {
        "student": {
            "id": student.id,
            "student_number": student.student_number,
            "name": student.full_name,
            "program": student.program.code if student.program else None,
        },
        "overall_gpa": gpa_payload(overall),
        "total_credits_earned": earned,
        "total_credits_attempted": attempted,
        "completion_rate": float(completion_rate(earned, attempted)),
        "credits_required": required,
        "degree_progress": float(degree_progress(earned, required)),
        "academic_standing": academic_standing(overall.gpa, threshold),
        "grade_distribution": dict(distribution),
        "gpa_trend": trend,
        "current_courses": [
            {"enrollment_id": e.id, "course_code": e.course.code, "course_name": e.course.name,
             "credits": e.course.credits, "semester_year": e.semester_year}
            for e in current
        ],
    }


@transaction.atomic
def rebuild_academic_records(student_id: int):
    """Un AcademicRecord par semestre, recalculé depuis les CourseGrade finalisées."""
    student = Student.objects.select_related("program").get(id=student_id)
    rows = term_summaries(grade_records_for_student(student_id), good_standing_gpa(), failing_grades())

    out = []
    for t in rows:
        record, _ = AcademicRecord.objects.update_or_create(
            student=student, semester_year=t.semester_year,
            defaults={
                "program": student.program,
                "total_credits_attempted": t.total_credits_attempted,
                "total_credits_earned": t.total_credits_earned,
                "semester_gpa": t.semester_gpa,
                "cumulative_gpa": t.cumulative_gpa,
                "total_quality_points": t.total_quality_points,
                "academic_status": t.academic_status,
                "is_finalized": True,
            },
        )
        out.append(record)
    # semestres sans plus aucune note finalisée
    AcademicRecord.objects.filter(student=student).exclude(
        semester_year__in=[t.semester_year for t in rows]
    ).delete()

    logger.info("Academic records rebuilt: student=%s semesters=%d", student_id, len(out))
    return sorted(out, key=lambda r: semester_sort_key(r.semester_year))


def compute_transcript(enrollment_id: int):
    """
    Relevé d'un cours pour une inscription: composantes internal/external,
    examen final, note finale, rang dans la classe.
    """
    e = CourseEnrollment.objects.select_related("student", "course__program").get(id=enrollment_id)
    weights = weight_config_from_settings()

    assessments = list(
        Assessment.objects.select_related("config")
        .filter(config__course_id=e.course_id, config__semester_year=e.semester_year, config__is_active=True)
        .order_by("config__due_date", "id")
    )
    grades = {g.assessment_id: g for g in StudentGrade.objects.filter(enrollment=e, assessment__in=assessments)}

    components = {"internal": [], "external": [], "final_exam": []}
    for a in assessments:
        g = grades.get(a.id)
        bucket = "final_exam" if (a.config.assessment_type == "final_exam"
                                  and weights.strategy == "composed_internal") else a.config.category
        components[bucket].append({
            "name": a.title,
            "type": a.config.assessment_type,
            "max_marks": _f(a.total_marks),
            "marks_obtained": _f(g.marks_obtained) if g and g.is_graded else 0.0,
            "percentage": _f(g.percentage) if g and g.is_graded else 0.0,
            "weight": _f(a.config.weight_percentage),
        })

    sheet = compute_course_sheet(e.course_id, e.semester_year)
    row = next((r for r in sheet["results"] if r["enrollment_id"] == e.id), None)
    course_grade = CourseGrade.objects.filter(enrollment=e).first()

    # la note finalisée fait foi; sinon le calcul courant
    if course_grade and course_grade.is_finalized:
        grading = {
            "continuous_assessment": _f(course_grade.continuous_assessment),
            "total_score": _f(course_grade.final_percentage),
            "letter_grade": course_grade.final_grade_letter,
            "grade_points": _f(course_grade.quality_points),
            "is_finalized": True,
        }
    else:
        grading = {
            "continuous_assessment": row["continuous_assessment"] if row else None,
            "total_score": row["final_percentage"] if row else None,
            "letter_grade": row["letter_grade"] if row else "",
            "grade_points": row["quality_points"] if row else None,
            "is_finalized": False,
        }
    grading["rank"] = row["rank"] if row else None
    grading["class_size"] = sheet["count"]

    return {
        "college": {
            "name": getattr(settings, "COLLEGE_NAME", "Your College"),
            "address": getattr(settings, "COLLEGE_ADDRESS", ""),
        },
        "student": {
            "student_number": e.student.student_number,
            "name": e.student.full_name,
        },
        "course": {
            "code": e.course.code,
            "name": e.course.name,
            "credits": e.course.credits,
            "program": e.course.program.name,
            "semester_year": e.semester_year,
        },
        "assessments": {
            "internal": {
                "components": components["internal"],
                "average": row["internal_average"] if row else 0.0,
                "weight": float(weights.internal_weight),
            },
            "external": {
                "components": components["external"],
                "average": row["external_average"] if row else 0.0,
                "weight": float(weights.external_weight),
            },
            "final_exam": {
                "components": components["final_exam"],
                "weight": float(weights.final_exam_weight),
            },
        },
        "grading": grading,
    }


def make_qr_png_b64(text: str) -> str:
    img = qrcode.make(text)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")


def render_pdf_from_html(html: str) -> bytes:
    out = io.BytesIO()
    result = pisa.CreatePDF(io.StringIO(html), dest=out)
    if result.err:
        logger.error("PDF rendering failed with %s error(s)", result.err)
    return out.getvalue()


def build_transcript_html(payload: dict, verify_url: str) -> str:
    qr_b64 = make_qr_png_b64(verify_url)
    return render_to_string("reports/transcript.html", {
        "p": payload,
        "verify_url": verify_url,
        "qr_b64": qr_b64,
        "TIMES_STACK": TIMES_STACK,
    })


def sha1_bytes(b: bytes) -> str:
    return hashlib.sha1(b).hexdigest()
