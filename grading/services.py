import logging
from decimal import Decimal, ROUND_HALF_UP
from collections import defaultdict

from django.db import transaction
from django.utils import timezone

from enrollments.models import CourseEnrollment
from assessments.models import AssessmentConfig, Assessment, StudentGrade
from assessments.scoring import score_category
from grading.models import GradeScale, GradeBand, CourseGrade
from .aggregator import (
    CourseInput, GradeBandEntry, WeightingStrategy, compute_course_result,
    rank_results, class_statistics, validate_scale,
)
from .conf import weight_config_from_settings, rounding_from_settings, pass_mark
from .exceptions import InvalidConfiguration, AlreadyFinalized

logger = logging.getLogger(__name__)


def _q(x):
    return Decimal(str(x)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

def load_grade_scale(scale_id=None):
    """Barème par défaut (ou scale_id) sous forme de GradeBandEntry triés."""
    qs = GradeScale.objects.all()
    scale = qs.filter(id=scale_id).first() if scale_id else (qs.filter(is_default=True).first() or qs.first())
    if not scale:
        raise InvalidConfiguration("No grade scale configured")
    bands = [
        GradeBandEntry(b.letter, Decimal(b.min_mark), Decimal(b.max_mark), b.gpa, b.description)
        for b in GradeBand.objects.filter(scale=scale)
    ]
    return validate_scale(bands)

def _buckets_for(config: AssessmentConfig, strategy):
    # Convention A: l'examen final est un terme à part; Convention B: il reste dans sa catégorie
    if strategy == WeightingStrategy.COMPOSED_INTERNAL and config.assessment_type == AssessmentConfig.Type.FINAL_EXAM:
        return "final_exam"
    return config.category

def collect_course_inputs(enrollment: CourseEnrollment, strategy=WeightingStrategy.COMPOSED_INTERNAL):
    """
    Construit les CategoryScore internal / external / final_exam d'une inscription.
    Épreuve sans note corrigée -> compte 0 (MISSING_DATA).
    Retourne {"internal": CategoryScore, "external": ..., "final_exam": CategoryScore|None}
    """
    assessments = list(
        Assessment.objects.select_related("config")
        .filter(config__course_id=enrollment.course_id,
                config__semester_year=enrollment.semester_year,
                config__is_active=True)
        .order_by("config__due_date", "id")
    )
    graded = {
        g.assessment_id: g.marks_obtained
        for g in StudentGrade.objects.filter(enrollment=enrollment, is_graded=True,
                                             assessment_id__in=[a.id for a in assessments])
    }

    pairs = defaultdict(list)
    for a in assessments:
        pairs[_buckets_for(a.config, strategy)].append((graded.get(a.id), a.total_marks))

    return {
        "internal": score_category(pairs["internal"]),
        "external": score_category(pairs["external"]),
        "final_exam": score_category(pairs["final_exam"]) if pairs["final_exam"] else None,
    }

def _course_input(enrollment, scores):
    final_exam = scores["final_exam"]
    return CourseInput(
        internal_average=scores["internal"].average,
        external_average=scores["external"].average,
        final_exam_score=final_exam.average if final_exam else None,
        key=enrollment.id,
    )

def _issues(result, scores):
    """Drapeaux du calcul + ceux des catégories (note manquante comptée 0)."""
    found = list(result.issues)
    for score in scores.values():
        for issue in (score.issues if score else ()):
            if issue not in found:
                found.append(issue)
    return found

def compute_course_grade(enrollment_id: int, weights=None, rounding=None, scale=None):
    """
    Recalcule et enregistre la CourseGrade d'une inscription.
    Une note finalisée n'est plus recalculée (AlreadyFinalized).
    """
    weights = weights or weight_config_from_settings()
    rounding = rounding or rounding_from_settings()
    scale = scale or load_grade_scale()

    enrollment = CourseEnrollment.objects.select_related("course", "student").get(id=enrollment_id)
    existing = CourseGrade.objects.filter(enrollment=enrollment).first()
    if existing and existing.is_finalized:
        raise AlreadyFinalized(f"Course grade for enrollment {enrollment_id} is finalized")

    scores = collect_course_inputs(enrollment, weights.strategy)
    result = compute_course_result(_course_input(enrollment, scores), weights, scale, rounding)

    internal, external, final_exam = scores["internal"], scores["external"], scores["final_exam"]
    grade, _ = CourseGrade.objects.update_or_create(
        enrollment=enrollment,
        defaults={
            "internal_total_marks": internal.total_marks,
            "internal_obtained_marks": internal.obtained_marks,
            "internal_percentage": _q(internal.average),
            "external_total_marks": external.total_marks,
            "external_obtained_marks": external.obtained_marks,
            "external_percentage": _q(external.average),
            "final_exam_percentage": _q(final_exam.average) if final_exam else None,
            "continuous_assessment": result.continuous_assessment,
            "final_percentage": result.final_percentage,
            "final_grade_letter": result.letter_grade,
            "quality_points": result.quality_points,
        },
    )
    return grade

@transaction.atomic
def finalize_course_grade(enrollment_id: int, user=None):
    """Transition terminale: la note devient officielle et éligible au GPA."""
    grade = CourseGrade.objects.select_for_update().filter(enrollment_id=enrollment_id).first()
    if grade is None:
        grade = compute_course_grade(enrollment_id)
    if grade.is_finalized:
        raise AlreadyFinalized(f"Course grade for enrollment {enrollment_id} is already finalized")

    grade.is_finalized = True
    grade.finalized_by = user if getattr(user, "is_authenticated", False) else None
    grade.finalized_at = timezone.now()
    grade.save(update_fields=["is_finalized", "finalized_by", "finalized_at", "updated_at"])
    logger.info("Course grade finalized: enrollment=%s grade=%s", enrollment_id, grade.final_grade_letter)
    return grade

def compute_course_sheet(course_id: int, semester_year: str, weights=None, rounding=None, with_details=False):
    """
    Feuille de notes d'un cours pour un semestre: résultat de chaque inscrit
    (hors abandons), rang dense, statistiques de classe.
    Calcul à la volée, rien n'est enregistré.
    """
    weights = weights or weight_config_from_settings()
    rounding = rounding or rounding_from_settings()
    scale = load_grade_scale()

    enrollments = list(
        CourseEnrollment.objects.select_related("student", "course")
        .filter(course_id=course_id, semester_year=semester_year)
        .exclude(status=CourseEnrollment.Status.DROPPED)
        .order_by("student__last_name", "student__first_name")
    )

    results = []
    scores_by_enrollment = {}
    for e in enrollments:
        scores = collect_course_inputs(e, weights.strategy)
        scores_by_enrollment[e.id] = scores
        results.append(compute_course_result(_course_input(e, scores), weights, scale, rounding))

    stats = class_statistics(results, pass_mark=pass_mark())
    by_id = {e.id: e for e in enrollments}

    rows = []
    for r in rank_results(results):
        e = by_id[r.key]
        row = {
            "enrollment_id": e.id,
            "student": {
                "id": e.student.id,
                "student_number": e.student.student_number,
                "name": e.student.full_name,
            },
            "internal_average": float(_q(scores_by_enrollment[e.id]["internal"].average)),
            "external_average": float(_q(scores_by_enrollment[e.id]["external"].average)),
            "continuous_assessment": float(r.continuous_assessment) if r.continuous_assessment is not None else None,
            "final_percentage": float(r.final_percentage),
            "letter_grade": r.letter_grade,
            "quality_points": float(r.quality_points),
            "rank": r.rank,
            "issues": _issues(r, scores_by_enrollment[e.id]),
        }
        if with_details:
            row["scores"] = {
                k: [float(p) for p in v.percentages] if v else []
                for k, v in scores_by_enrollment[e.id].items()
            }
        rows.append(row)

    return {
        "course_id": course_id,
        "semester_year": semester_year,
        "weighting": {
            "strategy": weights.strategy,
            "internal_weight": float(weights.internal_weight),
            "external_weight": float(weights.external_weight),
            "continuous_weight": float(weights.continuous_weight),
            "final_exam_weight": float(weights.final_exam_weight),
            "rounding": rounding,
        },
        "count": len(rows),
        "results": rows,
        "statistics": statistics_payload(stats),
    }

def statistics_payload(stats):
    return {
        "class_average": float(stats.class_average),
        "standard_deviation": float(stats.standard_deviation),
        "grade_distribution": stats.grade_distribution,
        "total_students": stats.total_students,
        "pass_rate": float(stats.pass_rate),
    }
