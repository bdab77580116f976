"""
GPA semestriel / cumulé à partir des notes de cours finalisées.

Seules les CourseGrade finalisées comptent: le filtre est explicite (finalized()).
"""
import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Sequence

D0 = Decimal("0")
D100 = Decimal("100")

GOOD_STANDING = "Good Standing"
ACADEMIC_WARNING = "Academic Warning"

SEASON_ORDER = {"winter": 0, "spring": 1, "summer": 2, "fall": 3, "autumn": 3}


def _d(x) -> Decimal:
    if x is None:
        return D0
    return x if isinstance(x, Decimal) else Decimal(str(x))


def _q(x, places="0.01") -> Decimal:
    return _d(x).quantize(Decimal(places), rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class GradeRecord:
    quality_points: Optional[Decimal]
    credits: int
    is_finalized: bool
    semester_year: str = ""
    letter_grade: Optional[str] = None


@dataclass(frozen=True)
class GPAResult:
    gpa: Decimal
    total_credits: int
    quality_points: Decimal


@dataclass(frozen=True)
class TermSummary:
    semester_year: str
    semester_gpa: Decimal
    cumulative_gpa: Decimal
    total_credits_attempted: int
    total_credits_earned: int
    total_quality_points: Decimal
    academic_status: str


def semester_sort_key(label: str):
    """'2025 Spring' < '2025 Fall' < '2026 Spring'. Libellé inconnu: tri texte en fin d'année."""
    label = (label or "").strip()
    year_match = re.search(r"\d{4}", label)
    year = int(year_match.group()) if year_match else 0
    season = next((rank for name, rank in SEASON_ORDER.items() if name in label.lower()), len(SEASON_ORDER))
    return (year, season, label)


def finalized(records: Iterable[GradeRecord]) -> List[GradeRecord]:
    return [r for r in records if r.is_finalized]


def gpa(records: Iterable[GradeRecord]) -> GPAResult:
    eligible = finalized(records)
    total_qp = sum((_d(r.quality_points) * r.credits for r in eligible), D0)
    total_credits = sum(r.credits for r in eligible)
    value = total_qp / total_credits if total_credits > 0 else D0
    return GPAResult(gpa=_q(value), total_credits=total_credits, quality_points=total_qp)


def semester_gpa(records: Iterable[GradeRecord], semester_year: str) -> GPAResult:
    return gpa(r for r in records if r.semester_year == semester_year)


def cumulative_gpa(records: Iterable[GradeRecord], through: Optional[str] = None) -> GPAResult:
    if through is None:
        return gpa(records)
    limit = semester_sort_key(through)
    return gpa(r for r in records if semester_sort_key(r.semester_year) <= limit)


def credits_attempted(records: Iterable[GradeRecord]) -> int:
    return sum(r.credits for r in finalized(records))


def credits_earned(records: Iterable[GradeRecord], failing_grades=("F",)) -> int:
    return sum(r.credits for r in finalized(records) if r.letter_grade not in failing_grades)


def academic_standing(gpa_value, threshold="3.0") -> str:
    return GOOD_STANDING if _d(gpa_value) >= _d(threshold) else ACADEMIC_WARNING


def degree_progress(earned: int, required: int) -> Decimal:
    if not required or required <= 0:
        return D0
    return min(D100, _q(Decimal(earned) / Decimal(required) * D100))


def completion_rate(earned: int, attempted: int) -> Decimal:
    if attempted <= 0:
        return D0
    return _q(Decimal(earned) / Decimal(attempted) * D100, "0.1")


def term_summaries(records: Sequence[GradeRecord], threshold="3.0",
                   failing_grades=("F",)) -> List[TermSummary]:
    """Une ligne par semestre, dans l'ordre chronologique, cumul inclus."""
    records = list(records)
    semesters = sorted({r.semester_year for r in finalized(records)}, key=semester_sort_key)

    rows = []
    for sem in semesters:
        term = [r for r in records if r.semester_year == sem]
        to_date = [r for r in records if semester_sort_key(r.semester_year) <= semester_sort_key(sem)]
        term_gpa = gpa(term)
        cumul = gpa(to_date)
        rows.append(TermSummary(
            semester_year=sem,
            semester_gpa=term_gpa.gpa,
            cumulative_gpa=cumul.gpa,
            total_credits_attempted=credits_attempted(term),
            total_credits_earned=credits_earned(term, failing_grades),
            total_quality_points=term_gpa.quality_points,
            academic_status=academic_standing(cumul.gpa, threshold),
        ))
    return rows
