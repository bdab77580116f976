from decimal import Decimal

from django.test import SimpleTestCase

from reports.gpa import (
    GradeRecord, gpa, semester_gpa, cumulative_gpa, credits_attempted, credits_earned,
    academic_standing, degree_progress, completion_rate, semester_sort_key, term_summaries,
    GOOD_STANDING, ACADEMIC_WARNING,
)


def rec(qp, credits, letter, semester="2025 Spring", finalized=True):
    return GradeRecord(Decimal(qp), credits, finalized, semester, letter)


class GPATests(SimpleTestCase):
    def test_no_records(self):
        result = gpa([])
        self.assertEqual(result.gpa, Decimal("0.00"))
        self.assertEqual(result.total_credits, 0)
        self.assertEqual(result.quality_points, Decimal("0"))

    def test_only_finalized_grades_count(self):
        records = [rec("4.0", 3, "A"), rec("0.0", 3, "F", finalized=False)]
        self.assertEqual(gpa(records).gpa, Decimal("4.00"))
        self.assertEqual(gpa(records).total_credits, 3)

    def test_credit_weighted(self):
        records = [rec("4.0", 3, "A"), rec("3.0", 4, "B")]
        self.assertEqual(gpa(records).gpa, Decimal("3.43"))
        self.assertEqual(gpa(records).quality_points, Decimal("24.0"))

    def test_order_does_not_matter(self):
        records = [rec("4.0", 3, "A"), rec("2.0", 4, "C"), rec("1.0", 2, "D")]
        self.assertEqual(gpa(records), gpa(list(reversed(records))))

    def test_semester_and_cumulative(self):
        records = [
            rec("4.0", 3, "A", "2025 Spring"),
            rec("2.0", 3, "C", "2025 Fall"),
            rec("0.0", 3, "F", "2026 Spring"),
        ]
        self.assertEqual(semester_gpa(records, "2025 Fall").gpa, Decimal("2.00"))
        self.assertEqual(cumulative_gpa(records, through="2025 Fall").gpa, Decimal("3.00"))
        self.assertEqual(cumulative_gpa(records).gpa, Decimal("2.00"))


class CreditsAndStandingTests(SimpleTestCase):
    def test_earned_and_attempted(self):
        records = [rec("4.0", 3, "A"), rec("0.0", 3, "F"), rec("3.0", 4, "B", finalized=False)]
        self.assertEqual(credits_attempted(records), 6)
        self.assertEqual(credits_earned(records), 3)
        self.assertEqual(credits_earned(records, failing_grades=("F", "D")), 3)

    def test_standing_threshold_is_inclusive(self):
        self.assertEqual(academic_standing(Decimal("3.00")), GOOD_STANDING)
        self.assertEqual(academic_standing(Decimal("2.99")), ACADEMIC_WARNING)
        self.assertEqual(academic_standing(Decimal("2.5"), threshold="2.0"), GOOD_STANDING)

    def test_degree_progress(self):
        self.assertEqual(degree_progress(30, 120), Decimal("25.00"))
        self.assertEqual(degree_progress(130, 120), Decimal("100"))
        self.assertEqual(degree_progress(30, 0), Decimal("0"))

    def test_completion_rate(self):
        self.assertEqual(completion_rate(3, 7), Decimal("42.9"))
        self.assertEqual(completion_rate(0, 0), Decimal("0"))


class SemesterOrderTests(SimpleTestCase):
    def test_chronological_sort(self):
        labels = ["2026 Spring", "2025 Fall", "2025 Spring", "2025 Summer"]
        self.assertEqual(sorted(labels, key=semester_sort_key),
                         ["2025 Spring", "2025 Summer", "2025 Fall", "2026 Spring"])

    def test_term_summaries(self):
        records = [
            rec("0.0", 4, "F", "2025 Fall"),
            rec("4.0", 3, "A", "2025 Spring"),
            rec("2.0", 3, "C", "2026 Spring", finalized=False),
        ]
        rows = term_summaries(records)
        self.assertEqual([r.semester_year for r in rows], ["2025 Spring", "2025 Fall"])
        spring, fall = rows
        self.assertEqual((spring.semester_gpa, spring.cumulative_gpa), (Decimal("4.00"), Decimal("4.00")))
        self.assertEqual(spring.academic_status, GOOD_STANDING)
        self.assertEqual((fall.semester_gpa, fall.cumulative_gpa), (Decimal("0.00"), Decimal("1.71")))
        self.assertEqual((fall.total_credits_attempted, fall.total_credits_earned), (4, 0))
        self.assertEqual(fall.academic_status, ACADEMIC_WARNING)
