from decimal import Decimal

from django.test import SimpleTestCase

from grading.aggregator import (
    WeightConfig, WeightingStrategy, RoundingPolicy, CourseInput, CourseResult, GradeBandEntry,
    CANONICAL_SCALE, band_for, validate_scale, round_percentage, compute_course_result,
    dense_ranks, competition_ranks, rank_results, class_statistics,
)
from grading.exceptions import InvalidConfiguration, MISSING_DATA

ST001 = CourseInput(internal_average=Decimal("94.5"), external_average=Decimal("79"),
                    final_exam_score=Decimal("78"), key="ST001")


def direct_result(value, key=None):
    """Résultat dont la note finale vaut exactement value."""
    return compute_course_result(
        CourseInput(internal_average=value, external_average=value, key=key),
        WeightConfig.direct(),
    )


class WeightConfigTests(SimpleTestCase):
    def test_defaults_are_valid(self):
        WeightConfig().validate()
        WeightConfig.direct("0.5", "0.5").validate()

    def test_internal_external_must_sum_to_one(self):
        with self.assertRaises(InvalidConfiguration):
            WeightConfig.composed("0.5", "0.6").validate()

    def test_continuous_final_must_sum_to_one(self):
        with self.assertRaises(InvalidConfiguration):
            WeightConfig.composed("0.4", "0.6", "0.3", "0.6").validate()

    def test_negative_weight_rejected(self):
        with self.assertRaises(InvalidConfiguration):
            WeightConfig.composed("1.2", "-0.2").validate()

    def test_direct_strategy_has_no_exam_term(self):
        bad = WeightConfig(strategy=WeightingStrategy.DIRECT_INTERNAL_EXTERNAL,
                           continuous_weight=Decimal("0.4"), final_exam_weight=Decimal("0.6"))
        with self.assertRaises(InvalidConfiguration):
            bad.validate()

    def test_invalid_configuration_is_a_value_error(self):
        with self.assertRaises(ValueError):
            WeightConfig(strategy="median").validate()


class RoundingTests(SimpleTestCase):
    def test_half_up(self):
        self.assertEqual(round_percentage(Decimal("80.885")), Decimal("80.89"))
        self.assertEqual(round_percentage(Decimal("80.5"), RoundingPolicy.INTEGER), Decimal("81"))
        self.assertEqual(round_percentage(Decimal("80.49"), RoundingPolicy.INTEGER), Decimal("80"))

    def test_unknown_policy(self):
        with self.assertRaises(InvalidConfiguration):
            round_percentage(1, "tenths")


class BandingTests(SimpleTestCase):
    def letter(self, p):
        return band_for(Decimal(str(p))).letter

    def test_boundaries(self):
        cases = [(100, "A"), (80, "A"), ("79.999", "B"), (79, "B"), (65, "B"), ("64.99", "C"),
                 (50, "C"), ("49.5", "D"), (40, "D"), ("39.999", "F"), (0, "F")]
        for p, expected in cases:
            with self.subTest(p=p):
                self.assertEqual(self.letter(p), expected)

    def test_quality_points_follow_band(self):
        self.assertEqual(band_for(85).gpa, Decimal("4.0"))
        self.assertEqual(band_for(45).gpa, Decimal("1.0"))

    def test_out_of_range_is_clamped_and_logged(self):
        with self.assertLogs("grading.aggregator", level="WARNING"):
            self.assertEqual(self.letter(105), "A")
        with self.assertLogs("grading.aggregator", level="WARNING"):
            self.assertEqual(self.letter(-3), "F")

    def test_gap_below_lowest_band_falls_back(self):
        scale = [GradeBandEntry("P", Decimal("50"), Decimal("100"), Decimal("1")),
                 GradeBandEntry("N", Decimal("10"), Decimal("49"), Decimal("0"))]
        with self.assertLogs("grading.aggregator", level="WARNING"):
            self.assertEqual(band_for(5, scale).letter, "N")

    def test_gap_inside_scale_is_not_absorbed_by_lower_band(self):
        # B s'arrête à 85, A commence à 90: 87 n'appartient à aucune bande
        scale = [GradeBandEntry("A", Decimal("90"), Decimal("100"), Decimal("4.0")),
                 GradeBandEntry("B", Decimal("80"), Decimal("85"), Decimal("3.0")),
                 GradeBandEntry("F", Decimal("0"), Decimal("79"), Decimal("0"))]
        with self.assertLogs("grading.aggregator", level="WARNING"):
            self.assertEqual(band_for(87, scale).letter, "F")
        self.assertEqual(band_for(85, scale).letter, "B")
        self.assertEqual(band_for("79.5", scale).letter, "F")
        self.assertEqual(band_for(90, scale).letter, "A")

    def test_scale_validation(self):
        with self.assertRaises(InvalidConfiguration):
            validate_scale([])
        with self.assertRaises(InvalidConfiguration):
            validate_scale([GradeBandEntry("X", Decimal("60"), Decimal("50"), Decimal("1"))])
        self.assertEqual([b.letter for b in validate_scale(reversed(CANONICAL_SCALE))], list("ABCDF"))


class CourseResultTests(SimpleTestCase):
    def test_composed_internal(self):
        r = compute_course_result(ST001)
        self.assertEqual(r.continuous_assessment, Decimal("85.20"))
        self.assertEqual(r.final_percentage, Decimal("80.88"))
        self.assertEqual(r.letter_grade, "A")
        self.assertEqual(r.quality_points, Decimal("4.0"))
        self.assertEqual(r.key, "ST001")
        self.assertEqual(r.issues, ())

    def test_integer_rounding(self):
        r = compute_course_result(ST001, rounding=RoundingPolicy.INTEGER)
        self.assertEqual(r.final_percentage, Decimal("81"))
        self.assertEqual(r.letter_grade, "A")

    def test_direct_internal_external(self):
        r = compute_course_result(
            CourseInput(internal_average=Decimal("80"), external_average=Decimal("70")),
            WeightConfig.direct(),
        )
        self.assertEqual(r.final_percentage, Decimal("74.00"))
        self.assertEqual(r.letter_grade, "B")
        self.assertIsNone(r.continuous_assessment)

    def test_missing_component_counts_zero(self):
        with self.assertLogs("grading.aggregator", level="WARNING"):
            r = compute_course_result(CourseInput(internal_average=Decimal("90"), final_exam_score=Decimal("80")))
        # CA = 36, total = 14.4 + 48
        self.assertEqual(r.final_percentage, Decimal("62.40"))
        self.assertEqual(r.letter_grade, "C")
        self.assertEqual(r.issues, (MISSING_DATA,))

    def test_invalid_weights_raise(self):
        with self.assertRaises(InvalidConfiguration):
            compute_course_result(ST001, WeightConfig.composed("0.7", "0.7"))


class RankingTests(SimpleTestCase):
    def test_dense_and_competition(self):
        values = [90, 85, 85, 70]
        self.assertEqual(dense_ranks(values), [1, 2, 2, 3])
        self.assertEqual(competition_ranks(values), [1, 2, 2, 4])

    def test_rank_results_keeps_input_order_on_ties(self):
        results = [direct_result(85, "a"), direct_result(90, "b"), direct_result(85, "c")]
        ranked = rank_results(results)
        self.assertEqual([(r.key, r.rank) for r in ranked], [("b", 1), ("a", 2), ("c", 2)])

    def test_competition_method(self):
        results = [direct_result(v, k) for k, v in (("a", 70), ("b", 90), ("c", 90))]
        ranked = rank_results(results, method="competition")
        self.assertEqual([(r.key, r.rank) for r in ranked], [("b", 1), ("c", 1), ("a", 3)])

    def test_unknown_method(self):
        with self.assertRaises(InvalidConfiguration):
            rank_results([], method="olympic")


class ClassStatisticsTests(SimpleTestCase):
    def setUp(self):
        self.results = [direct_result(v) for v in (82, 63, 53)]

    def test_average_distribution_and_pass_rate(self):
        stats = class_statistics(self.results)
        self.assertEqual(stats.class_average, Decimal("66.00"))
        self.assertEqual(stats.pass_rate, Decimal("100.00"))
        self.assertEqual(stats.total_students, 3)
        self.assertEqual(stats.grade_distribution, {"A": 1, "C": 2})

    def test_population_and_sample_deviation(self):
        self.assertEqual(class_statistics(self.results).standard_deviation, Decimal("12.03"))
        self.assertEqual(class_statistics(self.results, sample=True).standard_deviation, Decimal("14.73"))

    def test_pass_mark(self):
        self.assertEqual(class_statistics(self.results, pass_mark=60).pass_rate, Decimal("66.67"))

    def test_empty_class(self):
        stats = class_statistics([])
        self.assertEqual(stats.total_students, 0)
        self.assertEqual(stats.class_average, Decimal("0"))
        self.assertEqual(stats.grade_distribution, {})

    def test_results_are_plain_values(self):
        self.assertIsInstance(self.results[0], CourseResult)
