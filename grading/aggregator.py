"""
Note finale d'un cours: pondération internal/external (+ examen final),
barème lettre/points, rang et statistiques de classe.

Deux conventions de pondération coexistent et se choisissent via WeightConfig:
  - COMPOSED_INTERNAL:  CA = internal*wi + external*we ; total = CA*wc + exam*wf
  - DIRECT_INTERNAL_EXTERNAL: total = internal*wi + external*we (pas d'examen séparé)
"""
import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field, replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Sequence, Tuple

from django.db import models

from .exceptions import InvalidConfiguration, MISSING_DATA, OUT_OF_RANGE

logger = logging.getLogger(__name__)

D0 = Decimal("0")
D1 = Decimal("1")
D100 = Decimal("100")
WEIGHT_EPSILON = Decimal("0.000001")


class WeightingStrategy(models.TextChoices):
    COMPOSED_INTERNAL = "composed_internal", "Internal composite + final exam"
    DIRECT_INTERNAL_EXTERNAL = "direct_internal_external", "Internal vs external"


class RoundingPolicy(models.TextChoices):
    INTEGER = "integer", "Nearest integer"
    HUNDREDTHS = "hundredths", "Two decimals"


_QUANTUM = {
    RoundingPolicy.INTEGER: Decimal("1"),
    RoundingPolicy.HUNDREDTHS: Decimal("0.01"),
}


def _d(x) -> Decimal:
    return x if isinstance(x, Decimal) else Decimal(str(x))


def _q2(x) -> Decimal:
    return _d(x).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def round_percentage(value, policy=RoundingPolicy.HUNDREDTHS) -> Decimal:
    if policy not in _QUANTUM:
        raise InvalidConfiguration(f"Unknown rounding policy: {policy!r}")
    return _d(value).quantize(_QUANTUM[policy], rounding=ROUND_HALF_UP)


# -------------------------
#  Pondérations
# -------------------------

@dataclass(frozen=True)
class WeightConfig:
    strategy: str = WeightingStrategy.COMPOSED_INTERNAL
    internal_weight: Decimal = Decimal("0.4")
    external_weight: Decimal = Decimal("0.6")
    continuous_weight: Decimal = Decimal("0.4")
    final_exam_weight: Decimal = Decimal("0.6")

    @classmethod
    def composed(cls, internal_weight="0.4", external_weight="0.6",
                 continuous_weight="0.4", final_exam_weight="0.6"):
        return cls(
            strategy=WeightingStrategy.COMPOSED_INTERNAL,
            internal_weight=_d(internal_weight),
            external_weight=_d(external_weight),
            continuous_weight=_d(continuous_weight),
            final_exam_weight=_d(final_exam_weight),
        )

    @classmethod
    def direct(cls, internal_weight="0.4", external_weight="0.6"):
        # pas de terme examen: le composite porte tout le poids
        return cls(
            strategy=WeightingStrategy.DIRECT_INTERNAL_EXTERNAL,
            internal_weight=_d(internal_weight),
            external_weight=_d(external_weight),
            continuous_weight=D1,
            final_exam_weight=D0,
        )

    def validate(self):
        if self.strategy not in WeightingStrategy.values:
            raise InvalidConfiguration(f"Unknown weighting strategy: {self.strategy!r}")
        weights = (self.internal_weight, self.external_weight,
                   self.continuous_weight, self.final_exam_weight)
        if any(_d(w) < D0 for w in weights):
            raise InvalidConfiguration("Weights must not be negative")
        if abs(_d(self.internal_weight) + _d(self.external_weight) - D1) > WEIGHT_EPSILON:
            raise InvalidConfiguration(
                f"internal_weight + external_weight must equal 1 "
                f"(got {self.internal_weight} + {self.external_weight})"
            )
        if abs(_d(self.continuous_weight) + _d(self.final_exam_weight) - D1) > WEIGHT_EPSILON:
            raise InvalidConfiguration(
                f"continuous_weight + final_exam_weight must equal 1 "
                f"(got {self.continuous_weight} + {self.final_exam_weight})"
            )
        if (self.strategy == WeightingStrategy.DIRECT_INTERNAL_EXTERNAL
                and _d(self.final_exam_weight) != D0):
            raise InvalidConfiguration("Direct internal/external weighting has no final exam term")
        return self


# -------------------------
#  Barème
# -------------------------

@dataclass(frozen=True)
class GradeBandEntry:
    letter: str
    min_mark: Decimal
    max_mark: Decimal
    gpa: Decimal
    description: str = ""


CANONICAL_SCALE = (
    GradeBandEntry("A", Decimal("80"), Decimal("100"), Decimal("4.0"), "Excellent"),
    GradeBandEntry("B", Decimal("65"), Decimal("79"), Decimal("3.0"), "Good"),
    GradeBandEntry("C", Decimal("50"), Decimal("64"), Decimal("2.0"), "Satisfactory"),
    GradeBandEntry("D", Decimal("40"), Decimal("49"), Decimal("1.0"), "Pass"),
    GradeBandEntry("F", Decimal("0"), Decimal("39"), Decimal("0.0"), "Fail"),
)


def validate_scale(scale: Iterable[GradeBandEntry]) -> Tuple[GradeBandEntry, ...]:
    """Barème trié par min_mark décroissant; vide -> InvalidConfiguration."""
    bands = tuple(sorted(scale, key=lambda b: _d(b.min_mark), reverse=True))
    if not bands:
        raise InvalidConfiguration("Grade scale is empty")
    for b in bands:
        if _d(b.min_mark) > _d(b.max_mark):
            raise InvalidConfiguration(f"Band {b.letter}: min_mark > max_mark")
    return bands


def clamp_percentage(value) -> Decimal:
    return max(D0, min(D100, _d(value)))


def band_for(percentage, scale=CANONICAL_SCALE) -> GradeBandEntry:
    """
    Bande dont l'intervalle fermé [min_mark, max_mark] contient p.
    Entre deux bandes contiguës (max + 1 == min de la suivante) la borne haute
    s'étend jusqu'à la bande suivante: 80 -> A, 79.999 -> B.
    Hors [0,100]: on borne pour le barème seulement.
    Aucune bande (trou dans le barème) -> bande la plus basse.
    """
    bands = validate_scale(scale)
    value = _d(percentage)
    if value < D0 or value > D100:
        logger.warning("Percentage %s outside [0, 100]; clamped for banding", value)
        value = clamp_percentage(value)

    higher = None
    for band in bands:
        low, high = _d(band.min_mark), _d(band.max_mark)
        contiguous = higher is not None and _d(higher.min_mark) == high + D1
        if low <= value and (value <= high or (contiguous and value < high + D1)):
            return band
        higher = band

    lowest = bands[-1]
    logger.warning("Percentage %s matched no band; falling back to %s", value, lowest.letter)
    return lowest


# -------------------------
#  Note de cours
# -------------------------

@dataclass(frozen=True)
class CourseInput:
    internal_average: Optional[Decimal] = None
    external_average: Optional[Decimal] = None
    final_exam_score: Optional[Decimal] = None
    key: Optional[object] = None  # identifiant libre (enrollment_id, matricule...)


@dataclass(frozen=True)
class CourseResult:
    final_percentage: Decimal
    letter_grade: str
    quality_points: Decimal
    raw_percentage: Decimal
    continuous_assessment: Optional[Decimal] = None
    rank: Optional[int] = None
    key: Optional[object] = None
    issues: Tuple[str, ...] = field(default_factory=tuple)


def compute_course_result(inputs: CourseInput, weights: WeightConfig = None,
                          scale=CANONICAL_SCALE,
                          rounding=RoundingPolicy.HUNDREDTHS) -> CourseResult:
    weights = (weights or WeightConfig()).validate()
    issues = []

    def component(value, name):
        if value is None:
            logger.warning("Missing %s for %s; counted as zero", name, inputs.key)
            if MISSING_DATA not in issues:
                issues.append(MISSING_DATA)
            return D0
        return _d(value)

    internal = component(inputs.internal_average, "internal average")
    external = component(inputs.external_average, "external average")
    composite = internal * _d(weights.internal_weight) + external * _d(weights.external_weight)

    if weights.strategy == WeightingStrategy.COMPOSED_INTERNAL:
        exam = component(inputs.final_exam_score, "final exam score")
        raw = composite * _d(weights.continuous_weight) + exam * _d(weights.final_exam_weight)
        continuous = round_percentage(composite, rounding)
    else:
        raw = composite
        continuous = None

    final = round_percentage(raw, rounding)
    if final < D0 or final > D100:
        issues.append(OUT_OF_RANGE)
    band = band_for(final, scale)

    return CourseResult(
        final_percentage=final,
        letter_grade=band.letter,
        quality_points=_d(band.gpa),
        raw_percentage=raw,
        continuous_assessment=continuous,
        key=inputs.key,
        issues=tuple(issues),
    )


# -------------------------
#  Rangs
# -------------------------

def dense_ranks(values: Sequence) -> List[int]:
    """
    Rang dense (1,1,2): ex aequo = même rang, valeur suivante = rang+1.
    Rangs retournés dans l'ordre d'entrée.
    """
    uniq = sorted({_d(v) for v in values}, reverse=True)
    rank_by_val = {v: i for i, v in enumerate(uniq, start=1)}
    return [rank_by_val[_d(v)] for v in values]


def competition_ranks(values: Sequence) -> List[int]:
    """Classement '1,1,3' (rangs avec saut après égalité)."""
    freq = defaultdict(int)
    for v in values:
        freq[_d(v)] += 1
    rank_by_val = {}
    current = 1
    for v in sorted(freq.keys(), reverse=True):
        rank_by_val[v] = current
        current += freq[v]
    return [rank_by_val[_d(v)] for v in values]


RANK_METHODS = {
    "dense": dense_ranks,
    "competition": competition_ranks,
}


def rank_results(results: Sequence[CourseResult], method="dense") -> List[CourseResult]:
    """
    Injecte le rang puis trie par note décroissante.
    sorted() est stable: à égalité, l'ordre d'entrée est conservé.
    """
    if method not in RANK_METHODS:
        raise InvalidConfiguration(f"Unknown rank method: {method!r}")
    ranks = RANK_METHODS[method]([r.final_percentage for r in results])
    ranked = [replace(r, rank=rank) for r, rank in zip(results, ranks)]
    return sorted(ranked, key=lambda r: r.final_percentage, reverse=True)


# -------------------------
#  Statistiques de classe
# -------------------------

@dataclass(frozen=True)
class ClassStatistics:
    class_average: Decimal
    standard_deviation: Decimal
    grade_distribution: dict
    total_students: int
    pass_rate: Decimal


def class_statistics(results: Sequence[CourseResult], pass_mark=50,
                     sample=False) -> ClassStatistics:
    """
    Écart-type de population par défaut (sample=True -> n-1).
    pass_rate = part des notes >= pass_mark, en %.
    """
    n = len(results)
    if n == 0:
        return ClassStatistics(D0, D0, {}, 0, D0)

    values = [_d(r.final_percentage) for r in results]
    mean = sum(values, D0) / n
    denom = n - 1 if sample else n
    if denom > 0:
        variance = sum(((v - mean) ** 2 for v in values), D0) / denom
        stddev = variance.sqrt()
    else:
        stddev = D0

    passed = sum(1 for v in values if v >= _d(pass_mark))
    distribution = dict(Counter(r.letter_grade for r in results))

    return ClassStatistics(
        class_average=_q2(mean),
        standard_deviation=_q2(stddev),
        grade_distribution=distribution,
        total_students=n,
        pass_rate=_q2(Decimal(passed) / n * D100),
    )
