"""
Conversion des notes brutes en pourcentages et moyennes par catégorie
(internal = devoirs/projets, external = tests).

Fonctions pures: aucune requête, aucun état partagé.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Sequence, Tuple

from grading.exceptions import InvalidConfiguration, MISSING_DATA

logger = logging.getLogger(__name__)

D0 = Decimal("0")
D100 = Decimal("100")


def _d(x) -> Decimal:
    return x if isinstance(x, Decimal) else Decimal(str(x))


@dataclass(frozen=True)
class CategoryScore:
    percentages: Tuple[Decimal, ...]
    average: Decimal
    obtained_marks: Decimal = D0
    total_marks: Decimal = D0
    issues: Tuple[str, ...] = field(default_factory=tuple)


def percentage(marks_obtained, max_marks) -> Decimal:
    """
    round(marks / max * 100) à l'entier le plus proche (half-up).
    Arrondi une fois par épreuve, pas à la moyenne.
    """
    max_marks = _d(max_marks)
    if max_marks <= D0:
        raise InvalidConfiguration(f"max_marks must be positive, got {max_marks}")
    if marks_obtained is None:
        return D0
    return (_d(marks_obtained) / max_marks * D100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def category_average(percentages: Iterable) -> Decimal:
    values = [_d(p) for p in percentages]
    if not values:
        return D0
    return sum(values, D0) / len(values)


def score_category(pairs: Sequence[Tuple[Optional[object], object]]) -> CategoryScore:
    """
    pairs: [(marks_obtained, max_marks), ...] pour UNE catégorie d'un élève.
    Une note absente (None) compte 0 et lève le drapeau MISSING_DATA.
    """
    percentages = []
    obtained = D0
    total = D0
    missing = 0
    for marks, max_marks in pairs:
        if marks is None:
            missing += 1
        percentages.append(percentage(marks, max_marks))
        obtained += _d(marks) if marks is not None else D0
        total += _d(max_marks)

    if missing:
        logger.warning("%d missing mark(s) counted as zero", missing)

    return CategoryScore(
        percentages=tuple(percentages),
        average=category_average(percentages),
        obtained_marks=obtained,
        total_marks=total,
        issues=(MISSING_DATA,) if missing else (),
    )
