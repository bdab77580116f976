from decimal import Decimal

from django.conf import settings

from .aggregator import WeightConfig, WeightingStrategy, RoundingPolicy
from .exceptions import InvalidConfiguration

DEFAULTS = {
    "WEIGHTING_STRATEGY": WeightingStrategy.COMPOSED_INTERNAL,
    "INTERNAL_WEIGHT": "0.4",
    "EXTERNAL_WEIGHT": "0.6",
    "CONTINUOUS_WEIGHT": "0.4",
    "FINAL_EXAM_WEIGHT": "0.6",
    "ROUNDING": RoundingPolicy.HUNDREDTHS,
    "PASS_MARK": 50,
    "GOOD_STANDING_GPA": "3.0",
    "FAILING_GRADES": ["F"],
    "DEGREE_CREDITS": 120,
}


def grading_setting(name):
    """Valeur de settings.GRADING[name], sinon la valeur par défaut."""
    if name not in DEFAULTS:
        raise KeyError(name)
    return getattr(settings, "GRADING", {}).get(name, DEFAULTS[name])


def _decimal_setting(name) -> Decimal:
    raw = grading_setting(name)
    try:
        return Decimal(str(raw))
    except ArithmeticError:
        raise InvalidConfiguration(f"GRADING[{name!r}] is not a number: {raw!r}")


def weight_config_from_settings() -> WeightConfig:
    strategy = grading_setting("WEIGHTING_STRATEGY")
    if strategy not in WeightingStrategy.values:
        raise InvalidConfiguration(f"Unknown weighting strategy: {strategy!r}")

    if strategy == WeightingStrategy.DIRECT_INTERNAL_EXTERNAL:
        weights = WeightConfig.direct(
            internal_weight=_decimal_setting("INTERNAL_WEIGHT"),
            external_weight=_decimal_setting("EXTERNAL_WEIGHT"),
        )
    else:
        weights = WeightConfig.composed(
            internal_weight=_decimal_setting("INTERNAL_WEIGHT"),
            external_weight=_decimal_setting("EXTERNAL_WEIGHT"),
            continuous_weight=_decimal_setting("CONTINUOUS_WEIGHT"),
            final_exam_weight=_decimal_setting("FINAL_EXAM_WEIGHT"),
        )
    weights.validate()
    return weights


def rounding_from_settings() -> str:
    policy = grading_setting("ROUNDING")
    if policy not in RoundingPolicy.values:
        raise InvalidConfiguration(f"Unknown rounding policy: {policy!r}")
    return policy


def pass_mark() -> Decimal:
    return _decimal_setting("PASS_MARK")


def good_standing_gpa() -> Decimal:
    return _decimal_setting("GOOD_STANDING_GPA")


def failing_grades() -> tuple:
    return tuple(grading_setting("FAILING_GRADES"))


def degree_credits() -> int:
    return int(grading_setting("DEGREE_CREDITS"))
