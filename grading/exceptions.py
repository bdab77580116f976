from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

# Codes de qualité de données: jamais levés, seulement loggés et attachés aux résultats
MISSING_DATA = "missing_data"
OUT_OF_RANGE = "out_of_range"


class GradingError(Exception):
    code = "GRADING_ERROR"


class InvalidConfiguration(GradingError, ValueError):
    """Poids qui ne somment pas à 1, max_marks <= 0, barème vide..."""
    code = "INVALID_CONFIGURATION"


class AlreadyFinalized(GradingError):
    code = "ALREADY_FINALIZED"


_STATUS_BY_ERROR = {
    InvalidConfiguration: status.HTTP_400_BAD_REQUEST,
    AlreadyFinalized: status.HTTP_409_CONFLICT,
}


def grading_exception_handler(exc, context):
    """
    REST_FRAMEWORK["EXCEPTION_HANDLER"].
    Les erreurs de calcul deviennent {"error": {"code", "message"}};
    le reste passe par le handler DRF par défaut.
    """
    if isinstance(exc, GradingError):
        http_status = next(
            (s for cls, s in _STATUS_BY_ERROR.items() if isinstance(exc, cls)),
            status.HTTP_400_BAD_REQUEST,
        )
        return Response(
            {"error": {"code": exc.code, "message": str(exc)}},
            status=http_status,
        )
    return exception_handler(exc, context)
