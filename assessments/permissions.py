from rest_framework.permissions import BasePermission

from accounts.models import User
from .models import AssessmentConfig

# les élèves passent par /api/reports/ pour leurs propres résultats
STAFF_ROLES = {User.Role.FACULTY, User.Role.HOD, User.Role.REGISTRAR, User.Role.ADMIN}
COURSE_WIDE_ROLES = {User.Role.HOD, User.Role.REGISTRAR, User.Role.ADMIN}


class IsFacultyOrAdminWrite(BasePermission):
    """
    Lecture et écriture réservées au personnel.
    Un FACULTY n'écrit que sur ses propres épreuves: faculty_can_edit() est
    re-vérifié dans la vue, une fois l'épreuve connue.
    """
    def has_permission(self, request, view):
        user = request.user
        if not getattr(user, "is_authenticated", False):
            return False
        return getattr(user, "role", None) in STAFF_ROLES


def faculty_can_edit(user, config_id: int) -> bool:
    if not getattr(user, "is_authenticated", False):
        return False
    role = getattr(user, "role", None)
    if role in COURSE_WIDE_ROLES:
        return True
    if role != User.Role.FACULTY:
        return False
    return AssessmentConfig.objects.filter(id=config_id, created_by=user).exists()


def faculty_can_grade_course(user, course_id: int) -> bool:
    """Un FACULTY ne calcule/finalise que les cours dont il a configuré une épreuve."""
    if not getattr(user, "is_authenticated", False):
        return False
    role = getattr(user, "role", None)
    if role in COURSE_WIDE_ROLES:
        return True
    if role != User.Role.FACULTY:
        return False
    return AssessmentConfig.objects.filter(course_id=course_id, created_by=user).exists()
