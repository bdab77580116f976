from rest_framework import viewsets, permissions, filters
from rest_framework.exceptions import ValidationError
from django_filters.rest_framework import DjangoFilterBackend
from .models import AcademicProgram, Course
from .serializers import AcademicProgramSerializer, CourseSerializer
# Create your views here.

def parse_id(value, field):
    """Identifiant reçu en query/body: entier positif, sinon 400."""
    try:
        pk = int(value)
    except (TypeError, ValueError):
        raise ValidationError({field: "A valid integer is required."})
    if pk <= 0:
        raise ValidationError({field: "A valid integer is required."})
    return pk

class IsRegistrarOrAdmin(permissions.BasePermission):
    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated): return False
        return getattr(user, "role", None) in ("REGISTRAR","ADMIN","HOD") or request.method in permissions.SAFE_METHODS

class AcademicProgramViewSet(viewsets.ModelViewSet):
    queryset = AcademicProgram.objects.all()
    serializer_class = AcademicProgramSerializer
    permission_classes = [IsRegistrarOrAdmin]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["code","is_active"]

class CourseViewSet(viewsets.ModelViewSet):
    queryset = Course.objects.select_related("program").all()
    serializer_class = CourseSerializer
    permission_classes = [IsRegistrarOrAdmin]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ["program","semester","is_active"]
    search_fields = ["code","name"]
