from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.views import APIView
from grading.conf import weight_config_from_settings, rounding_from_settings
from .serializers import MeSerializer

# Create your views here.
class MeView(APIView):
    permission_classes = [IsAuthenticated]
    def get(self, request):
        data = MeSerializer(request.user).data
        student = getattr(request.user, "student", None)
        data["student_id"] = student.id if student else None
        return Response(data)

class HealthView(APIView):
    """Ping + politique de notation active (lève 400 si GRADING est mal configuré)."""
    permission_classes = [AllowAny]
    def get(self, request):
        weights = weight_config_from_settings()
        return Response({
            "status": "ok",
            "grading": {"strategy": weights.strategy, "rounding": rounding_from_settings()},
        })
