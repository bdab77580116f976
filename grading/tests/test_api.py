from django.test import TestCase
from rest_framework.test import APIClient

from grading.models import CourseGrade, GradeScale
from grading.services import compute_course_grade
from .fixtures import build_cs101, make_user, SPRING


class CalculateEndpointTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(make_user("prof"))

    def test_calculate_from_averages(self):
        resp = self.client.post("/api/grading/calculate/", {
            "students": [
                {"key": "ST001", "internal_average": 94.5, "external_average": 79, "final_exam_score": 78},
                {"key": "ST002", "internal_average": 50, "external_average": 50, "final_exam_score": 40},
            ],
        }, format="json")
        self.assertEqual(resp.status_code, 200)
        first = resp.data["results"][0]
        self.assertEqual(first["key"], "ST001")
        self.assertEqual(first["final_percentage"], 80.88)
        self.assertEqual(first["letter_grade"], "A")
        self.assertEqual(first["quality_points"], 4.0)
        self.assertEqual(first["rank"], 1)
        self.assertEqual(resp.data["statistics"]["total_students"], 2)

    def test_integer_rounding_request(self):
        resp = self.client.post("/api/grading/calculate/", {
            "rounding": "integer",
            "students": [{"internal_average": 94.5, "external_average": 79, "final_exam_score": 78}],
        }, format="json")
        self.assertEqual(resp.data["results"][0]["final_percentage"], 81.0)

    def test_invalid_weights_use_error_envelope(self):
        resp = self.client.post("/api/grading/calculate/", {
            "weights": {"strategy": "composed_internal", "internal_weight": "0.5", "external_weight": "0.6"},
            "students": [{"internal_average": 70, "external_average": 70, "final_exam_score": 70}],
        }, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data["error"]["code"], "INVALID_CONFIGURATION")

    def test_requires_authentication(self):
        self.assertEqual(APIClient().post("/api/grading/calculate/", {}, format="json").status_code, 403)


class CourseGradeEndpointTests(TestCase):
    def setUp(self):
        self.data = build_cs101()
        self.client = APIClient()
        self.client.force_authenticate(make_user("hod", role="HOD"))

    def test_compute_course_then_finalize(self):
        resp = self.client.post("/api/course-grades/compute/",
                                {"course": self.data["course"].id, "semester_year": SPRING}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.data["computed"]), 3)

        grade = CourseGrade.objects.get(enrollment=self.data["enrollments"]["ST001"])
        resp = self.client.post(f"/api/course-grades/{grade.id}/finalize/")
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.data["is_finalized"])

        resp = self.client.post(f"/api/course-grades/{grade.id}/finalize/")
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.data["error"]["code"], "ALREADY_FINALIZED")

        # les notes finalisées sont ignorées au recalcul
        resp = self.client.post("/api/course-grades/compute/",
                                {"course": self.data["course"].id, "semester_year": SPRING}, format="json")
        self.assertEqual(len(resp.data["computed"]), 2)
        self.assertEqual(resp.data["finalized"], [grade.enrollment_id])

    def test_compute_requires_target(self):
        resp = self.client.post("/api/course-grades/compute/", {}, format="json")
        self.assertEqual(resp.status_code, 400)

    def test_sheet_endpoint(self):
        resp = self.client.get("/api/grading/sheet/", {"course": self.data["course"].id, "semester": SPRING})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["results"][0]["student"]["student_number"], "ST001")
        self.assertEqual(resp.data["weighting"]["strategy"], "composed_internal")

    def test_sheet_requires_params(self):
        self.assertEqual(self.client.get("/api/grading/sheet/").status_code, 400)


class GradingAccessTests(TestCase):
    def setUp(self):
        self.owner = make_user("owner")
        self.data = build_cs101(instructor=self.owner)
        self.client = APIClient()

    def test_student_cannot_read_course_sheet(self):
        self.client.force_authenticate(make_user("ann", role="STUDENT"))
        resp = self.client.get("/api/grading/sheet/", {"course": self.data["course"].id, "semester": SPRING})
        self.assertEqual(resp.status_code, 403)

    def test_faculty_of_another_course_cannot_compute_or_finalize(self):
        self.client.force_authenticate(make_user("other"))
        resp = self.client.post("/api/course-grades/compute/",
                                {"course": self.data["course"].id, "semester_year": SPRING}, format="json")
        self.assertEqual(resp.status_code, 403)

        grade = compute_course_grade(self.data["enrollments"]["ST001"].id)
        resp = self.client.post(f"/api/course-grades/{grade.id}/finalize/")
        self.assertEqual(resp.status_code, 403)
        grade.refresh_from_db()
        self.assertFalse(grade.is_finalized)

    def test_course_faculty_can_finalize(self):
        self.client.force_authenticate(self.owner)
        grade = compute_course_grade(self.data["enrollments"]["ST001"].id)
        resp = self.client.post(f"/api/course-grades/{grade.id}/finalize/")
        self.assertEqual(resp.status_code, 200)

    def test_malformed_and_unknown_ids(self):
        self.client.force_authenticate(make_user("hod", role="HOD"))
        resp = self.client.post("/api/course-grades/compute/", {"enrollment": "abc"}, format="json")
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post("/api/course-grades/compute/", {"enrollment": 99999}, format="json")
        self.assertEqual(resp.status_code, 404)
        resp = self.client.get("/api/grading/sheet/", {"course": "x", "semester": SPRING})
        self.assertEqual(resp.status_code, 400)
        resp = self.client.get("/api/grading/sheet/", {"course": 99999, "semester": SPRING})
        self.assertEqual(resp.status_code, 404)


class GradeScaleEndpointTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_overlapping_bands_rejected(self):
        self.client.force_authenticate(make_user("reg", role="REGISTRAR"))
        resp = self.client.post("/api/grade-scales/", {
            "name": "Pass/Fail",
            "bands": [
                {"letter": "P", "min_mark": 50, "max_mark": 100, "gpa": "1.00"},
                {"letter": "N", "min_mark": 0, "max_mark": 50, "gpa": "0.00"},
            ],
        }, format="json")
        self.assertEqual(resp.status_code, 400)

    def test_new_default_replaces_old(self):
        self.client.force_authenticate(make_user("reg", role="REGISTRAR"))
        resp = self.client.post("/api/grade-scales/", {
            "name": "Pass/Fail", "is_default": True,
            "bands": [
                {"letter": "P", "min_mark": 50, "max_mark": 100, "gpa": "1.00"},
                {"letter": "N", "min_mark": 0, "max_mark": 49, "gpa": "0.00"},
            ],
        }, format="json")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(list(GradeScale.objects.filter(is_default=True).values_list("name", flat=True)),
                         ["Pass/Fail"])

    def test_faculty_cannot_edit_scales(self):
        self.client.force_authenticate(make_user("prof"))
        resp = self.client.post("/api/grade-scales/", {"name": "X", "bands": []}, format="json")
        self.assertEqual(resp.status_code, 403)
