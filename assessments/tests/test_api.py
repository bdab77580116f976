from decimal import Decimal

from django.test import TestCase
from rest_framework.test import APIClient

from assessments.models import AssessmentConfig, StudentGrade
from enrollments.models import CourseEnrollment
from grading.tests.fixtures import make_course, make_student, enroll, make_assessment, make_user


class BulkGradesTests(TestCase):
    def setUp(self):
        self.owner = make_user("owner")
        self.course = make_course()
        self.assessment = make_assessment(
            self.course, "Test 1", AssessmentConfig.Type.TEST, AssessmentConfig.Category.EXTERNAL,
            total_marks=50, created_by=self.owner,
        )
        self.e1 = enroll(make_student("ST001"), self.course)
        self.e2 = enroll(make_student("ST002"), self.course)
        self.dropped = enroll(make_student("ST003"), self.course, status=CourseEnrollment.Status.DROPPED)
        self.other = enroll(make_student("ST004"), make_course("CS999"))
        self.client = APIClient()

    def post_bulk(self, entries, user=None):
        self.client.force_authenticate(user or self.owner)
        return self.client.post(
            "/api/student-grades/bulk/",
            {"assessment": self.assessment.id, "entries": entries},
            format="json",
        )

    def test_creates_then_updates(self):
        resp = self.post_bulk([
            {"enrollment": self.e1.id, "marks_obtained": 40},
            {"enrollment": self.e2.id, "marks_obtained": "42.5"},
        ])
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.data["created"]), 2)

        g = StudentGrade.objects.get(enrollment=self.e2)
        self.assertEqual(g.percentage, Decimal("85"))
        self.assertEqual(g.graded_by, self.owner)

        resp = self.post_bulk([{"enrollment": self.e1.id, "marks_obtained": 45}])
        self.assertEqual(len(resp.data["updated"]), 1)
        self.assertEqual(StudentGrade.objects.get(enrollment=self.e1).percentage, Decimal("90"))

    def test_skips_bad_entries_with_reason(self):
        resp = self.post_bulk([
            {"enrollment": self.e1.id, "marks_obtained": 51},
            {"enrollment": self.e2.id, "marks_obtained": "abc"},
            {"enrollment": self.dropped.id, "marks_obtained": 10},
            {"enrollment": self.other.id, "marks_obtained": 10},
            {"enrollment": 999999, "marks_obtained": 10},
        ])
        self.assertEqual(resp.status_code, 200)
        reasons = [s["reason"] for s in resp.data["skipped"]]
        self.assertEqual(reasons, [
            "Out of range", "Invalid value", "Enrollment dropped", "Course mismatch", "Enrollment not found",
        ])
        self.assertFalse(StudentGrade.objects.exists())

    def test_faculty_cannot_grade_someone_elses_assessment(self):
        resp = self.post_bulk([{"enrollment": self.e1.id, "marks_obtained": 40}], user=make_user("intruder"))
        self.assertEqual(resp.status_code, 403)

    def test_registrar_can_grade_any_assessment(self):
        resp = self.post_bulk([{"enrollment": self.e1.id, "marks_obtained": 40}],
                              user=make_user("reg", role="REGISTRAR"))
        self.assertEqual(resp.status_code, 200)

    def test_students_cannot_write_grades(self):
        resp = self.post_bulk([{"enrollment": self.e1.id, "marks_obtained": 40}],
                              user=make_user("kid", role="STUDENT"))
        self.assertEqual(resp.status_code, 403)


class StudentGradeEndpointTests(TestCase):
    def setUp(self):
        self.owner = make_user("owner")
        course = make_course()
        self.assessment = make_assessment(
            course, "Lab 1", AssessmentConfig.Type.LAB, AssessmentConfig.Category.INTERNAL,
            total_marks=20, created_by=self.owner,
        )
        self.enrollment = enroll(make_student("ST001"), course)
        self.client = APIClient()
        self.client.force_authenticate(self.owner)

    def test_create_grade_computes_percentage(self):
        resp = self.client.post("/api/student-grades/", {
            "assessment": self.assessment.id, "enrollment": self.enrollment.id, "marks_obtained": "17",
        }, format="json")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.data["percentage"], 85.0)
        self.assertEqual(resp.data["status"], "graded")

    def test_out_of_range_marks_return_400(self):
        resp = self.client.post("/api/student-grades/", {
            "assessment": self.assessment.id, "enrollment": self.enrollment.id, "marks_obtained": "25",
        }, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("marks_obtained", resp.data)

    def test_submit_without_marks(self):
        g = StudentGrade.objects.create(assessment=self.assessment, enrollment=self.enrollment)
        resp = self.client.post(f"/api/student-grades/{g.id}/submit/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["status"], "submitted")
