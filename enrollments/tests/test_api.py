from django.test import TestCase
from rest_framework.test import APIClient

from grading.tests.fixtures import make_course, make_student, enroll, make_user, SPRING


class EnrollmentApiTests(TestCase):
    def setUp(self):
        self.course = make_course()
        self.student = make_student("ST001", "Alpha", "Ann")
        self.client = APIClient()
        self.client.force_authenticate(make_user("reg", role="REGISTRAR"))

    def test_enroll_once_per_semester(self):
        body = {"student": self.student.id, "course": self.course.id, "semester_year": SPRING}
        self.assertEqual(self.client.post("/api/enrollments/", body, format="json").status_code, 201)
        self.assertEqual(self.client.post("/api/enrollments/", body, format="json").status_code, 400)

    def test_list_is_detailed(self):
        enroll(self.student, self.course)
        resp = self.client.get("/api/enrollments/", {"student": self.student.id})
        row = resp.data[0]
        self.assertEqual(row["student_name"], "Alpha Ann")
        self.assertEqual(row["course_code"], "CS101")
        self.assertEqual(row["credits"], 3)
