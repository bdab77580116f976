"""Jeux de données partagés par les tests (cours CS101, trois élèves)."""
from decimal import Decimal

from django.contrib.auth import get_user_model

from core.models import AcademicProgram, Course
from enrollments.models import Student, CourseEnrollment
from assessments.models import AssessmentConfig, Assessment, StudentGrade

User = get_user_model()

SPRING = "2025 Spring"


def make_user(username, role="FACULTY"):
    return User.objects.create_user(username=username, password="pass1234", role=role)


def make_program(code="CS"):
    return AcademicProgram.objects.get_or_create(code=code, defaults={"name": "Computer Science"})[0]


def make_course(code="CS101", credits=3, program=None):
    return Course.objects.create(program=program or make_program(), code=code, name=f"Course {code}", credits=credits)


def make_student(student_number, last_name="Doe", first_name="Jane", program=None, user=None):
    return Student.objects.create(
        student_number=student_number, last_name=last_name, first_name=first_name,
        program=program, user=user,
    )


def enroll(student, course, semester=SPRING, status=CourseEnrollment.Status.ENROLLED):
    return CourseEnrollment.objects.create(student=student, course=course, semester_year=semester, status=status)


def make_assessment(course, name, assessment_type, category, semester=SPRING, total_marks=100, created_by=None):
    config = AssessmentConfig.objects.create(
        course=course, semester_year=semester, assessment_type=assessment_type, category=category,
        name=name, max_marks=total_marks, created_by=created_by,
    )
    return Assessment.objects.create(config=config, title=name, total_marks=total_marks)


def grade(assessment, enrollment, marks):
    g = StudentGrade(assessment=assessment, enrollment=enrollment)
    g.record_marks(Decimal(str(marks)))
    g.save()
    return g


def build_cs101(instructor=None):
    """
    CS101 / 2025 Spring, quatre épreuves:
      ST001: devoirs 94 + 95, test 79, examen 78  -> 80.88 (A)
      ST002: devoirs 70 + 60, test 60, examen 60  -> 60.80 (C)
      ST003: aucune note                          -> 0.00 (F, missing_data)
    """
    program = make_program()
    course = make_course(program=program)
    T = AssessmentConfig.Type
    C = AssessmentConfig.Category
    a = {
        "hw1": make_assessment(course, "Homework 1", T.ASSIGNMENT, C.INTERNAL, created_by=instructor),
        "proj": make_assessment(course, "Project", T.PROJECT, C.INTERNAL, created_by=instructor),
        "test": make_assessment(course, "Midterm test", T.TEST, C.EXTERNAL, created_by=instructor),
        "exam": make_assessment(course, "Final exam", T.FINAL_EXAM, C.EXTERNAL, created_by=instructor),
    }
    students = {
        "ST001": make_student("ST001", "Alpha", "Ann", program),
        "ST002": make_student("ST002", "Bravo", "Ben", program),
        "ST003": make_student("ST003", "Charlie", "Cid", program),
    }
    e = {k: enroll(s, course) for k, s in students.items()}

    for key, marks in (("hw1", 94), ("proj", 95), ("test", 79), ("exam", 78)):
        grade(a[key], e["ST001"], marks)
    for key, marks in (("hw1", 70), ("proj", 60), ("test", 60), ("exam", 60)):
        grade(a[key], e["ST002"], marks)

    return {"program": program, "course": course, "assessments": a, "students": students, "enrollments": e}
