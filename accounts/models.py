from django.db import models
from django.contrib.auth.models import AbstractUser
# Create your models here.

class User(AbstractUser):
    class Role(models.TextChoices):
        FACULTY = "FACULTY"
        HOD = "HOD"
        REGISTRAR = "REGISTRAR"
        ADMIN = "ADMIN"
        STUDENT = "STUDENT"
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.FACULTY)
