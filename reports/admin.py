from django.contrib import admin
from .models import AcademicRecord, TranscriptToken
# Register your models here.

@admin.register(AcademicRecord)
class AcademicRecordAdmin(admin.ModelAdmin):
    list_display = ("student","semester_year","semester_gpa","cumulative_gpa","total_credits_earned","academic_status")
    list_filter = ("semester_year","academic_status","program")
    search_fields = ("student__student_number","student__last_name","student__first_name")

@admin.register(TranscriptToken)
class TranscriptTokenAdmin(admin.ModelAdmin):
    list_display = ("uid","enrollment","created_at","valid")
    list_filter  = ("valid","enrollment__semester_year")
    search_fields = ("enrollment__student__student_number","enrollment__student__last_name","enrollment__course__code")
