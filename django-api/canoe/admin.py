from django.contrib import admin

from canoe.models import AttendanceRecord, StudentRecord, TrainingRecord


class AttendanceInline(admin.TabularInline):
    model = AttendanceRecord
    extra = 0


@admin.register(StudentRecord)
class StudentAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "academic_year", "phone", "email"]
    search_fields = ["name", "email"]
    list_filter = ["academic_year"]
    inlines = [AttendanceInline]


@admin.register(TrainingRecord)
class TrainingAdmin(admin.ModelAdmin):
    list_display = ["date_time", "created_at"]
    inlines = [AttendanceInline]


@admin.register(AttendanceRecord)
class AttendanceAdmin(admin.ModelAdmin):
    list_display = ["student", "training", "status"]
    list_filter = ["status", "training"]
