from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from .models import CompanyProfile, JobSeekerProfile, LoginSession, Notification, User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    # show extra fields in admin
    fieldsets = DjangoUserAdmin.fieldsets + (
        (
            "Joblify",
            {"fields": ("role", "phone", "company_name", "verification_status", "subscription_status", "points")},
        ),
    )
    list_display = ("email", "role", "verification_status", "subscription_status", "is_active", "is_staff")
    list_filter = ("role", "verification_status", "subscription_status", "is_active")
    search_fields = ("email", "phone", "first_name", "last_name", "company_name")


admin.site.register(JobSeekerProfile)
admin.site.register(CompanyProfile)

admin.site.register(Notification)
admin.site.register(LoginSession)
