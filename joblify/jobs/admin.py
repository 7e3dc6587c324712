from django.contrib import admin
from .models import ApplicationEvent, JobApplication, JobPost

admin.site.register(JobPost)
admin.site.register(JobApplication)
admin.site.register(ApplicationEvent)
