from django.contrib import admin
from .models import Invitation, Subscription

admin.site.register(Subscription)
admin.site.register(Invitation)
