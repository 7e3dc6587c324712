from django.contrib import admin
from .models import ChatArea, ChatMessage, ChatParticipant

admin.site.register(ChatArea)
admin.site.register(ChatParticipant)
admin.site.register(ChatMessage)
