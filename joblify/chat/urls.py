from django.urls import path
from . import views

urlpatterns = [
    path("chats/", views.chat_areas, name="chat_areas"),
    path("chats/<int:chat_area_id>/messages", views.chat_messages, name="chat_messages"),
]
