from datetime import timedelta

from django.db import IntegrityError, transaction
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from accounts.decorators import Actor
from accounts.models import User
from jobs import services as job_services
from jobs.models import JobPost
from . import services
from .models import ChatArea, ChatMessage, ChatParticipant


def make_user(email, phone, role, **extra):
    return User.objects.create_user(username=email, email=email, password="secret123", phone=phone, role=role, **extra)


class ChatTests(TestCase):
    def setUp(self):
        self.company = make_user("hr@acme.example", "0772000000", User.Role.COMPANY, company_name="Acme Ltd")
        self.member = make_user("member@example.com", "0712345678", User.Role.JOB_SEEKER, first_name="Amina")
        self.outsider = make_user("outsider@example.com", "0712345679", User.Role.JOB_SEEKER)
        self.post = JobPost.objects.create(
            company=self.company,
            title="Backend Developer",
            description="APIs",
            industry="Technology",
            job_type="FULL_TIME",
            has_chat_area=True,
            application_deadline=timezone.now() + timedelta(days=7),
        )
        job_services.apply(Actor(user=self.member), self.post.pk)
        self.area = ChatArea.objects.get(job_post=self.post)

    def messages_url(self, area=None):
        return reverse("chat_messages", args=[(area or self.area).pk])

    def test_apply_enrolls_seeker_alongside_company(self):
        members = set(ChatParticipant.objects.filter(chat_area=self.area).values_list("user_id", flat=True))
        self.assertEqual(members, {self.company.pk, self.member.pk})
        self.assertEqual(self.area.company, self.company)

    def test_enroll_is_idempotent(self):
        first = services.enroll(self.area, self.member)
        second = services.enroll(self.area, self.member)
        self.assertEqual(first.pk, second.pk)
        self.assertEqual(ChatParticipant.objects.filter(user=self.member).count(), 1)

    def test_participant_pair_is_unique(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                ChatParticipant.objects.create(chat_area=self.area, user=self.member)

    def test_enroll_in_job_chat_skips_posts_without_chat(self):
        post = JobPost.objects.create(
            company=self.company,
            title="No chat",
            description="x",
            industry="Technology",
            job_type="CONTRACT",
            application_deadline=timezone.now() + timedelta(days=7),
        )
        self.assertIsNone(services.enroll_in_job_chat(post, self.member))
        self.assertFalse(ChatArea.objects.filter(job_post=post).exists())

    def test_member_sends_and_lists_messages(self):
        self.client.force_login(self.member)
        resp = self.client.post(self.messages_url(), {"content": "  Hello team  "}, content_type="application/json")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["message"], "Message sent successfully")
        self.assertEqual(resp.json()["chatMessage"]["content"], "Hello team")
        self.assertEqual(resp.json()["chatMessage"]["author"]["firstName"], "Amina")

        self.client.force_login(self.company)
        body = self.client.get(self.messages_url()).json()
        self.assertEqual(body["chatArea"]["jobPost"]["title"], "Backend Developer")
        self.assertEqual([m["content"] for m in body["messages"]], ["Hello team"])

    def test_blank_message_rejected(self):
        self.client.force_login(self.member)
        resp = self.client.post(self.messages_url(), {"content": "   "}, content_type="application/json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Message content is required")
        self.assertFalse(ChatMessage.objects.exists())

    def test_non_member_is_denied(self):
        self.client.force_login(self.outsider)
        resp = self.client.get(self.messages_url())
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "Access denied to chat area")

        resp = self.client.post(self.messages_url(), {"content": "hi"}, content_type="application/json")
        self.assertEqual(resp.status_code, 403)

    def test_unknown_chat_area(self):
        self.client.force_login(self.member)
        resp = self.client.get(reverse("chat_messages", args=[self.area.pk + 100]))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Chat area not found")

    def test_requires_login(self):
        self.assertEqual(self.client.get(reverse("chat_areas")).status_code, 401)

    def test_chat_area_listing(self):
        services.send_message(Actor(user=self.member), self.area.pk, "First")

        self.client.force_login(self.company)
        areas = self.client.get(reverse("chat_areas")).json()["chatAreas"]
        self.assertEqual(len(areas), 1)
        self.assertEqual(areas[0]["participantCount"], 2)
        self.assertEqual(areas[0]["messageCount"], 1)

        self.client.force_login(self.member)
        areas = self.client.get(reverse("chat_areas")).json()["chatAreas"]
        self.assertEqual([a["participantCount"] for a in areas], [2])

        self.client.force_login(self.outsider)
        self.assertEqual(self.client.get(reverse("chat_areas")).json()["chatAreas"], [])
