from datetime import timedelta

from django.db import IntegrityError, transaction
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from accounts.decorators import Actor
from accounts.models import CompanyProfile, JobSeekerProfile, Notification, ProfileType, User
from jobs.models import JobPost
from joblify.errors import ConflictError
from . import services
from .models import Invitation, Subscription


def make_company(email="hr@acme.example", phone="0772000000", name="Acme Ltd"):
    user = User.objects.create_user(
        username=email, email=email, password="secret123", phone=phone, role=User.Role.COMPANY, company_name=name
    )
    CompanyProfile.objects.create(user=user, company_name=name, industry="Technology", company_size="11-50")
    return user


def make_seeker(email="seeker@example.com", phone="0712345678", with_profile=True):
    user = User.objects.create_user(
        username=email, email=email, password="secret123", phone=phone, role=User.Role.JOB_SEEKER
    )
    if with_profile:
        JobSeekerProfile.objects.create(user=user, bio="Hi", skills=["python"], education="BSc")
    return user


class SubscribeTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.seeker = make_seeker()
        self.client.force_login(self.seeker)

    def subscribe(self, profile_type="EMPLOYABLE", company=None):
        company = company or self.company
        return self.client.post(
            reverse("subscribe", args=[company.pk]), {"profileType": profile_type}, content_type="application/json"
        )

    def test_subscribe_and_notify_company(self):
        resp = self.subscribe()
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["message"], "Successfully subscribed as EMPLOYABLE")
        self.assertEqual(resp.json()["subscription"]["company"]["companyName"], "Acme Ltd")

        notif = Notification.objects.get(user=self.company)
        self.assertEqual(notif.kind, Notification.Kind.SUBSCRIPTION)
        self.assertEqual(notif.message, "New employable subscription received")

    def test_duplicate_subscription_conflicts(self):
        self.subscribe()
        resp = self.subscribe()
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "You are already subscribed to this company as EMPLOYABLE")
        self.assertEqual(Subscription.objects.count(), 1)

    def test_both_profile_types_may_coexist(self):
        self.assertEqual(self.subscribe("EMPLOYABLE").status_code, 201)
        self.assertEqual(self.subscribe("VIRTUAL_INTERN").status_code, 201)
        self.assertEqual(Subscription.objects.filter(job_seeker=self.seeker).count(), 2)

    def test_invalid_profile_type(self):
        for value in ("", "INTERN"):
            with self.subTest(value=value):
                resp = self.subscribe(value)
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(
                    resp.json()["message"], "Valid profile type is required (EMPLOYABLE or VIRTUAL_INTERN)"
                )

    def test_requires_profile(self):
        self.client.force_login(make_seeker(email="new@example.com", phone="0700000001", with_profile=False))
        resp = self.subscribe()
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Please create your job seeker profile first")

    def test_unknown_company(self):
        resp = self.client.post(
            reverse("subscribe", args=[self.seeker.pk]), {"profileType": "EMPLOYABLE"}, content_type="application/json"
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Company not found")

    def test_unique_constraint(self):
        Subscription.objects.create(company=self.company, job_seeker=self.seeker, profile_type=ProfileType.EMPLOYABLE)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Subscription.objects.create(
                    company=self.company, job_seeker=self.seeker, profile_type=ProfileType.EMPLOYABLE
                )


class InvitationTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.seeker = make_seeker()
        self.company_actor = Actor(user=self.company)

    def invite(self, profile_type="VIRTUAL_INTERN", **extra):
        self.client.force_login(self.company)
        return self.client.post(
            reverse("invite_jobseeker", args=[self.seeker.pk]),
            {"profileType": profile_type, **extra},
            content_type="application/json",
        )

    def respond(self, invitation, action):
        self.client.force_login(self.seeker)
        return self.client.post(
            reverse("respond_to_invitation", args=[invitation.pk]), {"action": action}, content_type="application/json"
        )

    def test_invite_notifies_seeker(self):
        resp = self.invite(message="  Join our interns  ")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["message"], "Invitation sent successfully")

        invitation = Invitation.objects.get()
        self.assertEqual(invitation.status, Invitation.Status.PENDING)
        self.assertEqual(invitation.message, "Join our interns")
        self.assertGreater(invitation.expires_at, timezone.now() + timedelta(days=29))

        notif = Notification.objects.get(user=self.seeker)
        self.assertEqual(notif.kind, Notification.Kind.INVITATION)
        self.assertEqual(notif.message, "Acme Ltd invited you to subscribe as VIRTUAL_INTERN")

    def test_second_pending_invitation_conflicts(self):
        self.invite()
        resp = self.invite()
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Invitation already sent and pending")
        # The other profile type is a separate triple.
        self.assertEqual(self.invite("EMPLOYABLE").status_code, 201)

    def test_invite_unknown_seeker(self):
        self.client.force_login(self.company)
        resp = self.client.post(
            reverse("invite_jobseeker", args=[self.company.pk]),
            {"profileType": "EMPLOYABLE"},
            content_type="application/json",
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Jobseeker not found")

    def test_accept_creates_subscription(self):
        invitation = services.invite(self.company_actor, self.seeker.pk, ProfileType.VIRTUAL_INTERN)
        resp = self.respond(invitation, "accept")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "Invitation accepted. You are now subscribed as VIRTUAL_INTERN.")

        invitation.refresh_from_db()
        self.assertEqual(invitation.status, Invitation.Status.ACCEPTED)
        self.assertIsNotNone(invitation.responded_at)
        self.assertTrue(
            Subscription.objects.filter(
                company=self.company, job_seeker=self.seeker, profile_type=ProfileType.VIRTUAL_INTERN
            ).exists()
        )

    def test_accept_reuses_existing_subscription(self):
        Subscription.objects.create(
            company=self.company, job_seeker=self.seeker, profile_type=ProfileType.VIRTUAL_INTERN
        )
        invitation = services.invite(self.company_actor, self.seeker.pk, ProfileType.VIRTUAL_INTERN)
        self.assertEqual(self.respond(invitation, "accept").status_code, 200)
        self.assertEqual(Subscription.objects.count(), 1)

    def test_decline(self):
        invitation = services.invite(self.company_actor, self.seeker.pk, ProfileType.EMPLOYABLE)
        resp = self.respond(invitation, "decline")
        self.assertEqual(resp.json()["message"], "Invitation declined.")
        self.assertNotIn("subscription", resp.json())
        self.assertFalse(Subscription.objects.exists())

    def test_cannot_respond_twice(self):
        invitation = services.invite(self.company_actor, self.seeker.pk, ProfileType.EMPLOYABLE)
        self.respond(invitation, "decline")
        resp = self.respond(invitation, "accept")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Invitation not found or already responded")

    def test_cannot_respond_to_someone_elses_invitation(self):
        invitation = services.invite(self.company_actor, self.seeker.pk, ProfileType.EMPLOYABLE)
        self.client.force_login(make_seeker(email="other@example.com", phone="0700000001"))
        resp = self.client.post(
            reverse("respond_to_invitation", args=[invitation.pk]), {"action": "accept"}, content_type="application/json"
        )
        self.assertEqual(resp.status_code, 404)

    def test_invalid_action(self):
        invitation = services.invite(self.company_actor, self.seeker.pk, ProfileType.EMPLOYABLE)
        resp = self.respond(invitation, "maybe")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Action must be 'accept' or 'decline'")

    def test_expired_invitation_cannot_be_accepted(self):
        invitation = services.invite(self.company_actor, self.seeker.pk, ProfileType.EMPLOYABLE)
        Invitation.objects.filter(pk=invitation.pk).update(expires_at=timezone.now() - timedelta(minutes=1))

        resp = self.respond(invitation, "accept")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Invitation has expired")

        invitation.refresh_from_db()
        self.assertEqual(invitation.status, Invitation.Status.EXPIRED)
        self.assertFalse(Subscription.objects.exists())

    def test_stale_invitation_does_not_block_reinvite(self):
        first = services.invite(self.company_actor, self.seeker.pk, ProfileType.EMPLOYABLE)
        Invitation.objects.filter(pk=first.pk).update(expires_at=timezone.now() - timedelta(days=1))

        second = services.invite(self.company_actor, self.seeker.pk, ProfileType.EMPLOYABLE)
        first.refresh_from_db()
        self.assertEqual(first.status, Invitation.Status.EXPIRED)
        self.assertEqual(second.status, Invitation.Status.PENDING)

    def test_reinvite_after_decline(self):
        first = services.invite(self.company_actor, self.seeker.pk, ProfileType.EMPLOYABLE)
        services.respond_to_invitation(Actor(user=self.seeker), first.pk, "decline")
        services.invite(self.company_actor, self.seeker.pk, ProfileType.EMPLOYABLE)
        self.assertEqual(Invitation.objects.pending().count(), 1)

    def test_service_conflict(self):
        services.invite(self.company_actor, self.seeker.pk, ProfileType.EMPLOYABLE)
        with self.assertRaises(ConflictError):
            services.invite(self.company_actor, self.seeker.pk, ProfileType.EMPLOYABLE)

    def test_pending_constraint_ignores_closed_rows(self):
        expires = timezone.now() + timedelta(days=1)
        triple = {"company": self.company, "job_seeker": self.seeker, "profile_type": ProfileType.EMPLOYABLE}
        Invitation.objects.create(**triple, status=Invitation.Status.DECLINED, expires_at=expires)
        Invitation.objects.create(**triple, status=Invitation.Status.DECLINED, expires_at=expires)
        Invitation.objects.create(**triple, expires_at=expires)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Invitation.objects.create(**triple, expires_at=expires)

    def test_list_invitations_with_status_filter(self):
        first = services.invite(self.company_actor, self.seeker.pk, ProfileType.EMPLOYABLE)
        services.invite(self.company_actor, self.seeker.pk, ProfileType.VIRTUAL_INTERN)
        services.respond_to_invitation(Actor(user=self.seeker), first.pk, "decline")

        self.client.force_login(self.seeker)
        body = self.client.get(reverse("invitations")).json()
        self.assertEqual(body["pagination"]["total"], 2)
        self.assertEqual(body["invitations"][0]["company"]["industry"], "Technology")

        body = self.client.get(reverse("invitations"), {"status": "pending"}).json()
        self.assertEqual([i["profileType"] for i in body["invitations"]], ["VIRTUAL_INTERN"])


class ShareJobTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.seeker = make_seeker()
        self.post = JobPost.objects.create(
            company=self.company,
            title="Backend Developer",
            description="APIs",
            industry="Technology",
            job_type="FULL_TIME",
            application_deadline=timezone.now() + timedelta(days=7),
        )
        self.client.force_login(self.company)

    def share(self, job_post_id):
        return self.client.post(
            reverse("share_job", args=[self.seeker.pk]), {"jobPostId": job_post_id}, content_type="application/json"
        )

    def test_share_job_notifies_seeker(self):
        resp = self.share(self.post.pk)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "Job shared successfully")

        notif = Notification.objects.get(user=self.seeker)
        self.assertEqual(notif.kind, Notification.Kind.JOB_SHARED)
        self.assertEqual(notif.message, "Acme Ltd shared a job with you: Backend Developer")
        self.assertEqual(notif.related_id, str(self.post.pk))

    def test_cannot_share_another_companys_post(self):
        other = make_company(email="other@x.example", phone="0772000001", name="Other")
        post = JobPost.objects.create(
            company=other,
            title="Theirs",
            description="x",
            industry="Finance",
            job_type="CONTRACT",
            application_deadline=timezone.now() + timedelta(days=7),
        )
        resp = self.share(post.pk)
        self.assertEqual(resp.status_code, 404)
        self.assertFalse(Notification.objects.exists())

    def test_job_post_required(self):
        resp = self.client.post(reverse("share_job", args=[self.seeker.pk]), {}, content_type="application/json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Job post is required")
