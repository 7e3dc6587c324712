from datetime import timedelta
from unittest import mock

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils import timezone

from accounts.decorators import Actor
from accounts.models import CompanyProfile, JobSeekerProfile, Notification, User
from chat.models import ChatArea, ChatParticipant
from joblify.errors import ConflictError, NotFoundError
from resumes.models import Resume
from . import services
from .models import ApplicationEvent, ApplicationStatus, JobApplication, JobPost


def make_company(email="hr@acme.example", phone="0772000000", name="Acme Ltd"):
    user = User.objects.create_user(
        username=email, email=email, password="secret123", phone=phone, role=User.Role.COMPANY, company_name=name
    )
    CompanyProfile.objects.create(user=user, company_name=name, industry="Technology", company_size="11-50")
    return user


def make_seeker(email="seeker@example.com", phone="0712345678", **extra):
    user = User.objects.create_user(
        username=email, email=email, password="secret123", phone=phone, role=User.Role.JOB_SEEKER, **extra
    )
    JobSeekerProfile.objects.create(user=user, bio="Hi", skills=["python"], education="BSc")
    return user


def make_post(company, **extra):
    fields = {
        "title": "Backend Developer",
        "description": "APIs and PostgreSQL",
        "industry": "Technology",
        "job_type": "FULL_TIME",
        "location": "Kampala",
        "application_deadline": timezone.now() + timedelta(days=10),
    }
    fields.update(extra)
    return JobPost.objects.create(company=company, **fields)


def post_payload(**extra):
    payload = {
        "title": "Data Analyst",
        "description": "Dashboards",
        "industry": "Finance",
        "jobType": "CONTRACT",
        "applicationDeadline": (timezone.now() + timedelta(days=5)).isoformat(),
        "skillsRequired": "sql, excel",
        "benefits": "Medical cover",
    }
    payload.update(extra)
    return payload


class JobPostLifecycleTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.client.force_login(self.company)

    def test_create_job_post(self):
        resp = self.client.post(reverse("company_jobs"), post_payload(), content_type="application/json")
        self.assertEqual(resp.status_code, 201)
        data = resp.json()["jobPost"]
        self.assertEqual(data["skillsRequired"], ["sql", "excel"])
        self.assertEqual(data["benefits"], ["Medical cover"])
        self.assertTrue(data["isActive"])
        self.assertFalse(ChatArea.objects.exists())

    def test_create_via_auth_route(self):
        resp = self.client.post(reverse("create_job"), post_payload(), content_type="application/json")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["message"], "Job post created successfully")

    def test_seeker_cannot_post(self):
        self.client.force_login(make_seeker())
        resp = self.client.post(reverse("create_job"), post_payload(), content_type="application/json")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "Only companies can post jobs")

    def test_required_fields(self):
        resp = self.client.post(reverse("company_jobs"), post_payload(title=""), content_type="application/json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Title, description, industry, job type, and deadline are required")

    def test_deadline_must_be_future(self):
        past = (timezone.now() - timedelta(minutes=1)).isoformat()
        resp = self.client.post(
            reverse("company_jobs"), post_payload(applicationDeadline=past), content_type="application/json"
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Application deadline must be in the future")
        self.assertFalse(JobPost.objects.exists())

    def test_chat_enabled_post_gets_chat_area_with_company(self):
        resp = self.client.post(reverse("company_jobs"), post_payload(hasChatArea=True), content_type="application/json")
        post = JobPost.objects.get(pk=resp.json()["jobPost"]["id"])
        area = ChatArea.objects.get(job_post=post)
        self.assertTrue(ChatParticipant.objects.filter(chat_area=area, user=self.company).exists())

    def test_update_merges_supplied_fields(self):
        post = make_post(self.company, skills_required=["python"])
        resp = self.client.put(
            reverse("company_job_detail", args=[post.pk]),
            {"title": "Senior Backend Developer", "skillsRequired": "go"},
            content_type="application/json",
        )
        self.assertEqual(resp.status_code, 200)
        post.refresh_from_db()
        self.assertEqual(post.title, "Senior Backend Developer")
        self.assertEqual(post.skills_required, ["go"])
        self.assertEqual(post.description, "APIs and PostgreSQL")
        self.assertEqual(post.location, "Kampala")

    def test_update_enabling_chat_creates_area(self):
        post = make_post(self.company)
        self.client.put(reverse("company_job_detail", args=[post.pk]), {"hasChatArea": True}, content_type="application/json")
        self.assertTrue(ChatArea.objects.filter(job_post=post).exists())

    def test_enabling_chat_enrolls_existing_applicants(self):
        post = make_post(self.company)
        accepted = make_seeker()
        pending = make_seeker(email="pending@example.com", phone="0700000002")
        app = services.apply(Actor(user=accepted), post.pk)
        services.apply(Actor(user=pending), post.pk)
        services.update_applicant_status(Actor(user=self.company), app.pk, ApplicationStatus.ACCEPTED)

        services.update_job_post(Actor(user=self.company), post.pk, {"hasChatArea": True})

        members = set(ChatParticipant.objects.filter(chat_area__job_post=post).values_list("user_id", flat=True))
        self.assertEqual(members, {self.company.pk, accepted.pk, pending.pk})

    @override_settings(JOBLIFY={**settings.JOBLIFY, "CHAT_ENROLL_ON_APPLY": False})
    def test_enabling_chat_enrolls_only_accepted_when_apply_enrollment_off(self):
        post = make_post(self.company)
        accepted = make_seeker()
        pending = make_seeker(email="pending@example.com", phone="0700000002")
        app = services.apply(Actor(user=accepted), post.pk)
        services.apply(Actor(user=pending), post.pk)
        services.update_applicant_status(Actor(user=self.company), app.pk, ApplicationStatus.ACCEPTED)

        services.update_job_post(Actor(user=self.company), post.pk, {"hasChatArea": True})

        members = set(ChatParticipant.objects.filter(chat_area__job_post=post).values_list("user_id", flat=True))
        self.assertEqual(members, {self.company.pk, accepted.pk})

    def test_update_requires_ownership(self):
        other = make_company(email="other@x.example", phone="0772000001")
        post = make_post(other)
        resp = self.client.put(reverse("company_job_detail", args=[post.pk]), {"title": "Mine"}, content_type="application/json")
        self.assertEqual(resp.status_code, 404)
        post.refresh_from_db()
        self.assertEqual(post.title, "Backend Developer")

    def test_delete_without_applications_removes_post(self):
        post = make_post(self.company)
        resp = self.client.delete(reverse("company_job_detail", args=[post.pk]))
        self.assertEqual(resp.json()["message"], "Job post deleted successfully")
        self.assertFalse(JobPost.objects.filter(pk=post.pk).exists())

        resp = self.client.get(reverse("company_job_detail", args=[post.pk]))
        self.assertEqual(resp.status_code, 404)

    def test_delete_locks_the_post_row(self):
        post = make_post(self.company)
        with mock.patch.object(
            JobPost.objects, "select_for_update", wraps=JobPost.objects.select_for_update
        ) as locked:
            services.delete_job_post(Actor(user=self.company), post.pk)
        locked.assert_called_once_with()
        self.assertFalse(JobPost.objects.filter(pk=post.pk).exists())

    def test_delete_with_applications_deactivates(self):
        post = make_post(self.company)
        seeker = make_seeker()
        services.apply(Actor(user=seeker), post.pk)

        resp = self.client.delete(reverse("company_job_detail", args=[post.pk]))
        self.assertEqual(resp.json()["message"], "Job post deactivated (has existing applications)")
        post.refresh_from_db()
        self.assertFalse(post.is_active)

        # Still reachable by id, but gone from the open listing.
        self.client.force_login(seeker)
        self.assertEqual(self.client.get(reverse("job_detail", args=[post.pk])).status_code, 200)
        listing = self.client.get(reverse("job_list")).json()
        self.assertEqual(listing["jobPosts"], [])

    def test_company_job_list_filters_active(self):
        make_post(self.company, title="Open")
        make_post(self.company, title="Closed", is_active=False)
        body = self.client.get(reverse("company_jobs"), {"isActive": "false"}).json()
        self.assertEqual([p["title"] for p in body["jobPosts"]], ["Closed"])


class JobListTests(TestCase):
    def setUp(self):
        company = make_company()
        make_post(company, title="Backend Developer", industry="Technology")
        make_post(company, title="Accounts Assistant", industry="Finance", job_type="PART_TIME")
        make_post(company, title="Expired Role", application_deadline=timezone.now() - timedelta(days=1))
        self.client.force_login(make_seeker())

    def test_lists_open_posts_newest_first(self):
        body = self.client.get(reverse("job_list")).json()
        self.assertEqual([p["title"] for p in body["jobPosts"]], ["Accounts Assistant", "Backend Developer"])
        self.assertEqual(body["jobPosts"][0]["company"]["companyName"], "Acme Ltd")

    def test_search_and_facets(self):
        body = self.client.get(reverse("job_list"), {"search": "backend"}).json()
        self.assertEqual([p["title"] for p in body["jobPosts"]], ["Backend Developer"])

        body = self.client.get(reverse("job_list"), {"jobType": "PART_TIME"}).json()
        self.assertEqual([p["title"] for p in body["jobPosts"]], ["Accounts Assistant"])

        body = self.client.get(reverse("job_list"), {"search": "acme", "industry": "Finance"}).json()
        self.assertEqual([p["title"] for p in body["jobPosts"]], ["Accounts Assistant"])


class ApplyTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.seeker = make_seeker()
        self.post = make_post(self.company)
        self.client.force_login(self.seeker)

    def apply(self, post=None, **payload):
        post = post or self.post
        return self.client.post(reverse("apply_job", args=[post.pk]), payload, content_type="application/json")

    def test_apply_creates_application_and_notifies_company(self):
        resp = self.apply(coverLetter="Hello")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["application"]["status"], "NOT_VIEWED")

        app = JobApplication.objects.get()
        self.assertEqual(app.cover_letter, "Hello")
        self.assertEqual(ApplicationEvent.objects.filter(application=app).count(), 1)

        notif = Notification.objects.get(user=self.company)
        self.assertEqual(notif.kind, Notification.Kind.APPLICATION)
        self.assertEqual(notif.related_id, str(app.pk))

    def test_second_application_conflicts(self):
        self.assertEqual(self.apply().status_code, 201)
        resp = self.apply()
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "You have already applied to this job")
        self.assertEqual(JobApplication.objects.count(), 1)

    def test_past_deadline_is_not_found_even_if_active(self):
        expired = make_post(self.company, application_deadline=timezone.now() - timedelta(seconds=1))
        resp = self.apply(expired)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Job post not found or expired")

    def test_inactive_post_is_not_found(self):
        closed = make_post(self.company, is_active=False)
        self.assertEqual(self.apply(closed).status_code, 404)

    def test_company_cannot_apply(self):
        self.client.force_login(self.company)
        resp = self.apply()
        self.assertEqual(resp.status_code, 403)

    def test_custom_resume_is_materialized(self):
        resp = self.apply(customResume={"summary": "Analyst", "skills": ["sql"]})
        self.assertEqual(resp.status_code, 201)
        resume = Resume.objects.get(owner=self.seeker)
        self.assertTrue(resume.custom)
        self.assertEqual(resume.title, "Custom Resume for Backend Developer")
        self.assertEqual(JobApplication.objects.get().resume, resume)

    def test_resume_must_belong_to_applicant(self):
        other = make_seeker(email="o@example.com", phone="0700000001")
        resume = Resume.objects.create(owner=other, title="Theirs", summary="x")
        resp = self.apply(resumeId=resume.pk)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Resume not found")
        self.assertFalse(JobApplication.objects.exists())

    def test_apply_to_chat_enabled_post_enrolls_seeker(self):
        post = make_post(self.company, has_chat_area=True)
        self.apply(post)
        self.assertTrue(ChatParticipant.objects.filter(chat_area__job_post=post, user=self.seeker).exists())

    @override_settings(JOBLIFY={**settings.JOBLIFY, "CHAT_ENROLL_ON_APPLY": False})
    def test_apply_without_enrollment_when_disabled(self):
        post = make_post(self.company, has_chat_area=True)
        self.apply(post)
        self.assertFalse(ChatParticipant.objects.filter(user=self.seeker).exists())

    def test_notification_failure_does_not_fail_apply(self):
        with mock.patch.object(Notification.objects, "create", side_effect=DatabaseError("down")):
            resp = self.apply()
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(JobApplication.objects.count(), 1)
        self.assertFalse(Notification.objects.exists())

    def test_unique_constraint_backs_duplicate_check(self):
        JobApplication.objects.create(job_post=self.post, job_seeker=self.seeker)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                JobApplication.objects.create(job_post=self.post, job_seeker=self.seeker)

    def test_service_raises_conflict(self):
        actor = Actor(user=self.seeker)
        services.apply(actor, self.post.pk)
        with self.assertRaises(ConflictError):
            services.apply(actor, self.post.pk)


class ApplicantStatusTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.seeker = make_seeker()
        self.post = make_post(self.company, has_chat_area=True)
        with self.settings(JOBLIFY={**settings.JOBLIFY, "CHAT_ENROLL_ON_APPLY": False}):
            self.application = services.apply(Actor(user=self.seeker), self.post.pk)
        self.client.force_login(self.company)

    def set_status(self, status, application=None, **extra):
        application = application or self.application
        return self.client.put(
            reverse("update_applicant_status", args=[application.pk]),
            {"status": status, **extra},
            content_type="application/json",
        )

    def test_accept_on_chat_post_enrolls_and_notifies(self):
        resp = self.set_status("ACCEPTED", notes="Welcome aboard")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["application"]["status"], "ACCEPTED")

        self.assertTrue(ChatParticipant.objects.filter(chat_area__job_post=self.post, user=self.seeker).exists())
        notifs = Notification.objects.filter(user=self.seeker, kind=Notification.Kind.APPLICATION_STATUS)
        self.assertEqual(notifs.count(), 1)
        self.assertEqual(notifs.get().message, "Your application for Backend Developer has been accepted")
        self.assertEqual(self.application.events.last().note, "Welcome aboard")

    def test_accepting_twice_keeps_one_participant(self):
        self.set_status("ACCEPTED")
        self.set_status("ACCEPTED")
        self.assertEqual(ChatParticipant.objects.filter(user=self.seeker).count(), 1)

    def test_membership_survives_later_rejection(self):
        self.set_status("ACCEPTED")
        self.set_status("REJECTED")
        self.assertTrue(ChatParticipant.objects.filter(user=self.seeker).exists())

    def test_transitions_are_unordered(self):
        self.assertEqual(self.set_status("REJECTED").status_code, 200)
        self.assertEqual(self.set_status("SHORTLISTED").status_code, 200)
        self.application.refresh_from_db()
        self.assertEqual(self.application.status, ApplicationStatus.SHORTLISTED)

    def test_non_chat_post_accept_does_not_enroll(self):
        post = make_post(self.company, title="No chat")
        app = services.apply(Actor(user=self.seeker), post.pk)
        self.set_status("ACCEPTED", application=app)
        self.assertFalse(ChatParticipant.objects.filter(user=self.seeker).exists())

    def test_invalid_status(self):
        for status in ("NOT_VIEWED", "HIRED", ""):
            with self.subTest(status=status):
                resp = self.set_status(status)
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.json()["message"], "Invalid status")

    def test_other_company_cannot_update(self):
        other = make_company(email="other@x.example", phone="0772000001")
        self.client.force_login(other)
        resp = self.set_status("VIEWED")
        self.assertEqual(resp.status_code, 404)
        with self.assertRaises(NotFoundError):
            services.update_applicant_status(Actor(user=other), self.application.pk, "VIEWED")

    def test_notification_failure_keeps_transition(self):
        with mock.patch.object(Notification.objects, "create", side_effect=DatabaseError("down")):
            resp = self.set_status("ACCEPTED")
        self.assertEqual(resp.status_code, 200)
        self.application.refresh_from_db()
        self.assertEqual(self.application.status, ApplicationStatus.ACCEPTED)
        self.assertTrue(ChatParticipant.objects.filter(user=self.seeker).exists())

    def test_list_applicants(self):
        resp = self.client.get(reverse("job_applicants", args=[self.post.pk]))
        body = resp.json()
        self.assertEqual(body["jobPost"]["id"], self.post.pk)
        self.assertEqual(body["applicants"][0]["jobSeeker"]["email"], "seeker@example.com")
        self.assertEqual(body["applicants"][0]["jobSeeker"]["profile"]["skills"], ["python"])

        body = self.client.get(reverse("job_applicants", args=[self.post.pk]), {"status": "accepted"}).json()
        self.assertEqual(body["applicants"], [])


class ApplicationTrackingTests(TestCase):
    def setUp(self):
        company = make_company()
        self.seeker = make_seeker()
        services.apply(Actor(user=self.seeker), make_post(company).pk)
        self.client.force_login(self.seeker)

    def test_requires_premium(self):
        resp = self.client.get(reverse("application_tracking"))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "Premium feature requires active subscription")

    def test_premium_tracking(self):
        self.seeker.subscription_status = User.SubscriptionStatus.ACTIVE
        self.seeker.save()
        body = self.client.get(reverse("application_tracking")).json()
        self.assertEqual(body["stats"]["total"], 1)
        self.assertEqual(body["stats"]["NOT_VIEWED"], 1)
        self.assertEqual(body["applications"][0]["timeline"][0]["status"], "NOT_VIEWED")
