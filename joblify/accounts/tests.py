from unittest import mock

from django.db import DatabaseError
from django.test import Client, TestCase
from django.urls import reverse

from .models import CompanyProfile, JobSeekerProfile, LoginSession, Notification, User
from .notifications import notify


def make_seeker(email="seeker@example.com", phone="0712345678", password="secret123", **extra):
    return User.objects.create_user(
        username=email, email=email, password=password, phone=phone, role=User.Role.JOB_SEEKER, **extra
    )


def make_company(email="hr@acme.example", phone="0772000000", password="secret123", **extra):
    user = User.objects.create_user(
        username=email,
        email=email,
        password=password,
        phone=phone,
        role=User.Role.COMPANY,
        company_name=extra.pop("company_name", "Acme Ltd"),
        **extra,
    )
    CompanyProfile.objects.create(user=user, company_name=user.company_name, industry="Technology", company_size="11-50")
    return user


SEEKER_PAYLOAD = {
    "firstName": "Amina",
    "lastName": "Nakato",
    "email": "Amina@Example.com",
    "phoneNumber": "0712345678",
    "password": "secret123",
    "confirmPassword": "secret123",
    "agreeToTerms": True,
}

COMPANY_PAYLOAD = {
    "companyName": "Acme Ltd",
    "email": "hr@acme.example",
    "password": "secret123",
    "confirmPassword": "secret123",
    "industry": "Technology",
    "phone": "+256772000000",
    "address": "Plot 1, Kampala Road",
    "companySize": "11-50",
    "establishmentYear": 2012,
    "description": "We build things.",
    "contactPersonName": "Jane Doe",
    "contactPersonPosition": "HR Manager",
    "agreeToTerms": True,
}


class RegistrationTests(TestCase):
    def post(self, name, payload):
        return self.client.post(reverse(name), payload, content_type="application/json")

    def test_register_jobseeker_creates_account_and_profile(self):
        resp = self.post("register_jobseeker", SEEKER_PAYLOAD)
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["user"]["email"], "amina@example.com")

        user = User.objects.get(email="amina@example.com")
        self.assertEqual(user.role, User.Role.JOB_SEEKER)
        self.assertEqual(user.verification_status, User.VerificationStatus.PENDING)
        self.assertTrue(user.check_password("secret123"))
        self.assertEqual(user.jobseeker_profile.profile_type, "EMPLOYABLE")

    def test_duplicate_phone_is_rejected(self):
        self.assertEqual(self.post("register_jobseeker", SEEKER_PAYLOAD).status_code, 201)

        resp = self.post("register_jobseeker", {**SEEKER_PAYLOAD, "email": "other@example.com"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "User with this phone number already exists")
        self.assertEqual(User.objects.count(), 1)

    def test_duplicate_email_is_rejected(self):
        self.post("register_jobseeker", SEEKER_PAYLOAD)
        resp = self.post("register_jobseeker", {**SEEKER_PAYLOAD, "phoneNumber": "0787654321"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "User with this email already exists")

    def test_missing_field(self):
        payload = {k: v for k, v in SEEKER_PAYLOAD.items() if k != "lastName"}
        resp = self.post("register_jobseeker", payload)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "All fields are required")
        self.assertNotIn("error", resp.json())

    def test_terms_passwords_and_phone_rules(self):
        cases = [
            ({"agreeToTerms": False}, "You must agree to the terms and conditions"),
            ({"confirmPassword": "secret124"}, "Passwords do not match"),
            ({"password": "short1", "confirmPassword": "short1"}, "Password must be at least 8 characters with letters and numbers"),
            ({"password": "onlyletters", "confirmPassword": "onlyletters"}, "Password must be at least 8 characters with letters and numbers"),
            ({"phoneNumber": "0912345678"}, "Please provide a valid Ugandan phone number"),
        ]
        for override, message in cases:
            with self.subTest(message=message, override=override):
                resp = self.post("register_jobseeker", {**SEEKER_PAYLOAD, **override})
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.json()["message"], message)
        self.assertFalse(User.objects.exists())

    def test_register_company(self):
        resp = self.post("register_company", COMPANY_PAYLOAD)
        self.assertEqual(resp.status_code, 201)
        user = User.objects.get(email="hr@acme.example")
        self.assertTrue(user.is_company)
        self.assertEqual(user.company_profile.contact_person_name, "Jane Doe")
        self.assertEqual(user.company_profile.establishment_year, 2012)

    def test_register_company_names_missing_field(self):
        payload = {k: v for k, v in COMPANY_PAYLOAD.items() if k != "industry"}
        resp = self.post("register_company", payload)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "industry is required")

    def test_register_company_duplicate_email(self):
        make_seeker(email="hr@acme.example", phone="0711111111")
        resp = self.post("register_company", COMPANY_PAYLOAD)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Company with this email already exists")

    def test_invalid_json_body(self):
        resp = self.client.post(reverse("register_jobseeker"), "{not json", content_type="application/json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Request body must be valid JSON")


class SessionTests(TestCase):
    def setUp(self):
        self.user = make_seeker()

    def login(self, client=None):
        client = client or self.client
        return client.post(
            reverse("login"),
            {"email": "SEEKER@example.com", "password": "secret123"},
            content_type="application/json",
        )

    def test_login_success_records_session(self):
        resp = self.login()
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["message"], "Login successful")
        self.assertEqual(body["redirectTo"], "/jobseeker/dashboard")
        self.assertEqual(LoginSession.objects.filter(user=self.user, is_active=True).count(), 1)

    def test_login_ignores_malformed_forwarded_for(self):
        resp = self.client.post(
            reverse("login"),
            {"email": "seeker@example.com", "password": "secret123"},
            content_type="application/json",
            HTTP_X_FORWARDED_FOR="unknown, 10.0.0.1",
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(LoginSession.objects.get(user=self.user).ip_address, "127.0.0.1")

    def test_login_records_forwarded_ip(self):
        self.client.post(
            reverse("login"),
            {"email": "seeker@example.com", "password": "secret123"},
            content_type="application/json",
            HTTP_X_FORWARDED_FOR="203.0.113.7, 10.0.0.1",
        )
        self.assertEqual(LoginSession.objects.get(user=self.user).ip_address, "203.0.113.7")

    def test_login_failure(self):
        resp = self.client.post(
            reverse("login"), {"email": "seeker@example.com", "password": "wrong"}, content_type="application/json"
        )
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "Invalid email or password")

    def test_login_requires_both_fields(self):
        resp = self.client.post(reverse("login"), {"email": "seeker@example.com"}, content_type="application/json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Email and password are required")

    def test_protected_route_requires_session(self):
        resp = self.client.get(reverse("jobseeker_dashboard"))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"success": False, "message": "Not authenticated"})

    def test_wrong_role_is_forbidden(self):
        self.login()
        resp = self.client.get(reverse("company_dashboard"))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "Only companies can perform this action")

    def test_method_not_allowed(self):
        resp = self.client.get(reverse("login"))
        self.assertEqual(resp.status_code, 405)
        self.assertFalse(resp.json()["success"])

    def test_logout_deactivates_login_session(self):
        self.login()
        self.client.post(reverse("logout"))
        self.assertFalse(LoginSession.objects.filter(user=self.user, is_active=True).exists())
        self.assertEqual(self.client.get(reverse("login_activity")).status_code, 401)

    def test_signout_all_revokes_other_devices(self):
        other = Client()
        self.login()
        self.login(other)
        self.assertEqual(other.get(reverse("login_activity")).status_code, 200)

        resp = self.client.post(reverse("signout_all"))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "Signed out from all devices successfully")

        resp = other.get(reverse("login_activity"))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "Session has been signed out")

    def test_login_activity_lists_recent_logins(self):
        self.login()
        self.login()
        resp = self.client.get(reverse("login_activity"))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()["loginActivity"]), 2)


class ProfileAndPrivacyTests(TestCase):
    def setUp(self):
        self.user = make_seeker()
        self.client.force_login(self.user)

    def test_profile_requires_skill(self):
        resp = self.client.post(
            reverse("save_jobseeker_profile"),
            {"profileType": "EMPLOYABLE", "bio": "Hello", "education": "BSc"},
            content_type="application/json",
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "At least one skill is required")

    def test_profile_upsert(self):
        url = reverse("save_jobseeker_profile")
        payload = {"profileType": "VIRTUAL_INTERN", "bio": "Hello", "education": "BSc", "skills": "python, Django, python"}
        resp = self.client.post(url, payload, content_type="application/json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["profile"]["skills"], ["python", "Django"])
        self.assertEqual(resp.json()["profile"]["visibility"], "PRIVATE")

        payload.update({"skills": ["sql"], "visibility": "PUBLIC"})
        self.client.post(url, payload, content_type="application/json")
        profile = JobSeekerProfile.objects.get(user=self.user)
        self.assertEqual(profile.skills, ["sql"])
        self.assertEqual(profile.visibility, "PUBLIC")
        self.assertEqual(JobSeekerProfile.objects.filter(user=self.user).count(), 1)

    def test_company_cannot_create_jobseeker_profile(self):
        company = make_company()
        self.client.force_login(company)
        resp = self.client.post(
            reverse("save_jobseeker_profile"),
            {"profileType": "EMPLOYABLE", "bio": "x", "education": "y", "skills": ["z"]},
            content_type="application/json",
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "Only job seekers can create profiles")

    def test_privacy_settings_round(self):
        url = reverse("privacy_settings")
        resp = self.client.put(
            url,
            {"firstName": "Amina", "privacySettings": {"showPhone": False}},
            content_type="application/json",
        )
        self.assertEqual(resp.status_code, 200)
        data = self.client.get(url).json()["user"]
        self.assertEqual(data["firstName"], "Amina")
        self.assertEqual(data["privacySettings"], {"showPhone": False})

    def test_privacy_settings_phone_taken(self):
        make_seeker(email="b@example.com", phone="0787654321")
        resp = self.client.put(reverse("privacy_settings"), {"phone": "0787654321"}, content_type="application/json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "User with this phone number already exists")


class ListingTests(TestCase):
    def setUp(self):
        self.verified = make_company(verification_status=User.VerificationStatus.VERIFIED, company_name="Nile Agro")
        make_company(email="pending@x.example", phone="0772000001", company_name="Pending Co")

        self.public = make_seeker(email="pub@example.com", phone="0711000001", first_name="Public")
        JobSeekerProfile.objects.create(
            user=self.public, bio="Analyst", skills=["python", "sql"], visibility=JobSeekerProfile.Visibility.PUBLIC
        )
        hidden = make_seeker(email="priv@example.com", phone="0711000002")
        JobSeekerProfile.objects.create(user=hidden, skills=["python"], visibility=JobSeekerProfile.Visibility.PRIVATE)

    def test_companies_lists_verified_only(self):
        self.client.force_login(self.public)
        resp = self.client.get(reverse("jobseeker_companies"))
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual([c["companyName"] for c in body["companies"]], ["Nile Agro"])
        self.assertEqual(body["companies"][0]["id"], self.verified.pk)
        self.assertEqual(body["pagination"], {"page": 1, "limit": 10, "total": 1, "pages": 1})

    def test_jobseekers_lists_public_profiles_with_skill_filter(self):
        self.client.force_login(self.verified)
        resp = self.client.get(reverse("company_jobseekers"), {"skills": "sql,go"})
        ids = [s["id"] for s in resp.json()["jobseekers"]]
        self.assertEqual(ids, [self.public.pk])

        resp = self.client.get(reverse("company_jobseekers"), {"skills": "go"})
        self.assertEqual(resp.json()["jobseekers"], [])

    def test_pagination_limit_is_capped(self):
        self.client.force_login(self.public)
        resp = self.client.get(reverse("jobseeker_companies"), {"limit": 1000, "page": 3})
        body = resp.json()
        self.assertEqual(body["pagination"]["limit"], 100)
        self.assertEqual(body["companies"], [])


class NotificationTests(TestCase):
    def setUp(self):
        self.user = make_seeker()
        self.client.force_login(self.user)

    def test_notify_failure_is_swallowed(self):
        with mock.patch.object(Notification.objects, "create", side_effect=DatabaseError("boom")):
            self.assertIsNone(notify(self.user, Notification.Kind.INVITATION, "Title"))
        self.assertFalse(Notification.objects.exists())

    def test_list_and_mark_read(self):
        first = notify(self.user, Notification.Kind.INVITATION, "One", "msg", related_id=7)
        notify(self.user, Notification.Kind.JOB_SHARED, "Two")

        body = self.client.get(reverse("notifications_list")).json()
        self.assertEqual(body["unreadCount"], 2)
        self.assertEqual(body["notifications"][0]["title"], "Two")
        self.assertEqual(body["notifications"][1]["relatedId"], "7")

        resp = self.client.post(reverse("notification_mark_read", args=[first.pk]))
        self.assertTrue(resp.json()["notification"]["isRead"])
        body = self.client.get(reverse("notifications_list"), {"unread": "true"}).json()
        self.assertEqual([n["title"] for n in body["notifications"]], ["Two"])

        self.client.post(reverse("notifications_mark_all_read"))
        self.assertFalse(Notification.objects.filter(user=self.user, is_read=False).exists())

    def test_cannot_read_someone_elses_notification(self):
        other = make_seeker(email="o@example.com", phone="0700000001")
        notif = notify(other, Notification.Kind.INVITATION, "Private")
        resp = self.client.post(reverse("notification_mark_read", args=[notif.pk]))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Notification not found")


class DashboardTests(TestCase):
    def test_jobseeker_dashboard(self):
        user = make_seeker()
        JobSeekerProfile.objects.create(user=user, bio="Hi")
        notify(user, Notification.Kind.INVITATION, "Hello")
        self.client.force_login(user)
        body = self.client.get(reverse("jobseeker_dashboard")).json()["dashboard"]
        self.assertEqual(body["stats"], {"applications": 0, "subscriptions": 0, "unreadNotifications": 1})
        self.assertEqual(body["profile"]["bio"], "Hi")

    def test_company_dashboard(self):
        company = make_company()
        self.client.force_login(company)
        body = self.client.get(reverse("company_dashboard")).json()["dashboard"]
        self.assertEqual(body["company"]["companyName"], "Acme Ltd")
        self.assertEqual(body["stats"]["activeJobs"], 0)
        self.assertEqual(body["recentJobs"], [])


class HealthTests(TestCase):
    def test_health(self):
        resp = self.client.get(reverse("health"))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "OK")

    def test_db_health(self):
        resp = self.client.get(reverse("db_health"))
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["success"])

    def test_unknown_route(self):
        resp = self.client.get("/api/does-not-exist")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"success": False, "message": "Route /api/does-not-exist not found"})
