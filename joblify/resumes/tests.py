import shutil
import tempfile

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.urls import reverse

from accounts.models import User
from .models import Resume

MEDIA_ROOT = tempfile.mkdtemp()


@override_settings(MEDIA_ROOT=MEDIA_ROOT)
class ResumeTests(TestCase):
    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(MEDIA_ROOT, ignore_errors=True)
        super().tearDownClass()

    def setUp(self):
        self.seeker = User.objects.create_user(
            username="seeker@example.com",
            email="seeker@example.com",
            password="secret123",
            phone="0712345678",
            role=User.Role.JOB_SEEKER,
        )
        self.client.force_login(self.seeker)

    def test_create_from_json(self):
        resp = self.client.post(
            reverse("resumes"),
            {"title": "General", "summary": "Backend developer", "skills": "python, sql"},
            content_type="application/json",
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["message"], "Resume saved successfully")
        resume = Resume.objects.get()
        self.assertEqual(resume.owner, self.seeker)
        self.assertEqual(resume.skills, ["python", "sql"])
        self.assertFalse(resume.custom)

    def test_upload_file(self):
        upload = SimpleUploadedFile("cv.pdf", b"%PDF-1.4 demo", content_type="application/pdf")
        resp = self.client.post(reverse("resumes"), {"title": "CV", "file": upload})
        self.assertEqual(resp.status_code, 201)
        self.assertTrue(resp.json()["resume"]["file"].endswith(".pdf"))

    def test_empty_resume_rejected(self):
        resp = self.client.post(reverse("resumes"), {"title": "Nothing"}, content_type="application/json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Provide a resume file or fill in your summary or experience")

    def test_list_hides_custom_resumes_by_default(self):
        Resume.objects.create(owner=self.seeker, title="Main", summary="x")
        Resume.objects.create(owner=self.seeker, title="Custom Resume for X", summary="y", custom=True)

        body = self.client.get(reverse("resumes")).json()
        self.assertEqual([r["title"] for r in body["resumes"]], ["Main"])

        body = self.client.get(reverse("resumes"), {"custom": "true"}).json()
        self.assertEqual(body["pagination"]["total"], 2)

    def test_company_cannot_manage_resumes(self):
        company = User.objects.create_user(
            username="hr@acme.example",
            email="hr@acme.example",
            password="secret123",
            phone="0772000000",
            role=User.Role.COMPANY,
        )
        self.client.force_login(company)
        self.assertEqual(self.client.get(reverse("resumes")).status_code, 403)
