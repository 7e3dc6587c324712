import random
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from accounts.decorators import Actor
from accounts.models import CompanyProfile, JobSeekerProfile, ProfileType
from jobs import services as job_services
from jobs.models import ApplicationStatus, ExperienceLevel, JobPost, JobType
from joblify.errors import ConflictError
from subscriptions import services as subscription_services

User = get_user_model()


class Command(BaseCommand):
    help = "Seed realistic demo/test data (companies, seekers, job posts, applications, invitations)."

    def add_arguments(self, parser):
        parser.add_argument("--prefix", type=str, default="demo")
        parser.add_argument("--companies", type=int, default=4)
        parser.add_argument("--jobseekers", type=int, default=10)
        parser.add_argument("--jobs-per-company", type=int, default=4)
        parser.add_argument("--applications-per-seeker", type=int, default=3)
        parser.add_argument("--password", type=str, default="DemoPass123")
        parser.add_argument("--seed", type=int, default=42)
        parser.add_argument("--wipe", action="store_true", help="Delete existing users starting with prefix before seeding.")

    def _skills(self, rnd, minimum=3, maximum=5):
        pool = [
            "python",
            "django",
            "postgresql",
            "react",
            "javascript",
            "docker",
            "aws",
            "linux",
            "sql",
            "figma",
            "accounting",
            "customer service",
            "data entry",
            "marketing",
            "excel",
            "git",
        ]
        return sorted(rnd.sample(pool, rnd.randint(minimum, maximum)))

    def _make_user(self, email, phone, role, password, **extra):
        user, _ = User.objects.get_or_create(
            email=email,
            defaults={"username": email, "phone": phone, "role": role, **extra},
        )
        # Keep demo credentials predictable.
        user.role = role
        user.is_active = True
        for key, value in extra.items():
            setattr(user, key, value)
        user.set_password(password)
        user.save()
        return user

    @transaction.atomic
    def handle(self, *args, **opts):
        rnd = random.Random(opts["seed"])
        prefix = (opts["prefix"] or "demo").strip().lower()
        companies_n = max(1, int(opts["companies"]))
        seekers_n = max(1, int(opts["jobseekers"]))
        jobs_per_company = max(1, int(opts["jobs_per_company"]))
        apps_per_seeker = max(0, int(opts["applications_per_seeker"]))
        password = opts["password"]

        if opts["wipe"]:
            User.objects.filter(email__startswith=f"{prefix}_").delete()

        company_names = [
            "Kampala Fintech Hub",
            "Nile Agro Solutions",
            "Pearl Health Systems",
            "Rwenzori Logistics",
            "Victoria Digital",
            "Entebbe Energy",
        ]
        industries = ["Technology", "Agriculture", "Healthcare", "Logistics", "Finance", "Energy"]
        educations = [
            "BSc Computer Science, Makerere University",
            "BCom Accounting, MUBS",
            "Diploma in Business Administration",
            "BSc Information Systems",
            "Certificate in Data Analysis",
        ]
        job_templates = [
            ("Backend Developer", "Build and maintain APIs and PostgreSQL schemas."),
            ("Frontend Engineer", "Develop responsive interfaces with modern JavaScript."),
            ("Data Analyst", "Turn operational data into dashboards and reports."),
            ("Accounts Assistant", "Support bookkeeping, reconciliations and payroll."),
            ("Field Sales Officer", "Grow the customer base across the central region."),
            ("Virtual Marketing Intern", "Run social media campaigns remotely with the marketing team."),
        ]
        locations = ["Kampala", "Entebbe", "Jinja", "Mbarara", "Gulu", "Remote"]

        companies = []
        created_posts = []
        now = timezone.now()

        for i in range(1, companies_n + 1):
            email = f"{prefix}_company_{i}@example.com"
            name = f"{company_names[(i - 1) % len(company_names)]} {i}"
            phone = f"0770{i:06d}"
            user = self._make_user(
                email,
                phone,
                User.Role.COMPANY,
                password,
                company_name=name,
                verification_status=User.VerificationStatus.VERIFIED,
            )
            CompanyProfile.objects.get_or_create(
                user=user,
                defaults={
                    "company_name": name,
                    "industry": industries[(i - 1) % len(industries)],
                    "company_size": rnd.choice(["1-10", "11-50", "51-200", "201-500"]),
                    "establishment_year": rnd.randint(1995, 2020),
                    "description": "Hiring across engineering, finance and operations teams.",
                    "phone": phone,
                    "email": email,
                    "address": f"Plot {10 + i}, {rnd.choice(locations[:-1])}",
                    "website": "https://example.com",
                    "contact_person_name": f"Demo Recruiter {i}",
                    "contact_person_position": "HR Manager",
                },
            )
            companies.append(user)
            actor = Actor(user=user)

            for j in range(1, jobs_per_company + 1):
                title_base, description = job_templates[(i + j - 2) % len(job_templates)]
                title = f"{title_base} - Team {i}.{j}"
                post = JobPost.objects.filter(company=user, title=title).first()
                if post is None:
                    salary_min = rnd.randint(800_000, 3_000_000)
                    post = job_services.create_job_post(
                        actor,
                        {
                            "title": title,
                            "description": description,
                            "industry": industries[(i - 1) % len(industries)],
                            "jobType": rnd.choice(JobType.values),
                            "location": rnd.choice(locations),
                            "salaryMin": salary_min,
                            "salaryMax": salary_min + rnd.randint(200_000, 1_500_000),
                            "salaryRange": "UGX monthly",
                            "skillsRequired": self._skills(rnd, 2, 4),
                            "requirements": ["Valid national ID", "Good communication skills"],
                            "benefits": ["Medical cover", "Flexible hours"],
                            "experienceLevel": rnd.choice(ExperienceLevel.values),
                            "isRemote": rnd.random() < 0.3,
                            "applicationDeadline": now + timedelta(days=rnd.randint(14, 60)),
                            "hasChatArea": rnd.random() < 0.5,
                        },
                    )
                created_posts.append(post)

        seekers = []
        for i in range(1, seekers_n + 1):
            email = f"{prefix}_seeker_{i}@example.com"
            user = self._make_user(
                email,
                f"0780{i:06d}",
                User.Role.JOB_SEEKER,
                password,
                first_name="Demo",
                last_name=f"Seeker {i}",
            )
            JobSeekerProfile.objects.update_or_create(
                user=user,
                defaults={
                    "profile_type": rnd.choice(ProfileType.values),
                    "bio": "Motivated graduate looking for opportunities to grow.",
                    "skills": self._skills(rnd),
                    "education": educations[(i - 1) % len(educations)],
                    "visibility": JobSeekerProfile.Visibility.PUBLIC,
                },
            )
            seekers.append(user)

        applications = 0
        for seeker in seekers:
            actor = Actor(user=seeker)
            for post in rnd.sample(created_posts, k=min(apps_per_seeker, len(created_posts))):
                try:
                    application = job_services.apply(
                        actor,
                        post.pk,
                        cover_letter="I am interested in this role and believe my background is a strong fit.",
                    )
                except ConflictError:
                    continue
                applications += 1
                status = rnd.choices(
                    [None, ApplicationStatus.VIEWED, ApplicationStatus.SHORTLISTED, ApplicationStatus.ACCEPTED],
                    weights=[40, 25, 20, 15],
                    k=1,
                )[0]
                if status:
                    job_services.update_applicant_status(Actor(user=post.company), application.pk, status, "Seeded")

        invitations = 0
        for company in companies:
            for seeker in rnd.sample(seekers, k=min(2, len(seekers))):
                try:
                    subscription_services.invite(
                        Actor(user=company),
                        seeker.pk,
                        rnd.choice(ProfileType.values),
                        "We would love to have you in our talent pool.",
                    )
                except ConflictError:
                    continue
                invitations += 1

        self.stdout.write(self.style.SUCCESS("Seeded demo data successfully."))
        self.stdout.write(f"Created/updated companies: {companies_n}")
        self.stdout.write(f"Created/updated job seekers: {seekers_n}")
        self.stdout.write(f"Job posts: {len(created_posts)}")
        self.stdout.write(f"New applications: {applications}")
        self.stdout.write(f"New invitations: {invitations}")
        self.stdout.write("")
        self.stdout.write("Sample credentials:")
        for user in (companies[:2] + seekers[:2]):
            self.stdout.write(f"  {user.email} / {password}")
