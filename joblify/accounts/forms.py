import re

from django import forms

from joblify.formfields import StringListField
from .models import JobSeekerProfile, ProfileType

# Ugandan mobile numbers: 07XXXXXXXX / 01XXXXXXXX or +256 / 256 prefixed.
PHONE_RE = re.compile(r"^(\+?256|0)[17]\d{8}$")


def _check_password(password: str, confirm: str) -> None:
    if password != confirm:
        raise forms.ValidationError("Passwords do not match")
    if len(password) < 8 or not re.search(r"\d", password) or not re.search(r"[a-zA-Z]", password):
        raise forms.ValidationError("Password must be at least 8 characters with letters and numbers")


class JobSeekerRegistrationForm(forms.Form):
    required_message = {"required": "All fields are required"}

    firstName = forms.CharField(max_length=150, error_messages=required_message)
    lastName = forms.CharField(max_length=150, error_messages=required_message)
    email = forms.EmailField(error_messages={**required_message, "invalid": "Please provide a valid email address"})
    phoneNumber = forms.CharField(max_length=20, error_messages=required_message)
    password = forms.CharField(strip=False, error_messages=required_message)
    confirmPassword = forms.CharField(strip=False, error_messages=required_message)
    agreeToTerms = forms.BooleanField(
        required=False,
    )

    def clean_phoneNumber(self):
        phone = self.cleaned_data["phoneNumber"].strip()
        if not PHONE_RE.match(phone):
            raise forms.ValidationError("Please provide a valid Ugandan phone number")
        return phone

    def clean_email(self):
        return self.cleaned_data["email"].strip().lower()

    def clean(self):
        cleaned = super().clean()
        if self.errors:
            return cleaned
        if not cleaned.get("agreeToTerms"):
            raise forms.ValidationError("You must agree to the terms and conditions")
        _check_password(cleaned["password"], cleaned["confirmPassword"])
        return cleaned


class CompanyRegistrationForm(forms.Form):
    companyName = forms.CharField(max_length=150, error_messages={"required": "company name is required"})
    email = forms.EmailField(error_messages={"required": "email is required", "invalid": "Please provide a valid email address"})
    password = forms.CharField(strip=False, error_messages={"required": "password is required"})
    confirmPassword = forms.CharField(strip=False, error_messages={"required": "confirm password is required"})
    industry = forms.CharField(max_length=100, error_messages={"required": "industry is required"})
    phone = forms.CharField(max_length=20, error_messages={"required": "phone is required"})
    address = forms.CharField(max_length=255, error_messages={"required": "address is required"})
    companySize = forms.CharField(max_length=50, error_messages={"required": "company size is required"})
    establishmentYear = forms.IntegerField(
        min_value=1800,
        max_value=2100,
        error_messages={"required": "establishment year is required", "invalid": "establishment year must be a number"},
    )
    description = forms.CharField(error_messages={"required": "description is required"})
    contactPersonName = forms.CharField(max_length=150, error_messages={"required": "contact person name is required"})
    contactPersonPosition = forms.CharField(
        max_length=150, error_messages={"required": "contact person position is required"}
    )
    website = forms.URLField(required=False)
    linkedin = forms.URLField(required=False)
    agreeToTerms = forms.BooleanField(error_messages={"required": "agree to terms is required"})

    def clean_phone(self):
        phone = self.cleaned_data["phone"].strip()
        if not PHONE_RE.match(phone):
            raise forms.ValidationError("Please provide a valid Ugandan phone number")
        return phone

    def clean_email(self):
        return self.cleaned_data["email"].strip().lower()

    def clean(self):
        cleaned = super().clean()
        if self.errors:
            return cleaned
        _check_password(cleaned["password"], cleaned["confirmPassword"])
        return cleaned


class LoginForm(forms.Form):
    email = forms.CharField(error_messages={"required": "Email and password are required"})
    password = forms.CharField(strip=False, error_messages={"required": "Email and password are required"})


class JobSeekerProfileForm(forms.Form):
    profileType = forms.ChoiceField(
        choices=ProfileType.choices,
        error_messages={"required": "Profile type is required", "invalid_choice": "Invalid profile type"},
    )
    bio = forms.CharField(error_messages={"required": "Bio is required"})
    education = forms.CharField(max_length=255, error_messages={"required": "Education information is required"})
    skills = StringListField(error_messages={"required": "At least one skill is required"})
    experience = forms.CharField(required=False)
    certifications = StringListField(required=False)
    portfolio = forms.URLField(required=False)
    visibility = forms.ChoiceField(
        choices=JobSeekerProfile.Visibility.choices,
        required=False,
        error_messages={"invalid_choice": "Visibility must be PUBLIC or PRIVATE"},
    )


class PrivacySettingsForm(forms.Form):
    firstName = forms.CharField(max_length=150, required=False)
    lastName = forms.CharField(max_length=150, required=False)
    phone = forms.CharField(max_length=20, required=False)
    privacySettings = forms.JSONField(required=False)

    def clean_phone(self):
        phone = (self.cleaned_data.get("phone") or "").strip()
        if phone and not PHONE_RE.match(phone):
            raise forms.ValidationError("Please provide a valid Ugandan phone number")
        return phone

    def clean_privacySettings(self):
        value = self.cleaned_data.get("privacySettings")
        if value is not None and not isinstance(value, dict):
            raise forms.ValidationError("Privacy settings must be an object")
        return value
