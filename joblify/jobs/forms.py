from django import forms

from joblify.formfields import StringListField
from .models import SETTABLE_STATUSES, ExperienceLevel, JobType

REQUIRED_POST_FIELDS = ("title", "description", "industry", "jobType", "applicationDeadline")
REQUIRED_POST_MESSAGE = "Title, description, industry, job type, and deadline are required"


class JobPostForm(forms.Form):
    """Create/update payload for a job post.

    With ``partial=True`` every field is optional and only the keys present in
    the request body are reported by ``supplied_data``.
    """

    title = forms.CharField(max_length=255)
    description = forms.CharField()
    industry = forms.CharField(max_length=100)
    jobType = forms.ChoiceField(choices=JobType.choices, error_messages={"invalid_choice": "Invalid job type"})
    location = forms.CharField(max_length=255, required=False)
    salaryRange = forms.CharField(max_length=100, required=False)
    salaryMin = forms.IntegerField(min_value=0, required=False)
    salaryMax = forms.IntegerField(min_value=0, required=False)
    requirements = StringListField(required=False)
    skillsRequired = StringListField(required=False)
    benefits = StringListField(required=False)
    experienceLevel = forms.ChoiceField(
        choices=ExperienceLevel.choices,
        required=False,
        error_messages={"invalid_choice": "Invalid experience level"},
    )
    isRemote = forms.BooleanField(required=False)
    applicationDeadline = forms.DateTimeField(error_messages={"invalid": "Invalid application deadline"})
    hasChatArea = forms.BooleanField(required=False)

    def __init__(self, *args, partial: bool = False, **kwargs):
        super().__init__(*args, **kwargs)
        self.partial = partial
        for name in REQUIRED_POST_FIELDS:
            field = self.fields[name]
            if partial:
                field.required = False
            else:
                field.error_messages["required"] = REQUIRED_POST_MESSAGE

    def clean(self):
        cleaned = super().clean()
        lo, hi = cleaned.get("salaryMin"), cleaned.get("salaryMax")
        if lo is not None and hi is not None and lo > hi:
            self.add_error("salaryMax", "Maximum salary must be greater than minimum salary")
        return cleaned

    def supplied_data(self) -> dict:
        if not self.partial:
            return dict(self.cleaned_data)
        return {k: v for k, v in self.cleaned_data.items() if k in self.data}


class ApplyForm(forms.Form):
    resumeId = forms.IntegerField(required=False)
    coverLetter = forms.CharField(required=False)
    customResume = forms.JSONField(required=False)

    def clean_customResume(self):
        value = self.cleaned_data.get("customResume")
        if value is not None and not isinstance(value, dict):
            raise forms.ValidationError("Custom resume must be an object")
        return value


class ApplicantStatusForm(forms.Form):
    status = forms.ChoiceField(
        choices=[(s.value, s.label) for s in SETTABLE_STATUSES],
        error_messages={"required": "Invalid status", "invalid_choice": "Invalid status"},
    )
    notes = forms.CharField(max_length=255, required=False)
