from django import forms

from joblify.formfields import StringListField
from .models import Resume


class ResumeForm(forms.ModelForm):
    skills = StringListField(required=False)

    class Meta:
        model = Resume
        fields = ["title", "summary", "experience", "education", "skills", "file"]

    def clean(self):
        cleaned = super().clean()
        if not any(cleaned.get(name) for name in ("summary", "experience", "file")):
            raise forms.ValidationError("Provide a resume file or fill in your summary or experience")
        return cleaned
