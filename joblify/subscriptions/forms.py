from django import forms

from accounts.models import ProfileType

PROFILE_TYPE_ERRORS = {
    "required": "Valid profile type is required (EMPLOYABLE or VIRTUAL_INTERN)",
    "invalid_choice": "Valid profile type is required (EMPLOYABLE or VIRTUAL_INTERN)",
}


class SubscribeForm(forms.Form):
    profileType = forms.ChoiceField(choices=ProfileType.choices, error_messages=PROFILE_TYPE_ERRORS)


class InviteForm(forms.Form):
    profileType = forms.ChoiceField(choices=ProfileType.choices, error_messages=PROFILE_TYPE_ERRORS)
    message = forms.CharField(required=False, max_length=2000)


class InvitationResponseForm(forms.Form):
    action = forms.ChoiceField(
        choices=[("accept", "Accept"), ("decline", "Decline")],
        error_messages={
            "required": "Action must be 'accept' or 'decline'",
            "invalid_choice": "Action must be 'accept' or 'decline'",
        },
    )


class ShareJobForm(forms.Form):
    jobPostId = forms.IntegerField(error_messages={"required": "Job post is required", "invalid": "Invalid job post"})
