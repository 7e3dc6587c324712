from accounts.decorators import company_required, jobseeker_required
from joblify.http import api_view, ok, paginate, parse_body, raise_for_form
from . import services
from .forms import InvitationResponseForm, InviteForm, ShareJobForm, SubscribeForm
from .models import Invitation
from .payloads import invitation_payload, subscription_payload


@api_view(["POST"])
@jobseeker_required
def subscribe(request, actor, company_id):
    form = SubscribeForm(parse_body(request))
    raise_for_form(form)
    profile_type = form.cleaned_data["profileType"]
    subscription = services.subscribe(actor, company_id, profile_type)
    return ok(
        {"subscription": subscription_payload(subscription, with_company=True)},
        message=f"Successfully subscribed as {profile_type}",
        status=201,
    )


@api_view(["GET"])
@jobseeker_required
def invitations(request, actor):
    status = (request.GET.get("status") or "").strip().upper()
    if status not in Invitation.Status.values:
        status = None
    items, pagination = paginate(request, services.list_invitations(actor, status))
    return ok(
        {
            "invitations": [invitation_payload(inv, with_company=True) for inv in items],
            "pagination": pagination,
        }
    )


@api_view(["POST"])
@jobseeker_required
def respond_to_invitation(request, actor, invitation_id):
    form = InvitationResponseForm(parse_body(request))
    raise_for_form(form)
    invitation, subscription = services.respond_to_invitation(actor, invitation_id, form.cleaned_data["action"])
    if subscription is None:
        return ok({"invitation": invitation_payload(invitation)}, message="Invitation declined.")
    return ok(
        {
            "invitation": invitation_payload(invitation),
            "subscription": subscription_payload(subscription),
        },
        message=f"Invitation accepted. You are now subscribed as {invitation.profile_type}.",
    )


@api_view(["POST"])
@company_required
def invite(request, actor, job_seeker_id):
    form = InviteForm(parse_body(request))
    raise_for_form(form)
    invitation = services.invite(
        actor, job_seeker_id, form.cleaned_data["profileType"], form.cleaned_data.get("message") or ""
    )
    return ok({"invitation": invitation_payload(invitation)}, message="Invitation sent successfully", status=201)


@api_view(["POST"])
@company_required
def share_job(request, actor, job_seeker_id):
    form = ShareJobForm(parse_body(request))
    raise_for_form(form)
    services.share_job(actor, job_seeker_id, form.cleaned_data["jobPostId"])
    return ok(message="Job shared successfully")
