from accounts.decorators import login_required
from joblify.http import api_view, ok, paginate, parse_body
from . import services
from .payloads import chat_area_payload, chat_message_payload


@api_view(["GET"])
@login_required
def chat_areas(request, actor):
    areas = services.list_chat_areas(actor)
    return ok({"chatAreas": [chat_area_payload(a) for a in areas]})


@api_view(["GET", "POST"])
@login_required
def chat_messages(request, actor, chat_area_id):
    if request.method == "POST":
        body = parse_body(request)
        msg = services.send_message(actor, chat_area_id, body.get("content"))
        return ok({"chatMessage": chat_message_payload(msg)}, message="Message sent successfully", status=201)

    area, qs = services.list_messages(actor, chat_area_id)
    items, pagination = paginate(request, qs)
    return ok(
        {
            "chatArea": chat_area_payload(area),
            "messages": [chat_message_payload(m) for m in items],
            "pagination": pagination,
        }
    )
