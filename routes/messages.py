import azure.functions as func
import logging
from utils.cors import cors_response, json_response, error_response
from auth.deps import resolve_identity
from db import SessionLocal
from services.errors import InvalidInput, ServiceError
from services import message_service as msg_svc

logger = logging.getLogger(__name__)
bp = func.Blueprint()


def _read_body(req: func.HttpRequest) -> dict:
    try:
        body = req.get_json()
    except ValueError:
        raise InvalidInput("Invalid JSON body")
    if not isinstance(body, dict):
        raise InvalidInput("Invalid JSON body")
    return body


# ────────────────────────────────────────────────────────────
#  /messages/conversations  (inbox)
# ────────────────────────────────────────────────────────────
@bp.function_name(name="ListMessageConversations")
@bp.route(route="messages/conversations",
          methods=["GET", "OPTIONS"],
          auth_level=func.AuthLevel.ANONYMOUS)
def list_conversations(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return cors_response(status=204)

    try:
        identity = resolve_identity(req)
        with SessionLocal() as db:
            items = msg_svc.list_conversations(db, identity.id)
        return json_response(items)
    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception:
        logger.exception("Failed to list conversations")
        return error_response("Error getting conversations", 500)


# ────────────────────────────────────────────────────────────
#  /messages/unread-count
# ────────────────────────────────────────────────────────────
@bp.function_name(name="UnreadMessageCount")
@bp.route(route="messages/unread-count",
          methods=["GET", "OPTIONS"],
          auth_level=func.AuthLevel.ANONYMOUS)
def unread_count(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return cors_response(status=204)

    try:
        identity = resolve_identity(req)
        with SessionLocal() as db:
            count = msg_svc.count_unread(db, identity.id)
        return json_response({"unreadCount": count})
    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception:
        logger.exception("Failed to fetch unread message count")
        return error_response("Failed to fetch unread message count", 500)


# ────────────────────────────────────────────────────────────
#  /messages/start
# ────────────────────────────────────────────────────────────
@bp.function_name(name="StartConversation")
@bp.route(route="messages/start",
          methods=["POST", "OPTIONS"],
          auth_level=func.AuthLevel.ANONYMOUS)
def start_conversation(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return cors_response(status=204)

    try:
        identity = resolve_identity(req)
        body = _read_body(req)
        with SessionLocal() as db:
            message = msg_svc.start_conversation(
                db,
                identity,
                receiver_id=body.get("receiver_id"),
                property_id=body.get("property_id"),
                content=body.get("content"),
            )
        return json_response(message, 201)
    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception:
        logger.exception("Failed to start conversation")
        return error_response("Error starting conversation", 500)


# ────────────────────────────────────────────────────────────
#  /messages  (reply into an existing conversation)
# ────────────────────────────────────────────────────────────
@bp.function_name(name="SendMessage")
@bp.route(route="messages",
          methods=["POST", "OPTIONS"],
          auth_level=func.AuthLevel.ANONYMOUS)
def send_message(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return cors_response(status=204)

    try:
        identity = resolve_identity(req)
        body = _read_body(req)
        with SessionLocal() as db:
            message = msg_svc.send_message(
                db,
                identity.id,
                conversation_id=body.get("conversation_id"),
                receiver_id=body.get("receiver_id"),
                property_id=body.get("property_id"),
                content=body.get("content"),
            )
        return json_response(message, 201)
    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception:
        logger.exception("Failed to send message")
        return error_response("Error sending message", 500)


# ────────────────────────────────────────────────────────────
#  /messages/{conversation_id}  (thread)
# ────────────────────────────────────────────────────────────
@bp.function_name(name="GetConversationThread")
@bp.route(route="messages/{conversation_id}",
          methods=["GET", "OPTIONS"],
          auth_level=func.AuthLevel.ANONYMOUS)
def get_thread(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return cors_response(status=204)

    conversation_id = req.route_params.get("conversation_id")
    try:
        identity = resolve_identity(req)
        with SessionLocal() as db:
            thread = msg_svc.get_thread(db, identity.id, conversation_id)
        return json_response(thread)
    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception:
        logger.exception(f"Failed to get messages for conversation {conversation_id}")
        return error_response("Error getting messages", 500)
