# services/message_service.py
from __future__ import annotations
import logging
import uuid
from typing import Dict, List, Optional
from sqlalchemy import or_, func as sa_func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from auth.deps import Identity
from models import Message, Property, User, UserRole
from services.errors import Forbidden, InvalidInput, InvalidReference, ValidationError

logger = logging.getLogger(__name__)

ORIGINATOR_ROLES = {UserRole.TENANT, UserRole.ADMIN}

NO_THREAD_ACCESS = "You do not have access to this conversation"
NO_SEND_ACCESS = "Not authorized to send message in this conversation"


# ───────────── helpers ─────────────────────────────────────────────────────────
def _parse_conversation_id(val) -> Optional[uuid.UUID]:
    if isinstance(val, uuid.UUID):
        return val
    try:
        return uuid.UUID(str(val)) if val else None
    except ValueError:
        return None


def _parse_int(val, field: str) -> int:
    if val is None or val == "":
        raise InvalidInput(f"Missing required field: {field}")
    if isinstance(val, bool):
        raise InvalidInput(f"Invalid {field} format. Expected an integer.")
    if isinstance(val, int):
        return val
    if isinstance(val, str):
        try:
            return int(val.strip(), 10)
        except ValueError:
            pass
    raise InvalidInput(f"Invalid {field} format. Expected an integer.")


def _involves(user_id: int):
    return or_(Message.sender_id == user_id, Message.receiver_id == user_id)


def _counterpart(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def _unread_in_conversation(db: Session, conversation_id: uuid.UUID, user_id: int) -> int:
    q = (
        db.query(sa_func.count(Message.message_id))
        .filter(
            Message.conversation_id == conversation_id,
            Message.receiver_id == user_id,
            Message.is_read == False,
        )
    )
    return int(q.scalar() or 0)


def _insert_message(db: Session, **fields) -> Message:
    try:
        msg = Message(**fields)
    except ValueError as e:
        raise ValidationError(f"Validation error: {e}")

    db.add(msg)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Message insert rejected by the store: {e.orig}")
        raise InvalidReference()
    db.refresh(msg)
    return msg


def serialize_message(m: Message, include_property: bool = False) -> dict:
    data = {
        "message_id": m.message_id,
        "conversation_id": str(m.conversation_id),
        "sender_id": m.sender_id,
        "receiver_id": m.receiver_id,
        "property_id": m.property_id,
        "content": m.content,
        "is_read": bool(m.is_read),
        "created_at": m.created_at.isoformat() if m.created_at else None,
        "sender": m.sender.public_profile() if m.sender else None,
    }
    if include_property:
        data["property"] = m.property.summary() if m.property else None
    return data


# ───────────── INBOX ───────────────────────────────────────────────────────────
def list_conversations(db: Session, user_id: int) -> List[dict]:
    """
    One summary per conversation the user takes part in, most recent first.

    Rows arrive newest first, so the first row seen for a conversation_id is
    its latest message. Conversations whose counterpart account is gone are
    left out instead of failing the whole inbox.
    """
    rows = (
        db.query(Message)
        .options(joinedload(Message.property))
        .filter(_involves(user_id))
        .order_by(Message.created_at.desc(), Message.message_id.desc())
        .all()
    )

    summaries: Dict[uuid.UUID, dict] = {}
    dropped: set[uuid.UUID] = set()
    for m in rows:
        cid = m.conversation_id
        if cid in summaries or cid in dropped:
            continue

        other_id = m.other_participant(user_id)
        other = _counterpart(db, other_id)
        if other is None:
            logger.error(f"User not found with ID: {other_id}; dropping conversation {cid}")
            dropped.add(cid)
            continue

        summaries[cid] = {
            "conversation_id": str(cid),
            "property_id": m.property_id,
            "property_summary": m.property.summary() if m.property else None,
            "other_user": other.public_profile(),
            "last_message": m.content,
            "last_message_time": m.created_at.isoformat() if m.created_at else None,
            "unread_count": _unread_in_conversation(db, cid, user_id),
        }

    logger.info(f"Found {len(summaries)} conversations for user {user_id}")
    return list(summaries.values())


# ───────────── THREAD ──────────────────────────────────────────────────────────
def get_thread(db: Session, user_id: int, conversation_id) -> dict:
    cid = _parse_conversation_id(conversation_id)
    if cid is None:
        raise Forbidden(NO_THREAD_ACCESS)

    anchor = (
        db.query(Message)
        .options(joinedload(Message.property))
        .filter(Message.conversation_id == cid, _involves(user_id))
        .order_by(Message.created_at.asc(), Message.message_id.asc())
        .first()
    )
    if not anchor:
        raise Forbidden(NO_THREAD_ACCESS)

    rows = (
        db.query(Message)
        .options(joinedload(Message.sender))
        .filter(Message.conversation_id == cid)
        .order_by(Message.created_at.asc(), Message.message_id.asc())
        .all()
    )
    messages = [serialize_message(m) for m in rows]

    other = _counterpart(db, anchor.other_participant(user_id))
    result = {
        "messages": messages,
        "property": anchor.property.summary() if anchor.property else None,
        "other_user": other.public_profile() if other else None,
    }

    flipped = (
        db.query(Message)
        .filter(
            Message.conversation_id == cid,
            Message.receiver_id == user_id,
            Message.is_read == False,
        )
        .update({Message.is_read: True}, synchronize_session=False)
    )
    db.commit()
    if flipped:
        logger.debug(f"Marked {flipped} messages read in {cid} for user {user_id}")

    return result


# ───────────── SEND / START ────────────────────────────────────────────────────
def send_message(
    db: Session,
    sender_id: int,
    conversation_id,
    receiver_id,
    property_id,
    content,
) -> dict:
    if not conversation_id:
        raise InvalidInput("Missing required field: conversation_id")

    # participation is checked before anything else in the body
    cid = _parse_conversation_id(conversation_id)
    existing = None
    if cid is not None:
        existing = (
            db.query(Message)
            .filter(Message.conversation_id == cid, _involves(sender_id))
            .first()
        )
    if not existing:
        raise Forbidden(NO_SEND_ACCESS)

    rid = _parse_int(receiver_id, "receiver_id")
    pid = _parse_int(property_id, "property_id")
    if rid == sender_id:
        raise InvalidInput("Cannot send a message to yourself")

    # receiver/property are taken as sent, not checked against the thread
    msg = _insert_message(
        db,
        conversation_id=cid,
        sender_id=sender_id,
        receiver_id=rid,
        property_id=pid,
        content=content,
    )
    logger.info(f"Message {msg.message_id} sent in conversation {cid} by user {sender_id}")
    return serialize_message(msg)


def start_conversation(db: Session, caller: Identity, receiver_id, property_id, content) -> dict:
    """
    Open a new thread by inserting its first message.

    Every call mints a new conversation_id, even when the same participants
    already talk about the same listing.
    """
    if caller.role not in ORIGINATOR_ROLES:
        raise Forbidden("Only tenants can initiate new conversations")

    pid = _parse_int(property_id, "property_id")
    rid = _parse_int(receiver_id, "receiver_id")
    if rid == caller.id:
        raise InvalidInput("Cannot send a message to yourself")

    listing = db.get(Property, pid)
    if not listing:
        logger.error(f"Property not found with ID: {pid}")
        raise InvalidReference("Invalid property. Property not found.")

    msg = _insert_message(
        db,
        sender_id=caller.id,
        receiver_id=rid,
        property_id=pid,
        content=content,
    )
    logger.info(f"Conversation {msg.conversation_id} started by user {caller.id} about property {pid}")
    return serialize_message(msg, include_property=True)


def count_unread(db: Session, user_id: int) -> int:
    q = (
        db.query(sa_func.count(Message.message_id))
        .filter(Message.receiver_id == user_id, Message.is_read == False)
    )
    return int(q.scalar() or 0)
