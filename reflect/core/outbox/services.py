"""Outbox dispatcher service and bus adapter."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Set

from sqlalchemy import or_

from reflect.core.events.event_bus import DomainEvent, EventBus, event_bus
from reflect.core.outbox.models import OutboxMessage
from reflect.extensions import db

logger = logging.getLogger(__name__)

STATUS_PENDING = "pending"
STATUS_SENDING = "sending"
STATUS_SENT = "sent"
STATUS_RETRY = "retry"
STATUS_DEAD = "dead"

MAX_DISPATCH_ATTEMPTS = 5
DEFAULT_RETRY_IN = timedelta(minutes=5)


class EventBusAdapter:
    """Publishes outbox messages to the in-process bus."""

    def __init__(self, bus: Optional[EventBus] = None) -> None:
        self.bus = bus or event_bus
        self._delivered: Set[int] = set()

    def dispatch(self, message: OutboxMessage) -> None:
        if message.id in self._delivered:
            return
        payload = dict(message.payload or {})
        payload.setdefault("event_id", message.id)
        self.bus.publish(
            DomainEvent(
                event_type=message.event_type,
                payload=payload,
                user_id=message.user_id,
                id=message.id,
                created_at=message.created_at,
            )
        )
        self._delivered.add(message.id)


def enqueue(
    event_name: str,
    payload: dict,
    user_id: Optional[int],
    available_at: Optional[datetime] = None,
) -> OutboxMessage:
    """
    Stage an event in the outbox. Caller should commit alongside domain changes.
    """
    message = OutboxMessage(
        event_type=event_name,
        payload=payload or {},
        user_id=user_id,
        available_at=available_at or datetime.utcnow(),
        status=STATUS_PENDING,
        attempts=0,
    )
    db.session.add(message)
    return message


def dequeue_batch(limit: int = 50) -> List[OutboxMessage]:
    """Lock and return ready messages (pending or retry). Marks them as sending."""
    now = datetime.utcnow()
    ready = (
        OutboxMessage.query.filter(
            OutboxMessage.available_at <= now,
            or_(
                OutboxMessage.status == STATUS_PENDING,
                OutboxMessage.status == STATUS_RETRY,
            ),
        )
        .order_by(OutboxMessage.available_at, OutboxMessage.id)
        .with_for_update(skip_locked=True)
        .limit(limit)
        .all()
    )
    for message in ready:
        message.status = STATUS_SENDING
        message.attempts += 1
    db.session.commit()
    return ready


def mark_sent(ids: Sequence[int]) -> int:
    if not ids:
        return 0
    updated = OutboxMessage.query.filter(
        OutboxMessage.id.in_(list(ids)),
        OutboxMessage.status == STATUS_SENDING,
    ).update({"status": STATUS_SENT, "last_error": None})
    db.session.commit()
    return updated


def mark_failed(
    message_id: int,
    err: Exception | str,
    retry_in: timedelta = DEFAULT_RETRY_IN,
) -> Optional[OutboxMessage]:
    message = OutboxMessage.query.filter(
        OutboxMessage.id == message_id,
        OutboxMessage.status == STATUS_SENDING,
    ).one_or_none()
    if not message:
        return None

    message.last_error = str(err)
    message.available_at = datetime.utcnow() + retry_in
    if message.attempts >= MAX_DISPATCH_ATTEMPTS:
        message.status = STATUS_DEAD
    else:
        message.status = STATUS_RETRY
    db.session.commit()
    return message


def dispatch_ready(
    limit: int = 50,
    retry_in: timedelta = DEFAULT_RETRY_IN,
    bus_adapter: Optional[EventBusAdapter] = None,
) -> List[int]:
    adapter = bus_adapter or EventBusAdapter()
    sent_ids: List[int] = []

    for message in dequeue_batch(limit=limit):
        try:
            adapter.dispatch(message)
            sent_ids.append(message.id)
        except Exception as err:
            logger.warning("Outbox message %s (%s) failed: %s", message.id, message.event_type, err)
            mark_failed(message.id, err, retry_in=retry_in)

    if sent_ids:
        mark_sent(sent_ids)
    return sent_ids
