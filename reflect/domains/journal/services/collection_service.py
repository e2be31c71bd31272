"""Collection services."""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import func

from reflect.core.outbox import enqueue as enqueue_outbox
from reflect.domains.journal.events import JOURNAL_COLLECTION_CREATED
from reflect.domains.journal.models import Collection
from reflect.extensions import db

logger = logging.getLogger(__name__)


def list_collections(user_id: int) -> List[Collection]:
    return (
        Collection.query.filter_by(user_id=user_id)
        .order_by(func.lower(Collection.name), Collection.id)
        .all()
    )


def get_collection(user_id: int, collection_id: int) -> Optional[Collection]:
    return Collection.query.filter_by(id=collection_id, user_id=user_id).first()


def create_collection(user_id: int, name: str) -> Collection:
    name_norm = (name or "").strip()
    if not name_norm:
        raise ValueError("validation_error")
    duplicate = Collection.query.filter(
        Collection.user_id == user_id,
        func.lower(Collection.name) == name_norm.lower(),
    ).first()
    if duplicate:
        raise ValueError("collection_exists")

    collection = Collection(user_id=user_id, name=name_norm)
    db.session.add(collection)
    db.session.flush()
    enqueue_outbox(
        JOURNAL_COLLECTION_CREATED,
        {"collection_id": collection.id, "user_id": user_id, "name": collection.name},
        user_id=user_id,
    )
    db.session.commit()
    logger.info("Created collection %s for user %s", collection.id, user_id)
    return collection
