# app/services/records.py
"""
Authorized create / read / update / delete helpers shared by the entity services.
Each helper runs the access check first and only then touches the session.
"""

from typing import Any, Dict

from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified
from app.database import commit
from app.exceptions import NotFound
from app.services.access_control import (
    CallerContext, Entity, Operation, authorize, authorize_update, row_ref, visible,
)
from app.utils.logger import get_logger

logger = get_logger(__name__)


def column_values(obj) -> Dict[str, Any]:
    return {c.key: getattr(obj, c.key) for c in obj.__table__.columns}


def get_visible(db: Session, model, entity: Entity, caller: CallerContext, record_id: str):
    """Fetch one row the caller may select. Invisible and missing rows look the same."""
    obj = visible(db.query(model), entity, model, caller).filter(model.id == record_id).first()
    if obj is None:
        raise NotFound(f"{entity.value} {record_id} not found")
    return obj


def create_record(db: Session, caller: CallerContext, entity: Entity, model, values: Dict[str, Any]):
    authorize(caller, Operation.INSERT, entity, row_ref(entity, values))
    obj = model(**values)
    db.add(obj)
    commit(db)
    db.refresh(obj)
    logger.info(f"{entity.value} {obj.id} created by {caller.user_id}")
    return obj


def update_record(db: Session, caller: CallerContext, entity: Entity, obj, changes: Dict[str, Any]):
    after = {**column_values(obj), **changes}
    authorize_update(caller, entity, row_ref(entity, obj), row_ref(entity, after))
    for key, value in changes.items():
        setattr(obj, key, value)
    if hasattr(obj, "updated_at"):
        # Forces an UPDATE (and a fresh updated_at) even when nothing else changed
        flag_modified(obj, "updated_at")
    commit(db)
    db.refresh(obj)
    logger.info(f"{entity.value} {obj.id} updated by {caller.user_id}: {sorted(changes)}")
    return obj


def delete_record(db: Session, caller: CallerContext, entity: Entity, obj):
    authorize(caller, Operation.DELETE, entity, row_ref(entity, obj))
    record_id = obj.id
    db.delete(obj)
    commit(db)
    logger.info(f"{entity.value} {record_id} deleted by {caller.user_id}")
