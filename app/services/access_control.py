# app/services/access_control.py
"""
Authorization and tenancy rules.

Every data operation goes through is_permitted(caller, operation, entity, row),
a pure function of:
  - the caller context (identity id, resolved garage, role set),
  - the operation (select / insert / update / delete),
  - the entity kind,
  - the target row's garage (or, for profiles and roles, its owner identity).

Rules per entity:
  garage     select: own garage or admin        write: admin
  profile    select/update: own profile or admin insert/delete: admin
  user_role  select: own assignments or admin   write: admin
  vehicle    select: same garage or admin       write: manager of the garage or admin
  client     same as vehicle
  sale       select: same garage or admin
             insert: row garage == caller garage (admin gets no bypass)
             update: manager of the garage or admin
             delete: no rule, always denied

A missing (entity, operation) pair is a denial.
"""

import enum
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Iterable, Optional, Tuple

from sqlalchemy import false
from sqlalchemy.orm import Query

from app.exceptions import AuthorizationDenied
from app.models.user_role import AppRole
from app.utils.logger import get_logger

logger = get_logger(__name__)


class Operation(str, enum.Enum):
    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class Entity(str, enum.Enum):
    GARAGE = "garage"
    PROFILE = "profile"
    USER_ROLE = "user_role"
    VEHICLE = "vehicle"
    CLIENT = "client"
    SALE = "sale"


GARAGE_SCOPED = {Entity.VEHICLE, Entity.CLIENT, Entity.SALE}
OWNER_SCOPED = {Entity.PROFILE, Entity.USER_ROLE}


@dataclass(frozen=True)
class CallerContext:
    """Who is asking. Resolved once per request and passed explicitly."""
    user_id: str
    garage_id: Optional[str] = None
    roles: FrozenSet[AppRole] = frozenset()

    @classmethod
    def build(cls, user_id: str, garage_id: Optional[str] = None, roles: Iterable = ()):
        return cls(user_id=user_id, garage_id=garage_id,
                   roles=frozenset(AppRole(r) for r in roles))

    @property
    def is_admin(self) -> bool:
        return AppRole.ADMIN in self.roles

    def has_role(self, role: AppRole) -> bool:
        return role in self.roles

    def in_garage(self, garage_id: Optional[str]) -> bool:
        # An unassigned caller matches nothing, not even rows with a NULL garage
        return self.garage_id is not None and garage_id == self.garage_id


@dataclass(frozen=True)
class RowRef:
    """
    The part of a target row the rules look at.
    garage_id: the row's garage (for a Garage row, its own id).
    owner_id:  the identity a profile / role assignment belongs to.
    """
    garage_id: Optional[str] = None
    owner_id: Optional[str] = None


Rule = Callable[[CallerContext, RowRef], bool]


def _admin_only(caller: CallerContext, row: RowRef) -> bool:
    return caller.is_admin


def _same_garage(caller: CallerContext, row: RowRef) -> bool:
    return caller.is_admin or caller.in_garage(row.garage_id)


def _garage_manager(caller: CallerContext, row: RowRef) -> bool:
    if caller.is_admin:
        return True
    return caller.in_garage(row.garage_id) and caller.has_role(AppRole.MANAGER)


def _own_record(caller: CallerContext, row: RowRef) -> bool:
    return caller.is_admin or row.owner_id == caller.user_id


def _sale_insert(caller: CallerContext, row: RowRef) -> bool:
    return caller.in_garage(row.garage_id)


POLICIES: Dict[Tuple[Entity, Operation], Rule] = {
    (Entity.GARAGE, Operation.SELECT): _same_garage,
    (Entity.GARAGE, Operation.INSERT): _admin_only,
    (Entity.GARAGE, Operation.UPDATE): _admin_only,
    (Entity.GARAGE, Operation.DELETE): _admin_only,

    (Entity.PROFILE, Operation.SELECT): _own_record,
    (Entity.PROFILE, Operation.INSERT): _admin_only,
    (Entity.PROFILE, Operation.UPDATE): _own_record,
    (Entity.PROFILE, Operation.DELETE): _admin_only,

    (Entity.USER_ROLE, Operation.SELECT): _own_record,
    (Entity.USER_ROLE, Operation.INSERT): _admin_only,
    (Entity.USER_ROLE, Operation.UPDATE): _admin_only,
    (Entity.USER_ROLE, Operation.DELETE): _admin_only,

    (Entity.VEHICLE, Operation.SELECT): _same_garage,
    (Entity.VEHICLE, Operation.INSERT): _garage_manager,
    (Entity.VEHICLE, Operation.UPDATE): _garage_manager,
    (Entity.VEHICLE, Operation.DELETE): _garage_manager,

    (Entity.CLIENT, Operation.SELECT): _same_garage,
    (Entity.CLIENT, Operation.INSERT): _garage_manager,
    (Entity.CLIENT, Operation.UPDATE): _garage_manager,
    (Entity.CLIENT, Operation.DELETE): _garage_manager,

    (Entity.SALE, Operation.SELECT): _same_garage,
    (Entity.SALE, Operation.INSERT): _sale_insert,
    (Entity.SALE, Operation.UPDATE): _garage_manager,
}


def is_permitted(caller: CallerContext, operation: Operation, entity: Entity, row: RowRef) -> bool:
    rule = POLICIES.get((entity, operation))
    if rule is None:
        return False
    return rule(caller, row)


def is_update_permitted(caller: CallerContext, entity: Entity, before: RowRef, after: RowRef) -> bool:
    """Both the stored row and the row as it will be written must pass the update rule."""
    return all(is_permitted(caller, Operation.UPDATE, entity, row) for row in (before, after))


def authorize(caller: CallerContext, operation: Operation, entity: Entity, row: RowRef):
    if not is_permitted(caller, operation, entity, row):
        _deny(caller, operation, entity, row)


def authorize_update(caller: CallerContext, entity: Entity, before: RowRef, after: RowRef):
    """Raising form of is_update_permitted; the denial names whichever row failed."""
    for row in (before, after):
        authorize(caller, Operation.UPDATE, entity, row)


def _deny(caller: CallerContext, operation: Operation, entity: Entity, row: RowRef):
    logger.warning(
        f"[ACCESS] denied {operation.value} on {entity.value} for user={caller.user_id} "
        f"garage={caller.garage_id} roles={sorted(r.value for r in caller.roles)} "
        f"row_garage={row.garage_id} row_owner={row.owner_id}"
    )
    raise AuthorizationDenied(f"Not allowed to {operation.value} this {entity.value}")


def row_ref(entity: Entity, obj) -> RowRef:
    """Build the RowRef for an ORM object or a dict of column values."""
    get = obj.get if isinstance(obj, dict) else lambda key: getattr(obj, key, None)
    if entity == Entity.GARAGE:
        return RowRef(garage_id=get("id"))
    if entity in OWNER_SCOPED:
        return RowRef(garage_id=get("garage_id") if entity == Entity.PROFILE else None,
                      owner_id=get("user_id"))
    return RowRef(garage_id=get("garage_id"))


def visible(query: Query, entity: Entity, model, caller: CallerContext) -> Query:
    """
    Narrow a query to the rows the caller may select, as a SQL filter.
    Mirrors the select rules above; rows outside it are simply absent.
    """
    if caller.is_admin:
        return query
    if entity == Entity.GARAGE:
        if caller.garage_id is None:
            return query.filter(false())
        return query.filter(model.id == caller.garage_id)
    if entity in OWNER_SCOPED:
        return query.filter(model.user_id == caller.user_id)
    if caller.garage_id is None:
        return query.filter(false())
    return query.filter(model.garage_id == caller.garage_id)
