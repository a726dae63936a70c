# app/routers/accounts.py
"""
Identities, profiles and role assignments.

POST /identities is the sign-up hook called by the auth provider (protect it
with API_KEY); it returns the profile created alongside the identity.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional
from app.auth import get_caller
from app.database import get_db
from app.models.profile import Profile
from app.schemas.profile import (
    IdentityCreate, MeOut, ProfileCreate, ProfileOut, ProfileUpdate, RoleGrant, UserRoleOut,
)
from app.services import identity_service, profile_service, role_service
from app.services.access_control import CallerContext

router = APIRouter()


@router.post("/identities", response_model=ProfileOut, status_code=201, summary="Register a new identity")
def register_identity(body: IdentityCreate, db: Session = Depends(get_db)):
    metadata = body.model_dump(include={"first_name", "last_name"}, exclude_none=True)
    identity = identity_service.create_identity(db, body.email, metadata)
    return db.query(Profile).filter(Profile.user_id == identity.id).one()


@router.get("/me", response_model=MeOut, summary="Caller's profile, garage and roles")
def get_me(db: Session = Depends(get_db), caller: CallerContext = Depends(get_caller)):
    profile = db.query(Profile).filter(Profile.user_id == caller.user_id).first()
    return {
        "user_id": caller.user_id,
        "garage_id": caller.garage_id,
        "roles": sorted(caller.roles, key=lambda r: r.value),
        "profile": profile,
    }


@router.get("/profiles", response_model=list[ProfileOut])
def list_profiles(garage_id: Optional[str] = None, db: Session = Depends(get_db),
                  caller: CallerContext = Depends(get_caller)):
    return profile_service.list_profiles(db, caller, garage_id=garage_id)


@router.get("/profiles/{profile_id}", response_model=ProfileOut)
def get_profile(profile_id: str, db: Session = Depends(get_db),
                caller: CallerContext = Depends(get_caller)):
    return profile_service.get_profile(db, caller, profile_id)


@router.post("/profiles", response_model=ProfileOut, status_code=201, summary="Create a profile (admin)")
def create_profile(body: ProfileCreate, db: Session = Depends(get_db),
                   caller: CallerContext = Depends(get_caller)):
    return profile_service.create_profile(db, caller, body.model_dump())


@router.put("/profiles/{profile_id}", response_model=ProfileOut)
def update_profile(profile_id: str, body: ProfileUpdate, db: Session = Depends(get_db),
                   caller: CallerContext = Depends(get_caller)):
    return profile_service.update_profile(db, caller, profile_id, body.model_dump(exclude_unset=True))


@router.delete("/profiles/{profile_id}", summary="Delete a profile (admin)")
def delete_profile(profile_id: str, db: Session = Depends(get_db),
                   caller: CallerContext = Depends(get_caller)):
    profile_service.delete_profile(db, caller, profile_id)
    return {"status": "deleted", "profile_id": profile_id}


@router.get("/roles", response_model=list[UserRoleOut])
def list_roles(user_id: Optional[str] = None, db: Session = Depends(get_db),
               caller: CallerContext = Depends(get_caller)):
    return role_service.list_roles(db, caller, user_id=user_id)


@router.post("/roles", response_model=UserRoleOut, status_code=201, summary="Grant a role (admin)")
def grant_role(body: RoleGrant, db: Session = Depends(get_db),
               caller: CallerContext = Depends(get_caller)):
    return role_service.grant_role(db, caller, body.user_id, body.role)


@router.delete("/roles/{assignment_id}", summary="Revoke a role (admin)")
def revoke_role(assignment_id: str, db: Session = Depends(get_db),
                caller: CallerContext = Depends(get_caller)):
    role_service.revoke_role(db, caller, assignment_id)
    return {"status": "revoked", "assignment_id": assignment_id}
