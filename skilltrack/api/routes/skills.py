from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ...models import User
from ...schemas import BadgeOut, SkillCreate, SkillOut, SkillUpdate
from ...storage import Storage
from ..deps import get_current_user, get_storage

router = APIRouter()


def _own_skill(storage: Storage, skill_id: int, user: User):
    skill = storage.get_skill(skill_id, user_id=user.id)
    if skill is None:
        raise HTTPException(status_code=404, detail="Skill not found")
    return skill


@router.get("/skills", response_model=List[SkillOut])
def list_skills(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    return storage.get_user_skills(user.id)


@router.post("/skills", response_model=SkillOut)
def create_skill(
    skill: SkillCreate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return storage.create_skill(user.id, skill.model_dump())


@router.put("/skills/{skill_id}", response_model=SkillOut)
def update_skill(
    skill_id: int,
    updates: SkillUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    skill = _own_skill(storage, skill_id, user)
    return storage.update_skill(skill, updates.model_dump(exclude_unset=True))


@router.delete("/skills/{skill_id}")
def delete_skill(
    skill_id: int,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    storage.delete_skill(_own_skill(storage, skill_id, user))
    return {"success": True}


@router.get("/badges", response_model=List[BadgeOut])
def list_badges(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    return storage.get_user_badges(user.id)
