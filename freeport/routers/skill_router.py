# freeport/routers/skill_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from freeport.core.database import get_db
from freeport.core.security import get_current_user
from freeport.services.child_resource_service import skill_service
from freeport.schemas.base import Envelope, ListEnvelope, MessageOut, ok, ok_list
from freeport.schemas.skill_schema import SkillCreate, SkillOut, SkillUpdate

router = APIRouter(
    prefix="/skills",
    tags=["Skills"],
    dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=ListEnvelope[SkillOut])
async def list_records(freelancer_id: Optional[int] = None, db: AsyncSession = Depends(get_db)):
    # freelancer_id: 只列出某位工作者的技能
    skills = await skill_service(db).list_records(freelancer_id=freelancer_id)
    return ok_list("Skills retrieved successfully", skills)


@router.post("", response_model=Envelope[SkillOut], status_code=status.HTTP_201_CREATED)
async def create_record(data: SkillCreate, db: AsyncSession = Depends(get_db)):
    skill = await skill_service(db).create_record(data)
    return ok("Skill created successfully", skill)


@router.get("/{skill_id}", response_model=Envelope[SkillOut])
async def get_record(skill_id: int, db: AsyncSession = Depends(get_db)):
    skill = await skill_service(db).get_record(skill_id)
    return ok("Skill retrieved successfully", skill)


@router.put("/{skill_id}", response_model=Envelope[SkillOut])
async def update_record(skill_id: int, data: SkillUpdate, db: AsyncSession = Depends(get_db)):
    skill = await skill_service(db).update_record(skill_id, data)
    return ok("Skill updated successfully", skill)


@router.delete("/{skill_id}", response_model=MessageOut)
async def delete_record(skill_id: int, db: AsyncSession = Depends(get_db)):
    await skill_service(db).delete_record(skill_id)
    return {"success": True, "message": "Skill deleted successfully"}
