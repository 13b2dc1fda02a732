# freeport/routers/education_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from freeport.core.database import get_db
from freeport.core.security import get_current_user
from freeport.services.child_resource_service import education_service
from freeport.schemas.base import Envelope, ListEnvelope, MessageOut, ok, ok_list
from freeport.schemas.education_schema import EducationCreate, EducationOut, EducationUpdate

router = APIRouter(
    prefix="/education",
    tags=["Education"],
    dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=ListEnvelope[EducationOut])
async def list_records(freelancer_id: Optional[int] = None, db: AsyncSession = Depends(get_db)):
    records = await education_service(db).list_records(freelancer_id=freelancer_id)
    return ok_list("Education records retrieved successfully", records)


@router.post("", response_model=Envelope[EducationOut], status_code=status.HTTP_201_CREATED)
async def create_record(data: EducationCreate, db: AsyncSession = Depends(get_db)):
    record = await education_service(db).create_record(data)
    return ok("Education created successfully", record)


@router.get("/{education_id}", response_model=Envelope[EducationOut])
async def get_record(education_id: int, db: AsyncSession = Depends(get_db)):
    record = await education_service(db).get_record(education_id)
    return ok("Education retrieved successfully", record)


@router.put("/{education_id}", response_model=Envelope[EducationOut])
async def update_record(education_id: int, data: EducationUpdate, db: AsyncSession = Depends(get_db)):
    record = await education_service(db).update_record(education_id, data)
    return ok("Education updated successfully", record)


@router.delete("/{education_id}", response_model=MessageOut)
async def delete_record(education_id: int, db: AsyncSession = Depends(get_db)):
    await education_service(db).delete_record(education_id)
    return {"success": True, "message": "Education deleted successfully"}
