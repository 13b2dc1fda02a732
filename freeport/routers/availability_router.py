# freeport/routers/availability_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from freeport.core.database import get_db
from freeport.core.security import get_current_user
from freeport.services.child_resource_service import availability_service
from freeport.schemas.base import Envelope, ListEnvelope, MessageOut, ok, ok_list
from freeport.schemas.availability_schema import AvailabilityCreate, AvailabilityOut, AvailabilityUpdate

router = APIRouter(
    prefix="/availability",
    tags=["Availability"],
    dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=ListEnvelope[AvailabilityOut])
async def list_records(freelancer_id: Optional[int] = None, db: AsyncSession = Depends(get_db)):
    records = await availability_service(db).list_records(freelancer_id=freelancer_id)
    return ok_list("Availability records retrieved successfully", records)


@router.post("", response_model=Envelope[AvailabilityOut], status_code=status.HTTP_201_CREATED)
async def create_record(data: AvailabilityCreate, db: AsyncSession = Depends(get_db)):
    """每位工作者只能有一筆 availability，重複建立回傳 422"""
    record = await availability_service(db).create_record(data)
    return ok("Availability created successfully", record)


@router.get("/{availability_id}", response_model=Envelope[AvailabilityOut])
async def get_record(availability_id: int, db: AsyncSession = Depends(get_db)):
    record = await availability_service(db).get_record(availability_id)
    return ok("Availability retrieved successfully", record)


@router.put("/{availability_id}", response_model=Envelope[AvailabilityOut])
async def update_record(availability_id: int, data: AvailabilityUpdate, db: AsyncSession = Depends(get_db)):
    record = await availability_service(db).update_record(availability_id, data)
    return ok("Availability updated successfully", record)


@router.delete("/{availability_id}", response_model=MessageOut)
async def delete_record(availability_id: int, db: AsyncSession = Depends(get_db)):
    await availability_service(db).delete_record(availability_id)
    return {"success": True, "message": "Availability deleted successfully"}
