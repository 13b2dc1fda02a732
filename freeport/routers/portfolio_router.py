# freeport/routers/portfolio_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from freeport.core.database import get_db
from freeport.core.security import get_current_user
from freeport.services.child_resource_service import portfolio_service
from freeport.schemas.base import Envelope, ListEnvelope, MessageOut, ok, ok_list
from freeport.schemas.portfolio_schema import PortfolioWorkCreate, PortfolioWorkOut, PortfolioWorkUpdate

router = APIRouter(
    prefix="/portfolio-work",
    tags=["Portfolio Work"],
    dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=ListEnvelope[PortfolioWorkOut])
async def list_records(freelancer_id: Optional[int] = None, db: AsyncSession = Depends(get_db)):
    records = await portfolio_service(db).list_records(freelancer_id=freelancer_id)
    return ok_list("Portfolio works retrieved successfully", records)


@router.post("", response_model=Envelope[PortfolioWorkOut], status_code=status.HTTP_201_CREATED)
async def create_record(data: PortfolioWorkCreate, db: AsyncSession = Depends(get_db)):
    record = await portfolio_service(db).create_record(data)
    return ok("Portfolio work created successfully", record)


@router.get("/{portfolio_id}", response_model=Envelope[PortfolioWorkOut])
async def get_record(portfolio_id: int, db: AsyncSession = Depends(get_db)):
    record = await portfolio_service(db).get_record(portfolio_id)
    return ok("Portfolio work retrieved successfully", record)


@router.put("/{portfolio_id}", response_model=Envelope[PortfolioWorkOut])
async def update_record(portfolio_id: int, data: PortfolioWorkUpdate, db: AsyncSession = Depends(get_db)):
    record = await portfolio_service(db).update_record(portfolio_id, data)
    return ok("Portfolio work updated successfully", record)


@router.delete("/{portfolio_id}", response_model=MessageOut)
async def delete_record(portfolio_id: int, db: AsyncSession = Depends(get_db)):
    await portfolio_service(db).delete_record(portfolio_id)
    return {"success": True, "message": "Portfolio work deleted successfully"}
