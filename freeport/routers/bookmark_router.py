# freeport/routers/bookmark_router.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from freeport.core.database import get_db
from freeport.core.security import get_current_user
from freeport.services.bookmark_service import BookmarkService
from freeport.schemas.base import Envelope, ListEnvelope, MessageOut, ok, ok_list
from freeport.schemas.bookmark_schema import BookmarkCreate, BookmarkOut, BookmarkUpdate

router = APIRouter(
    prefix="/saved-bookmarked",
    tags=["Saved Bookmarks"],
    dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=ListEnvelope[BookmarkOut])
async def list_bookmarks(db: AsyncSession = Depends(get_db)):
    bookmarks = await BookmarkService(db).list_bookmarks()
    return ok_list("Bookmarks retrieved successfully", bookmarks)


@router.post("", response_model=Envelope[BookmarkOut], status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    data: BookmarkCreate,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """
    收藏工作者
    - 第一次收藏：201
    - 已收藏過：200，回傳既有的那筆 (不會重複建立)
    """
    bookmark, created = await BookmarkService(db).create_bookmark(data)
    if not created:
        response.status_code = status.HTTP_200_OK
        return ok("Freelancer already bookmarked", bookmark)
    return ok("Bookmark created successfully", bookmark)


@router.get("/{saved_id}", response_model=Envelope[BookmarkOut])
async def get_bookmark(saved_id: int, db: AsyncSession = Depends(get_db)):
    bookmark = await BookmarkService(db).get_bookmark(saved_id)
    return ok("Bookmark retrieved successfully", bookmark)


@router.put("/{saved_id}", response_model=Envelope[BookmarkOut])
async def update_bookmark(saved_id: int, data: BookmarkUpdate, db: AsyncSession = Depends(get_db)):
    bookmark = await BookmarkService(db).update_bookmark(saved_id, data)
    return ok("Bookmark updated successfully", bookmark)


@router.delete("/{saved_id}", response_model=MessageOut)
async def delete_bookmark(saved_id: int, db: AsyncSession = Depends(get_db)):
    await BookmarkService(db).delete_bookmark(saved_id)
    return {"success": True, "message": "Bookmark removed successfully"}
