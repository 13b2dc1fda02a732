# freeport/schemas/bookmark_schema.py
from pydantic import Field
from typing import Optional
from freeport.schemas.base import ApiSchema, UtcDateTime
from freeport.schemas.profile_schema import FreelancerOut


class BookmarkCreate(ApiSchema):
    freelancer_id: int
    employer_id: int
    saved_date: Optional[UtcDateTime] = None


class BookmarkUpdate(ApiSchema):
    freelancer_id: Optional[int] = None
    employer_id: Optional[int] = None
    saved_date: Optional[UtcDateTime] = None


class BookmarkOut(ApiSchema):
    saved_id: int
    freelancer_id: int
    employer_id: int
    saved_date: Optional[UtcDateTime] = None
    created_at: Optional[UtcDateTime] = Field(None, alias="created_at")
    updated_at: Optional[UtcDateTime] = Field(None, alias="updated_at")


# GET /employers/{id}/bookmarks：附上被收藏的工作者 (snake_case 鍵名)
class BookmarkWithFreelancerOut(BookmarkOut):
    freelancer: Optional[FreelancerOut] = Field(None, alias="freelancer")
