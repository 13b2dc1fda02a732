# freeport/client/dashboards.py
# 儀表板頁面的資料載入；讀取失敗時回傳頁面內的錯誤狀態 (不是例外)
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Generic, List, Optional, TypeVar

from freeport.client.api import FreeportApi
from freeport.client.completion import Completion, employer_completion, freelancer_completion
from freeport.client.errors import FreeportError
from freeport.client.identity import Account, IdentityResolver
from freeport.client.normalizer import normalize, normalize_many
from freeport.client.notifier import Notifier
from freeport.client.view_models import BookmarkView, EmployerView, FreelancerView

logger = logging.getLogger(__name__)

T = TypeVar("T")

NOT_SET = "Not set"
RECENT_BOOKMARKS = 5


@dataclass
class PageState(Generic[T]):
    """data 與 error 只會有一個；error 時畫面顯示可重試的錯誤訊息"""
    data: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class FreelancerDashboard:
    profile: FreelancerView
    completion: Completion
    skills_count: int
    portfolio_count: int
    education_count: int
    activity_status: str
    next_availability: str


@dataclass
class EmployerDashboard:
    profile: EmployerView
    completion: Completion
    company_name: str
    bookmarked_count: int
    recent_bookmarks: List[BookmarkView] = field(default_factory=list)


def _saved_at(bookmark: BookmarkView) -> datetime:
    if bookmark.saved_date:
        try:
            # Python 3.10 的 fromisoformat 不接受結尾的 "Z"
            value = datetime.fromisoformat(bookmark.saved_date.replace("Z", "+00:00"))
        except ValueError:
            value = None
        if value is not None:
            return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return datetime.min.replace(tzinfo=timezone.utc)


def recent_bookmarks(bookmarks: List[BookmarkView], limit: int = RECENT_BOOKMARKS) -> List[BookmarkView]:
    """依 SavedDate 由新到舊，取前 limit 筆"""
    return sorted(bookmarks, key=_saved_at, reverse=True)[:limit]


async def load_freelancer_dashboard(
    api: FreeportApi, resolver: IdentityResolver, account: Account, notifier: Optional[Notifier] = None
) -> PageState[FreelancerDashboard]:
    try:
        # 1. 帳號 -> Freelancer (找不到會自動建立)
        resolved = await resolver.resolve_profile(account, "freelancer")
        # 2. 重新讀取完整資料 (含技能 / 學歷 / 作品集 / 可接案時間)
        profile = normalize("freelancer", await api.freelancers.get(resolved.freelancer_id))
    except FreeportError as exc:
        logger.error(f"Failed to load freelancer dashboard: {exc.message}")
        if notifier is not None:
            notifier.error("Failed to load your dashboard.")
        return PageState(error="Failed to load your dashboard. Please try again later.")

    availability = profile.availability
    return PageState(data=FreelancerDashboard(
        profile=profile,
        completion=freelancer_completion(profile),
        skills_count=len(profile.skills),
        portfolio_count=len(profile.portfolio_work),
        education_count=len(profile.education),
        activity_status=availability.activity_status if availability else NOT_SET,
        next_availability=(availability.next_availability_date if availability else None) or NOT_SET,
    ))


async def load_employer_dashboard(
    api: FreeportApi, resolver: IdentityResolver, account: Account, notifier: Optional[Notifier] = None
) -> PageState[EmployerDashboard]:
    try:
        profile = await resolver.resolve_profile(account, "employer")
        bookmarks = normalize_many("bookmark", await api.employers.bookmarks(profile.employer_id))
    except FreeportError as exc:
        logger.error(f"Failed to load employer dashboard: {exc.message}")
        if notifier is not None:
            notifier.error("Failed to load your dashboard.")
        return PageState(error="Failed to load your dashboard. Please try again later.")

    return PageState(data=EmployerDashboard(
        profile=profile,
        completion=employer_completion(profile),
        company_name=profile.company_name or "Your company",
        bookmarked_count=len(bookmarks),
        recent_bookmarks=recent_bookmarks(bookmarks),
    ))
