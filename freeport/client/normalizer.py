# freeport/client/normalizer.py
# normalize(kind, raw) -> View Model：所有頁面共用的唯一轉換入口
import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Type

from freeport.client.view_models import (
    AccountView, AvailabilityView, BookmarkView, EducationView, EmployerView, FreelancerView,
    NotificationView, PortfolioView, ProjectView, SkillView, ViewModel,
)

logger = logging.getLogger(__name__)

VIEW_MODELS: Dict[str, Type[ViewModel]] = {
    "freelancer": FreelancerView,
    "employer": EmployerView,
    "skill": SkillView,
    "portfolio": PortfolioView,
    "education": EducationView,
    "availability": AvailabilityView,
    "project": ProjectView,
    "bookmark": BookmarkView,
    "notification": NotificationView,
    "account": AccountView,
}

# 常見的別名 (e.g. "portfolio_item", "PortfolioItem")
_KIND_ALIASES = {
    "portfolio_item": "portfolio",
    "portfolioitem": "portfolio",
    "portfolio_work": "portfolio",
    "education_record": "education",
    "educationrecord": "education",
    "availability_record": "availability",
    "availabilityrecord": "availability",
    "saved_bookmarked": "bookmark",
}


def _resolve_kind(kind: str) -> Type[ViewModel]:
    key = kind.strip().lower()
    key = _KIND_ALIASES.get(key, key)
    try:
        return VIEW_MODELS[key]
    except KeyError:
        raise ValueError(f"Unknown entity kind: {kind!r}") from None


def normalize(kind: str, raw: Any) -> ViewModel:
    """
    將 API 回傳的單筆資料轉成標準 View Model
    1. 依序嘗試 PascalCase / snake_case / 其他別名，取第一個非 null 的值
    2. 缺少的欄位補上預設值 ("" / 0 / None / "Not specified" ...)
    3. 數字欄位 (GPA, Budget) 轉成 float，無法解析時為 None
    """
    model = _resolve_kind(kind)
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise TypeError(f"Cannot normalize {type(raw).__name__} as {kind}")
    return model.model_validate(raw)


def normalize_many(kind: str, records: Iterable[Any] | None) -> List[ViewModel]:
    """列表版本；非 dict 的項目略過並記錄 warning"""
    results = []
    for record in records or []:
        if not isinstance(record, Mapping):
            logger.warning(f"Skipping non-object {kind} record: {record!r}")
            continue
        results.append(normalize(kind, record))
    return results


def to_canonical(kind: str, raw: Any) -> Dict[str, Any]:
    """normalize 後輸出標準鍵名的 dict"""
    return normalize(kind, raw).to_dict()
