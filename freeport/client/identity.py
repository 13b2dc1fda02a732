# freeport/client/identity.py
# 帳號 -> Profile (Freelancer / Employer)；找不到時以最少欄位建立
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from freeport.client.api import FreeportApi
from freeport.client.config import client_settings
from freeport.client.errors import AuthError, FreeportError, IdentityError, ProfileResolutionError
from freeport.client.normalizer import normalize
from freeport.client.view_models import EmployerView, FreelancerView
from freeport.utils.text import split_display_name

logger = logging.getLogger(__name__)

ROLES = ("freelancer", "employer")

ProfileView = Union[FreelancerView, EmployerView]


@dataclass(frozen=True)
class Account:
    """登入中的帳號 (來自 /auth/user 或登入回應的 user_info)"""
    id: Optional[int]
    email: str
    name: str
    user_type: str

    @classmethod
    def from_user_info(cls, raw: Dict[str, Any]) -> "Account":
        view = normalize("account", raw)
        return cls(id=view.account_id, email=view.email, name=view.name, user_type=view.user_type)


def creation_payload(account: Account, role: str) -> Dict[str, str]:
    """
    建立 Profile 的最少欄位
    - freelancer: 顯示名稱拆成 FirstName / LastName
    - employer: CompanyName 與 ContactPersonName 都先用顯示名稱
    """
    name = (account.name or "").strip()
    if role == "freelancer":
        first, last = split_display_name(name)
        return {"FirstName": first or name or "Freelancer", "LastName": last or "", "Email": account.email}
    return {
        "CompanyName": name or "Company",
        "ContactPersonName": name or "Contact",
        "Email": account.email,
    }


def _same_email(a: str, b: str) -> bool:
    return a.strip().lower() == b.strip().lower()


class IdentityResolver:
    """
    resolve_profile(account, role) -> FreelancerView | EmployerView
    - mode="server": POST /profiles/me (伺服器端冪等 find-or-create)
    - mode="search": GET 列表 ?search=email，精確比對 email，找不到才 POST 建立
    同一組 (email, role) 同時只會有一個解析流程，後到的呼叫共用結果
    """

    def __init__(self, api: FreeportApi, mode: Optional[str] = None):
        self.api = api
        self.mode = mode or client_settings.PROFILE_RESOLVE_MODE
        if self.mode not in ("server", "search"):
            raise ValueError(f"Unknown profile resolve mode: {self.mode!r}")
        self._inflight: Dict[Tuple[str, str], asyncio.Future] = {}

    async def resolve_profile(self, account: Account, role: Optional[str] = None) -> ProfileView:
        role = role or account.user_type
        if role not in ROLES:
            raise IdentityError(f"Unsupported role: {role!r}")
        if not account.email or not account.email.strip():
            raise IdentityError("Account has no email; cannot resolve a profile")

        key = (account.email.strip().lower(), role)
        pending = self._inflight.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._resolve(account, role))
            self._inflight[key] = pending
            pending.add_done_callback(lambda _: self._inflight.pop(key, None))
        return await asyncio.shield(pending)

    async def _resolve(self, account: Account, role: str) -> ProfileView:
        try:
            if self.mode == "server":
                return await self._resolve_on_server(role)
            return await self._resolve_by_search(account, role)
        except (AuthError, ProfileResolutionError):
            # 401 已由 transport 處理 (登出 + 導回登入頁)
            raise
        except FreeportError as exc:
            logger.warning(f"Failed to resolve {role} profile for {account.email}: {exc.message}")
            raise ProfileResolutionError(f"Unable to load your {role} profile", cause=exc) from exc

    async def _resolve_on_server(self, role: str) -> ProfileView:
        body = await self.api.profiles.resolve()
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            raise ProfileResolutionError("Profile endpoint returned no profile")
        if body.get("created"):
            logger.info(f"Created {role} profile on first visit")
        return normalize(role, data)

    async def _resolve_by_search(self, account: Account, role: str) -> ProfileView:
        resource = self.api.freelancers if role == "freelancer" else self.api.employers

        # 1. 先查 (search 是子字串比對，要自己挑出 email 完全相同的那筆)
        candidates = await resource.list(search=account.email.strip())
        matches = [
            view for view in (normalize(role, c) for c in candidates if isinstance(c, dict))
            if _same_email(view.email, account.email)
        ]
        if matches:
            if len(matches) > 1:
                logger.warning(
                    f"{len(matches)} {role} profiles match {account.email}; using the first one"
                )
            return matches[0]

        # 2. 找不到才建立
        created = await resource.create(creation_payload(account, role))
        logger.info(f"Created {role} profile for {account.email}")
        return normalize(role, created)
