# freeport/client/api.py
# 依資源分組的 API 呼叫 (對應後端 /api 底下的路由)
from typing import Any, Dict, List, Optional

from freeport.client.transport import ApiClient


class _Resource:
    """標準 CRUD：index / store / show / update / destroy"""

    path = ""

    def __init__(self, client: ApiClient):
        self.client = client

    async def list(self, **params) -> List[Dict[str, Any]]:
        return await self.client.get(self.path, params=params) or []

    async def get(self, record_id: int) -> Dict[str, Any]:
        return await self.client.get(f"{self.path}/{record_id}")

    async def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.post(self.path, json=payload)

    async def update(self, record_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.put(f"{self.path}/{record_id}", json=payload)

    async def delete(self, record_id: int) -> None:
        await self.client.delete(f"{self.path}/{record_id}")


class AuthApi:
    def __init__(self, client: ApiClient):
        self.client = client

    async def register(
        self, name: str, email: str, password: str, user_type: str = "freelancer",
        password_confirmation: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = {"name": name, "email": email, "password": password, "user_type": user_type}
        if password_confirmation is not None:
            payload["password_confirmation"] = password_confirmation
        return await self.client.post("/auth/register", json=payload, raw=True)

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """回傳 {token, user_info, ...}"""
        return await self.client.post("/auth/login", json={"email": email, "password": password}, raw=True)

    async def user(self) -> Dict[str, Any]:
        return await self.client.get("/auth/user")

    async def logout(self) -> None:
        await self.client.post("/auth/logout")


class ProfilesApi:
    def __init__(self, client: ApiClient):
        self.client = client

    async def me(self) -> Optional[Dict[str, Any]]:
        return await self.client.get("/profiles/me")

    async def resolve(self) -> Dict[str, Any]:
        """伺服器端 find-or-create，回傳 {created, data, ...}"""
        return await self.client.post("/profiles/me", raw=True)


class FreelancersApi(_Resource):
    path = "/freelancers"

    async def skills(self, freelancer_id: int) -> List[Dict[str, Any]]:
        return await self.client.get(f"{self.path}/{freelancer_id}/skills") or []

    async def portfolio(self, freelancer_id: int) -> List[Dict[str, Any]]:
        return await self.client.get(f"{self.path}/{freelancer_id}/portfolio") or []

    async def upload_profile_picture(
        self, freelancer_id: int, filename: str, content: bytes, content_type: str
    ) -> Dict[str, Any]:
        files = {"profile_picture": (filename, content, content_type)}
        return await self.client.post(f"{self.path}/{freelancer_id}/profile-picture", files=files)


class EmployersApi(_Resource):
    path = "/employers"

    async def bookmarks(self, employer_id: int) -> List[Dict[str, Any]]:
        return await self.client.get(f"{self.path}/{employer_id}/bookmarks") or []

    async def upload_company_logo(
        self, employer_id: int, filename: str, content: bytes, content_type: str
    ) -> Dict[str, Any]:
        files = {"company_logo": (filename, content, content_type)}
        return await self.client.post(f"{self.path}/{employer_id}/company-logo", files=files)


class SkillsApi(_Resource):
    path = "/skills"


class EducationApi(_Resource):
    path = "/education"


class PortfolioApi(_Resource):
    path = "/portfolio-work"


class AvailabilityApi(_Resource):
    path = "/availability"


class BookmarksApi(_Resource):
    path = "/saved-bookmarked"


class ProjectsApi(_Resource):
    path = "/projects"

    async def express_interest(self, project_id: int) -> Dict[str, Any]:
        """回傳 {project_id, interest_count, created}"""
        return await self.client.post(f"{self.path}/{project_id}/interest")


class NotificationsApi:
    def __init__(self, client: ApiClient):
        self.client = client

    async def list(self) -> List[Dict[str, Any]]:
        return await self.client.get("/notifications") or []

    async def mark_read(self, notification_id: int) -> Dict[str, Any]:
        return await self.client.post(f"/notifications/{notification_id}/read")

    async def mark_all_read(self) -> int:
        body = await self.client.post("/notifications/read-all", raw=True)
        return int(body.get("updated", 0)) if isinstance(body, dict) else 0


class FreeportApi:
    """
    e.g.
        api = FreeportApi(ApiClient(session))
        await api.freelancers.list(search="react")
    """

    def __init__(self, client: ApiClient):
        self.client = client
        self.auth = AuthApi(client)
        self.profiles = ProfilesApi(client)
        self.freelancers = FreelancersApi(client)
        self.employers = EmployersApi(client)
        self.skills = SkillsApi(client)
        self.education = EducationApi(client)
        self.portfolio = PortfolioApi(client)
        self.availability = AvailabilityApi(client)
        self.bookmarks = BookmarksApi(client)
        self.projects = ProjectsApi(client)
        self.notifications = NotificationsApi(client)

    @property
    def session(self):
        return self.client.session

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """登入並寫入 session"""
        body = await self.auth.login(email, password)
        self.session.login(body["token"], body["user_info"]["user_type"])
        return body

    async def logout(self) -> None:
        """通知伺服器撤銷 token；不論成功與否本地都會登出"""
        try:
            await self.auth.logout()
        finally:
            self.session.logout()
