import os
import sys
import tempfile

# Ensure the freeport package is on sys.path for imports during tests
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# 設定必須在匯入 freeport 之前完成 (settings 於匯入時讀取環境變數)
_TMP_DIR = tempfile.mkdtemp(prefix="freeport-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP_DIR, 'bootstrap.db')}"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["STORAGE_DIR"] = os.path.join(_TMP_DIR, "storage")

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from freeport.client.api import FreeportApi
from freeport.client.session import SessionContext
from freeport.client.transport import ApiClient
from freeport.core.database import Base, get_db
from freeport.main import app

BASE_URL = "http://testserver"
API_URL = f"{BASE_URL}/api"


@pytest.fixture
async def db_engine(tmp_path):
    # 每個測試一個全新的 SQLite 檔案
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def client(session_factory):
    """直接打 FastAPI app 的 httpx client"""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """
    註冊帳號並回傳 {"token", "headers", "user"}
    e.g. jane = await register("Jane Doe", "jane@example.com")
    """

    async def _register(name, email, user_type="freelancer", password="password123"):
        response = await client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password, "user_type": user_type},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return {
            "token": body["token"],
            "headers": {"Authorization": f"Bearer {body['token']}"},
            "user": body["user_info"],
        }

    return _register


@pytest.fixture
async def api_factory(client):
    """
    建立走 ASGI transport 的 FreeportApi (client 同步層測試用)
    e.g. api = await api_factory(token="...", user_type="freelancer")
    """
    created = []

    async def _make(token=None, user_type="freelancer", on_unauthorized=None):
        session = SessionContext().init()
        if token:
            session.login(token, user_type)
        api_client = ApiClient(
            session,
            base_url=API_URL,
            transport=httpx.ASGITransport(app=app),
            on_unauthorized=on_unauthorized,
        )
        created.append(api_client)
        return FreeportApi(api_client)

    yield _make
    for api_client in created:
        await api_client.aclose()
