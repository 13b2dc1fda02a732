# freeport/client/toggles.py
# 樂觀更新 (optimistic UI)：收藏 / 表達興趣 / 通知已讀 共用同一個小型狀態機
#
#   收藏、興趣: UNSET -> PENDING_SET -> SET,  SET -> PENDING_UNSET -> UNSET
#   通知:       UNREAD -> PENDING_READ -> READ (單向)
#
# 失敗時回到操作前的狀態並顯示 toast，不自動重試
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple

from freeport.client.api import FreeportApi
from freeport.client.errors import FreeportError, NotFoundError, ValidationError
from freeport.client.normalizer import normalize, normalize_many
from freeport.client.notifier import Notifier
from freeport.client.view_models import to_optional_int

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    UNSET = "unset"
    PENDING_SET = "pending_set"
    SET = "set"
    PENDING_UNSET = "pending_unset"
    UNREAD = "unread"
    PENDING_READ = "pending_read"
    READ = "read"


PENDING_PHASES = {Phase.PENDING_SET, Phase.PENDING_UNSET, Phase.PENDING_READ}


@dataclass(frozen=True)
class ToggleState:
    """
    phase: 目前狀態
    ref: 伺服器端的 ID (e.g. 收藏的 SavedID)
    count: 計數 (e.g. 案件的 interest_count)
    """
    phase: Phase
    ref: Optional[int] = None
    count: Optional[int] = None

    @property
    def is_pending(self) -> bool:
        return self.phase in PENDING_PHASES

    @property
    def is_on(self) -> bool:
        """畫面上要不要顯示成「已收藏 / 已表達興趣 / 已讀」"""
        return self.phase in (Phase.SET, Phase.PENDING_SET, Phase.READ, Phase.PENDING_READ)


class ToggleAction:
    """
    子類別定義：
    - transition(state): 回傳 (pending 狀態, 樂觀顯示的狀態)，None 表示此狀態下不接受操作
    - perform(state): 呼叫 API，回傳成功後的最終狀態 (合併伺服器回傳的 ID / 計數)
    """

    failure_message = "Action failed"

    def transition(self, state: ToggleState) -> Optional[ToggleState]:
        raise NotImplementedError

    async def perform(self, state: ToggleState) -> ToggleState:
        raise NotImplementedError

    def describe_failure(self, exc: FreeportError) -> str:
        detail = exc.first_message if isinstance(exc, ValidationError) else exc.message
        return f"{self.failure_message}: {detail}" if detail else self.failure_message


class PendingToggle:
    """apply_toggle 的結果：optimistic_state 立即顯示，commit() 送出並回傳最終狀態"""

    def __init__(
        self,
        previous_state: ToggleState,
        optimistic_state: ToggleState,
        action: Optional[ToggleAction],
        notifier: Optional[Notifier] = None,
    ):
        self.previous_state = previous_state
        self.optimistic_state = optimistic_state
        self.action = action
        self.notifier = notifier
        self._result: Optional[ToggleState] = None

    @property
    def ignored(self) -> bool:
        """進行中或不接受的操作：不會呼叫 API"""
        return self.action is None

    async def commit(self) -> ToggleState:
        if self._result is not None:
            return self._result
        if self.action is None:
            self._result = self.previous_state
            return self._result

        try:
            self._result = await self.action.perform(self.previous_state)
        except FreeportError as exc:
            # (重要) 失敗：回到操作前的狀態 + toast，不重試
            message = self.action.describe_failure(exc)
            logger.warning(f"Toggle failed, reverting to {self.previous_state.phase.value}: {message}")
            if self.notifier is not None:
                self.notifier.error(message)
            self._result = self.previous_state
        except BaseException:
            # 取消 (離開頁面) 或非預期錯誤：一樣回到操作前的狀態，再往外丟
            logger.warning(f"Toggle interrupted, reverting to {self.previous_state.phase.value}")
            self._result = self.previous_state
            raise
        return self._result


def apply_toggle(
    state: ToggleState, action: ToggleAction, notifier: Optional[Notifier] = None
) -> PendingToggle:
    """
    applyToggle(currentState, action) -> {optimisticState, commit()}
    進行中 (Pending*) 的狀態再次操作會被忽略
    """
    if state.is_pending:
        logger.debug(f"Ignoring toggle while {state.phase.value}")
        return PendingToggle(state, state, None, notifier)

    optimistic = action.transition(state)
    if optimistic is None:
        return PendingToggle(state, state, None, notifier)
    return PendingToggle(state, optimistic, action, notifier)


# --- 收藏 (雇主收藏工作者) ---
class BookmarkToggle(ToggleAction):
    def __init__(self, api: FreeportApi, employer_id: int, freelancer_id: int):
        self.api = api
        self.employer_id = employer_id
        self.freelancer_id = freelancer_id
        self.failure_message = "Failed to update bookmark"

    def transition(self, state: ToggleState) -> Optional[ToggleState]:
        if state.phase == Phase.UNSET:
            return replace(state, phase=Phase.PENDING_SET)
        if state.phase == Phase.SET:
            return replace(state, phase=Phase.PENDING_UNSET)
        return None

    async def perform(self, state: ToggleState) -> ToggleState:
        if state.phase == Phase.UNSET:
            data = await self.api.bookmarks.create(
                {"EmployerID": self.employer_id, "FreelancerID": self.freelancer_id}
            )
            bookmark = normalize("bookmark", data)
            return ToggleState(Phase.SET, ref=bookmark.saved_id)

        saved_id = state.ref
        if saved_id is None:
            saved_id = (await bookmark_state(self.api, self.employer_id, self.freelancer_id)).ref
        if saved_id is not None:
            try:
                await self.api.bookmarks.delete(saved_id)
            except NotFoundError:
                # 已經被刪除，結果相同
                logger.info(f"Bookmark {saved_id} was already removed")
        return ToggleState(Phase.UNSET)


# --- 表達興趣 (工作者 -> 案件)，只能新增不能取消 ---
class InterestToggle(ToggleAction):
    failure_message = "Failed to express interest"

    def __init__(self, api: FreeportApi, project_id: int):
        self.api = api
        self.project_id = project_id

    def transition(self, state: ToggleState) -> Optional[ToggleState]:
        if state.phase != Phase.UNSET:
            return None
        # 樂觀地先 +1
        return replace(state, phase=Phase.PENDING_SET, count=(state.count or 0) + 1)

    async def perform(self, state: ToggleState) -> ToggleState:
        data = await self.api.projects.express_interest(self.project_id)
        count = to_optional_int(data.get("interest_count")) if isinstance(data, dict) else None
        if count is None:
            # 伺服器沒有回傳可用的計數，沿用樂觀的 +1
            count = (state.count or 0) + 1
        return ToggleState(Phase.SET, ref=self.project_id, count=count)


# --- 通知已讀 ---
class NotificationReadToggle(ToggleAction):
    failure_message = "Failed to mark notification as read"

    def __init__(self, api: FreeportApi, notification_id: int):
        self.api = api
        self.notification_id = notification_id

    def transition(self, state: ToggleState) -> Optional[ToggleState]:
        if state.phase != Phase.UNREAD:
            return None
        return replace(state, phase=Phase.PENDING_READ)

    async def perform(self, state: ToggleState) -> ToggleState:
        await self.api.notifications.mark_read(self.notification_id)
        return ToggleState(Phase.READ, ref=self.notification_id)


class ToggleCoordinator:
    """
    保存每個 toggle 的狀態 (key 例如 ("bookmark", employer_id, freelancer_id))
    - 操作進行中時，同一個 key 的新操作會被忽略 (不會重複呼叫 API)
    - 不同 key 之間互不影響
    """

    def __init__(self, notifier: Optional[Notifier] = None):
        self.notifier = notifier or Notifier()
        self._states: Dict[Hashable, ToggleState] = {}
        self._listeners: List[Callable[[Hashable, ToggleState], Any]] = []

    def subscribe(self, listener: Callable[[Hashable, ToggleState], Any]) -> None:
        self._listeners.append(listener)

    def get(self, key: Hashable, default: Optional[ToggleState] = None) -> Optional[ToggleState]:
        return self._states.get(key, default)

    def set(self, key: Hashable, state: ToggleState) -> None:
        self._states[key] = state
        for listener in list(self._listeners):
            listener(key, state)

    async def toggle(self, key: Hashable, action: ToggleAction, initial: ToggleState) -> ToggleState:
        """
        1. 依目前狀態套用 action
        2. (同步) 先寫入樂觀狀態，第二次點擊會看到 Pending 而被忽略
        3. 等待 API 結果，寫入最終狀態
        4. 被取消或非預期錯誤時還原狀態，不會卡在 Pending
        """
        current = self._states.get(key, initial)
        pending = apply_toggle(current, action, self.notifier)
        if pending.ignored:
            return current

        self.set(key, pending.optimistic_state)
        try:
            result = await pending.commit()
        except BaseException:
            self.set(key, pending.previous_state)
            raise
        self.set(key, result)
        return result


async def bookmark_state(api: FreeportApi, employer_id: int, freelancer_id: int) -> ToggleState:
    """由 GET /employers/{id}/bookmarks 判斷初始收藏狀態"""
    bookmarks = normalize_many("bookmark", await api.employers.bookmarks(employer_id))
    for bookmark in bookmarks:
        if bookmark.freelancer_id == freelancer_id:
            return ToggleState(Phase.SET, ref=bookmark.saved_id)
    return ToggleState(Phase.UNSET)


def interest_state(project: Any, interested: bool = False) -> ToggleState:
    """由案件資料組出興趣按鈕的初始狀態"""
    view = normalize("project", project) if isinstance(project, dict) else project
    phase = Phase.SET if interested else Phase.UNSET
    return ToggleState(phase, ref=view.project_id, count=view.interest_count)


def read_state(notification: Any) -> ToggleState:
    view = normalize("notification", notification) if isinstance(notification, dict) else notification
    phase = Phase.READ if view.is_read else Phase.UNREAD
    return ToggleState(phase, ref=view.notification_id)


def toggle_key(kind: str, *ids: Any) -> Tuple:
    return (kind, *ids)
