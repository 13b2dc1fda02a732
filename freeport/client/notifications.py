# freeport/client/notifications.py
import logging
from typing import List, Optional

from freeport.client.api import FreeportApi
from freeport.client.errors import FreeportError
from freeport.client.normalizer import normalize_many
from freeport.client.toggles import (
    NotificationReadToggle, Phase, ToggleCoordinator, ToggleState, read_state,
)
from freeport.client.view_models import NotificationView

logger = logging.getLogger(__name__)


class NotificationCenter:
    """
    通知列表 + 未讀數
    - mark_read: 經由 ToggleCoordinator (Unread -> PendingRead -> Read)
    - mark_all_read: 先把畫面全部標成已讀，失敗時還原並顯示 toast
    """

    def __init__(self, api: FreeportApi, coordinator: Optional[ToggleCoordinator] = None):
        self.api = api
        self.coordinator = coordinator or ToggleCoordinator()
        self.notifications: List[NotificationView] = []
        self.error: Optional[str] = None

    @staticmethod
    def key(notification_id: int):
        return ("notification", notification_id)

    async def refresh(self) -> List[NotificationView]:
        try:
            self.notifications = normalize_many("notification", await self.api.notifications.list())
            self.error = None
        except FreeportError as exc:
            logger.error(f"Failed to load notifications: {exc.message}")
            self.error = "Failed to load notifications."
            return self.notifications

        # 伺服器資料為準
        for notification in self.notifications:
            self.coordinator.set(self.key(notification.notification_id), read_state(notification))
        return self.notifications

    def is_read(self, notification_id: int) -> bool:
        state = self.coordinator.get(self.key(notification_id))
        return state is not None and state.phase in (Phase.READ, Phase.PENDING_READ)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self.notifications if not self.is_read(n.notification_id))

    async def mark_read(self, notification_id: int) -> bool:
        initial = self.coordinator.get(self.key(notification_id)) or read_state({"id": notification_id})
        state = await self.coordinator.toggle(
            self.key(notification_id), NotificationReadToggle(self.api, notification_id), initial
        )
        return state.phase == Phase.READ

    async def mark_all_read(self) -> int:
        unread = [n.notification_id for n in self.notifications if not self.is_read(n.notification_id)]
        if not unread:
            return 0

        previous = {
            i: self.coordinator.get(self.key(i), ToggleState(Phase.UNREAD, ref=i)) for i in unread
        }
        for notification_id in unread:
            self.coordinator.set(self.key(notification_id), ToggleState(Phase.READ, ref=notification_id))

        try:
            updated = await self.api.notifications.mark_all_read()
        except FreeportError as exc:
            for notification_id, state in previous.items():
                self.coordinator.set(self.key(notification_id), state)
            self.coordinator.notifier.error(f"Failed to mark notifications as read: {exc.message}")
            return 0
        return updated
