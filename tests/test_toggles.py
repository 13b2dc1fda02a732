import asyncio
import types

import pytest

from freeport.client.errors import ApiError, NetworkError, NotFoundError
from freeport.client.notifier import Notifier
from freeport.client.toggles import (
    BookmarkToggle, InterestToggle, NotificationReadToggle, Phase, ToggleCoordinator, ToggleState,
    apply_toggle,
)


class FakeBookmarks:
    """只記錄呼叫的假 API；gate 設定時 create 會等到 gate.set()"""

    def __init__(self, gate=None, fail=None):
        self.gate = gate
        self.fail = fail
        self.calls = []

    async def create(self, payload):
        self.calls.append(("create", payload))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail is not None:
            raise self.fail
        return {"SavedID": 42, "EmployerID": payload["EmployerID"], "FreelancerID": payload["FreelancerID"]}

    async def delete(self, saved_id):
        self.calls.append(("delete", saved_id))
        if self.fail is not None:
            raise self.fail


class FakeProjects:
    def __init__(self, count=None, fail=None):
        self.count = count
        self.fail = fail
        self.calls = 0

    async def express_interest(self, project_id):
        self.calls += 1
        if self.fail is not None:
            raise self.fail
        return {"project_id": project_id, "interest_count": self.count, "created": True}


class FakeNotifications:
    def __init__(self):
        self.calls = []

    async def mark_read(self, notification_id):
        self.calls.append(notification_id)
        return {"id": notification_id}


def fake_api(**resources):
    return types.SimpleNamespace(**resources)


async def test_bookmark_round_trip_returns_to_unset():
    bookmarks = FakeBookmarks()
    api = fake_api(bookmarks=bookmarks)
    action = BookmarkToggle(api, employer_id=1, freelancer_id=7)

    pending = apply_toggle(ToggleState(Phase.UNSET), action)
    assert pending.optimistic_state.phase == Phase.PENDING_SET
    assert pending.optimistic_state.is_on
    saved = await pending.commit()
    assert saved == ToggleState(Phase.SET, ref=42)

    pending = apply_toggle(saved, action)
    assert pending.optimistic_state.phase == Phase.PENDING_UNSET
    removed = await pending.commit()
    assert removed.phase == Phase.UNSET
    assert bookmarks.calls == [("create", {"EmployerID": 1, "FreelancerID": 7}), ("delete", 42)]


async def test_commit_is_only_sent_once():
    bookmarks = FakeBookmarks()
    pending = apply_toggle(ToggleState(Phase.UNSET), BookmarkToggle(fake_api(bookmarks=bookmarks), 1, 7))
    first = await pending.commit()
    second = await pending.commit()
    assert first == second
    assert len(bookmarks.calls) == 1


async def test_pending_state_ignores_new_actions():
    bookmarks = FakeBookmarks()
    pending = apply_toggle(ToggleState(Phase.PENDING_SET), BookmarkToggle(fake_api(bookmarks=bookmarks), 1, 7))
    assert pending.ignored
    assert await pending.commit() == ToggleState(Phase.PENDING_SET)
    assert bookmarks.calls == []


async def test_double_click_bookmark_sends_one_request():
    gate = asyncio.Event()
    bookmarks = FakeBookmarks(gate=gate)
    coordinator = ToggleCoordinator()
    action = BookmarkToggle(fake_api(bookmarks=bookmarks), employer_id=1, freelancer_id=7)
    key = ("bookmark", 1, 7)

    first_click = asyncio.ensure_future(coordinator.toggle(key, action, ToggleState(Phase.UNSET)))
    await asyncio.sleep(0)
    assert coordinator.get(key).phase == Phase.PENDING_SET

    second_click = await coordinator.toggle(key, action, ToggleState(Phase.UNSET))
    assert second_click.phase == Phase.PENDING_SET

    gate.set()
    final = await first_click
    assert final == ToggleState(Phase.SET, ref=42)
    assert len(bookmarks.calls) == 1


async def test_toggles_with_different_keys_are_independent():
    gate = asyncio.Event()
    bookmarks = FakeBookmarks(gate=gate)
    coordinator = ToggleCoordinator()
    api = fake_api(bookmarks=bookmarks)

    jane = asyncio.ensure_future(
        coordinator.toggle(("bookmark", 1, 7), BookmarkToggle(api, 1, 7), ToggleState(Phase.UNSET))
    )
    bob = asyncio.ensure_future(
        coordinator.toggle(("bookmark", 1, 8), BookmarkToggle(api, 1, 8), ToggleState(Phase.UNSET))
    )
    await asyncio.sleep(0)
    gate.set()
    await asyncio.gather(jane, bob)
    assert len(bookmarks.calls) == 2


async def test_failed_bookmark_reverts_and_toasts():
    notifier = Notifier()
    bookmarks = FakeBookmarks(fail=NetworkError("Network error: unable to reach server"))
    coordinator = ToggleCoordinator(notifier)
    seen = []
    coordinator.subscribe(lambda key, state: seen.append(state.phase))

    result = await coordinator.toggle(
        ("bookmark", 1, 7), BookmarkToggle(fake_api(bookmarks=bookmarks), 1, 7), ToggleState(Phase.UNSET)
    )
    assert result == ToggleState(Phase.UNSET)
    assert seen == [Phase.PENDING_SET, Phase.UNSET]
    assert [t.message for t in notifier.errors] == [
        "Failed to update bookmark: Network error: unable to reach server"
    ]
    # 不會自動重試
    assert len(bookmarks.calls) == 1


async def test_removing_missing_bookmark_still_unsets():
    bookmarks = FakeBookmarks(fail=NotFoundError("Bookmark not found"))
    pending = apply_toggle(ToggleState(Phase.SET, ref=42), BookmarkToggle(fake_api(bookmarks=bookmarks), 1, 7))
    assert (await pending.commit()).phase == Phase.UNSET


async def test_interest_is_optimistic_and_uses_server_count():
    projects = FakeProjects(count=5)
    pending = apply_toggle(ToggleState(Phase.UNSET, ref=3, count=3), InterestToggle(fake_api(projects=projects), 3))
    assert pending.optimistic_state.count == 4
    result = await pending.commit()
    assert result == ToggleState(Phase.SET, ref=3, count=5)

    # 已表達過興趣就不能再送出
    again = apply_toggle(result, InterestToggle(fake_api(projects=projects), 3))
    assert again.ignored
    assert projects.calls == 1


async def test_failed_interest_restores_count_and_toasts():
    notifier = Notifier()
    projects = FakeProjects(fail=ApiError("Server error", 500))
    coordinator = ToggleCoordinator(notifier)
    initial = ToggleState(Phase.UNSET, ref=3, count=2)
    phases = []
    coordinator.subscribe(lambda key, state: phases.append((state.phase, state.count)))

    result = await coordinator.toggle(("interest", 3), InterestToggle(fake_api(projects=projects), 3), initial)
    assert result == initial
    assert phases == [(Phase.PENDING_SET, 3), (Phase.UNSET, 2)]
    assert len(notifier.errors) == 1
    assert notifier.errors[0].message == "Failed to express interest: Server error"


async def test_unusable_interest_count_keeps_optimistic_count():
    projects = FakeProjects(count="n/a")
    pending = apply_toggle(ToggleState(Phase.UNSET, ref=3, count=3), InterestToggle(fake_api(projects=projects), 3))
    assert await pending.commit() == ToggleState(Phase.SET, ref=3, count=4)


async def test_cancelled_toggle_reverts_and_accepts_next_click():
    gate = asyncio.Event()
    bookmarks = FakeBookmarks(gate=gate)
    coordinator = ToggleCoordinator()
    action = BookmarkToggle(fake_api(bookmarks=bookmarks), 1, 7)
    key = ("bookmark", 1, 7)

    # 離開頁面：進行中的操作被取消
    task = asyncio.ensure_future(coordinator.toggle(key, action, ToggleState(Phase.UNSET)))
    await asyncio.sleep(0)
    assert coordinator.get(key).phase == Phase.PENDING_SET
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert coordinator.get(key) == ToggleState(Phase.UNSET)

    bookmarks.gate = None
    result = await coordinator.toggle(key, action, ToggleState(Phase.UNSET))
    assert result == ToggleState(Phase.SET, ref=42)
    assert len(bookmarks.calls) == 2


async def test_unexpected_error_reverts_and_propagates():
    projects = FakeProjects(fail=RuntimeError("unexpected"))
    coordinator = ToggleCoordinator()
    initial = ToggleState(Phase.UNSET, ref=3, count=2)

    with pytest.raises(RuntimeError):
        await coordinator.toggle(("interest", 3), InterestToggle(fake_api(projects=projects), 3), initial)
    assert coordinator.get(("interest", 3)) == initial
    # 非預期錯誤不是 API 失敗，不顯示 toast
    assert coordinator.notifier.errors == []

    projects.fail = None
    projects.count = 3
    result = await coordinator.toggle(("interest", 3), InterestToggle(fake_api(projects=projects), 3), initial)
    assert result == ToggleState(Phase.SET, ref=3, count=3)
    assert projects.calls == 2


async def test_notification_read_is_one_way():
    notifications = FakeNotifications()
    action = NotificationReadToggle(fake_api(notifications=notifications), 11)

    pending = apply_toggle(ToggleState(Phase.UNREAD, ref=11), action)
    assert pending.optimistic_state.phase == Phase.PENDING_READ
    result = await pending.commit()
    assert result.phase == Phase.READ

    assert apply_toggle(result, action).ignored
    assert notifications.calls == [11]
