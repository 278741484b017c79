"""Tests for the Streamlit session cell and queued notifier."""

from ygg_portal import host
from ygg_portal.host import StreamlitNotifier, StreamlitSessionCell
from ygg_portal.session import SessionState


class TestStreamlitSessionCell:
    def test_initializes_default_state(self):
        store = {}
        cell = StreamlitSessionCell(store=store)
        assert cell.get() == SessionState()
        assert store[host.SESSION_KEY] == SessionState()

    def test_set_replaces_stored_value(self):
        store = {}
        cell = StreamlitSessionCell(store=store)
        new_state = SessionState(login_mode=False)
        cell.set(new_state)
        assert store[host.SESSION_KEY] is new_state
        assert cell.get() is new_state


class TestStreamlitNotifier:
    def test_notifications_are_queued_in_order(self):
        store = {}
        notifier = StreamlitNotifier(store=store)
        notifier.notify("使用随机的uuid！", "info")
        notifier.notify("注册成功，uuid:new-uuid", "success")
        assert store[host.NOTIFICATIONS_KEY] == [
            {"message": "使用随机的uuid！", "severity": "info"},
            {"message": "注册成功，uuid:new-uuid", "severity": "success"},
        ]

    def test_flush_shows_toasts_and_clears_queue(self, monkeypatch):
        shown = []
        monkeypatch.setattr(host.st, "toast", lambda body, icon=None: shown.append((body, icon)))
        store = {}
        notifier = StreamlitNotifier(store=store)
        notifier.notify("登录失败: bad password", "error")

        assert notifier.flush() == 1
        assert shown == [("登录失败: bad password", "❌")]
        assert store[host.NOTIFICATIONS_KEY] == []
        assert notifier.flush() == 0
