from conftest import FakeWindow, FakeWindowSource
from window_tracker import Geometry, WindowMonitor, WindowSnapshot, Workspace, capture_snapshot
from window_tracker.errors import WindowSourceError


class TestWindowMonitor:

    def test_picks_focused_window(self):
        source = FakeWindowSource([
            FakeWindow("Inbox", "Thunderbird", focused=False),
            FakeWindow("main.py - app - Code", "Code", pid=42),
        ])
        snap = WindowMonitor(source).locate_focused()
        assert snap.title == "main.py - app - Code"
        assert snap.window_class == "Code"
        assert snap.pid == 42
        assert snap.workspace == Workspace(0, "Main")

    def test_nothing_focused(self):
        source = FakeWindowSource([FakeWindow("a", "A", focused=False)])
        assert WindowMonitor(source).locate_focused() is None

    def test_no_windows(self):
        assert WindowMonitor(FakeWindowSource()).locate_focused() is None

    def test_source_failure_means_no_focus(self):
        source = FakeWindowSource(error=WindowSourceError("no display"))
        assert WindowMonitor(source).locate_focused() is None

    def test_skips_window_whose_focus_check_fails(self):
        source = FakeWindowSource([
            FakeWindow("gone", "X", failing=("has_focus",)),
            FakeWindow("here", "Y"),
        ])
        assert WindowMonitor(source).locate_focused().title == "here"

    def test_asks_source_on_every_call(self):
        source = FakeWindowSource([FakeWindow("a", "A")])
        monitor = WindowMonitor(source)
        monitor.locate_focused()
        source.windows = [FakeWindow("b", "B")]
        assert monitor.locate_focused().title == "b"
        assert source.calls == 2


class TestCaptureSnapshot:

    def test_failing_getter_only_blanks_its_field(self):
        window = FakeWindow("t", "Firefox", role="browser", pid=7, failing=("get_pid", "get_frame_rect"))
        snap = capture_snapshot(window)
        assert snap.title == "t"
        assert snap.window_class == "Firefox"
        assert snap.role == "browser"
        assert snap.pid == 0
        assert snap.geometry == Geometry()

    def test_none_values_become_defaults(self):
        window = FakeWindow(None, None, workspace=None)
        snap = capture_snapshot(window)
        assert snap.title == ""
        assert snap.window_class == ""
        assert snap.workspace is None

    def test_context_id(self):
        assert WindowSnapshot(title="t", window_class="C").context_id == "C::t"
