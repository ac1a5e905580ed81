"""
Watch Mode / ChangeHandler debounce 單元測試
不需要真實檔案系統事件，用 mock event 物件測試過濾與防抖邏輯。
"""
import time
import pytest
from unittest.mock import MagicMock

from material_symbols_subset.cli import ChangeHandler, _WATCHED_EXTENSIONS


# ─── helper: 建立假 FileSystemEvent ──────────────────────────────────────────

def make_event(src_path: str, is_directory: bool = False):
    ev = MagicMock()
    ev.is_directory = is_directory
    ev.src_path = src_path
    return ev


# ─── ChangeHandler 過濾邏輯 ──────────────────────────────────────────────────

class TestChangeHandlerFilter:
    """測試 on_modified 的過濾條件：目錄、副檔名、callback 呼叫。"""

    def setup_method(self):
        self.callback = MagicMock()
        self.handler = ChangeHandler(self.callback, debounce=0.0)

    def test_directory_event_ignored(self):
        self.handler.on_modified(make_event("/src/components/", is_directory=True))
        self.callback.assert_not_called()

    def test_non_watched_extension_ignored(self):
        for ext in [".png", ".md", ".json", ".css", ".ts", ".html"]:
            self.handler.on_modified(make_event(f"/src/file{ext}"))
        self.callback.assert_not_called()

    def test_watched_extensions_trigger_callback(self):
        for ext in _WATCHED_EXTENSIONS:
            self.callback.reset_mock()
            self.handler.last_trigger = 0  # 重置 debounce
            self.handler.on_modified(make_event(f"/src/Button{ext}"))
            self.callback.assert_called_once()

    def test_deleted_file_triggers_callback(self):
        self.handler.on_deleted(make_event("/src/OldIcon.tsx"))
        self.callback.assert_called_once()

    def test_atomic_rename_save_triggers_callback(self):
        ev = make_event("/src/.App.tsx.swp")
        ev.dest_path = "/src/App.tsx"
        self.handler.on_moved(ev)
        self.callback.assert_called_once()

    def test_rename_away_from_source_triggers_callback(self):
        ev = make_event("/src/App.jsx")
        ev.dest_path = "/src/App.jsx.bak"
        self.handler.on_moved(ev)
        self.callback.assert_called_once()

    def test_move_between_unwatched_files_ignored(self):
        ev = make_event("/src/notes.md")
        ev.dest_path = "/src/notes.txt"
        self.handler.on_moved(ev)
        self.callback.assert_not_called()

    def test_created_file_triggers_callback(self):
        self.handler.on_created(make_event("/src/NewIcon.tsx"))
        self.callback.assert_called_once()


# ─── ChangeHandler debounce 邏輯 ─────────────────────────────────────────────

class TestChangeHandlerDebounce:
    """測試防抖：短時間內重複觸發只呼叫一次 callback。"""

    def setup_method(self):
        self.callback = MagicMock()
        self.handler = ChangeHandler(self.callback, debounce=0.5)

    def test_debounce_blocks_rapid_events(self):
        ev = make_event("/src/App.tsx")
        self.handler.on_modified(ev)
        self.handler.on_modified(ev)
        self.handler.on_modified(ev)
        assert self.callback.call_count == 1

    def test_debounce_allows_event_after_window(self):
        ev = make_event("/src/App.tsx")
        self.handler.on_modified(ev)
        assert self.callback.call_count == 1

        # 模擬時間過了超過 debounce 視窗
        self.handler.last_trigger = time.time() - 1.0

        self.handler.on_modified(ev)
        assert self.callback.call_count == 2

    def test_debounce_timestamp_updated(self):
        before = time.time() - 0.01
        self.handler.on_modified(make_event("/src/App.tsx"))
        assert self.handler.last_trigger >= before


def test_watched_extensions_match_scanned_sources():
    assert set(_WATCHED_EXTENSIONS) == {".tsx", ".jsx", ".js"}
