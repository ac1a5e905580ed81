#!/usr/bin/env python3
"""
material-symbols-subset CLI — 只載入用到的 Material Symbols 圖示

  material-symbols-subset scan                    # 列出找到的圖示
  material-symbols-subset url                     # 印出 Google Fonts URL
  material-symbols-subset inject dist/index.html  # 把連結插入 HTML
  material-symbols-subset watch index.html -o dist/index.html  # 原始碼變更時重新注入
"""

import argparse
import os
import re
import sys
import time
from pathlib import Path
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler

from material_symbols_subset import __version__
from .collector import SUPPORTED_EXTENSIONS
from .config import DEFAULT_CONFIG_PATH, load_config, options_from_config
from .exceptions import MaterialSymbolsError
from .fonts import build_stylesheet_url, create_stylesheet_link, locate_start_tags
from .pipeline import PluginOptions, collect_icons, sorted_icons, transform_index_html

_WATCHED_EXTENSIONS = SUPPORTED_EXTENSIONS


def _merge_cli_overrides(config: dict, args) -> dict:
    """命令列參數優先於設定檔."""
    merged = dict(config)
    if args.variant:
        merged["variant"] = args.variant
    if args.path:
        merged["paths"] = args.path
    if args.file:
        merged["files"] = args.file
    if args.safelist:
        merged["safelist"] = args.safelist
    if args.icon_prop:
        merged["iconProps"] = args.icon_prop
    return merged


def cmd_scan(options: PluginOptions):
    """Scan: 列出所有找到的圖示."""
    print(f"🔍 Scanning for material-symbols-{options.variant} icons...")
    icons = sorted_icons(collect_icons(options))
    for icon in icons:
        print(f"   • {icon}")
    print(f"   ✅ Found {len(icons)} icons")


def cmd_url(options: PluginOptions):
    """URL: 只印出 stylesheet URL（方便貼進其他工具）."""
    icons = sorted_icons(collect_icons(options))
    print(build_stylesheet_url(options.variant, icons, options.axes))


def strip_previous_link(document: str, options: PluginOptions) -> str:
    """移除上次 inject 插在 <head> 最前面、同變體同四軸的連結（只有 icon_names 可不同）."""
    head_end = locate_start_tags(document).get("head")
    if head_end is None:
        return document
    prefix, _, suffix = create_stylesheet_link(options.variant, ["\0"], options.axes).partition("\0")
    previous = re.compile(re.escape(prefix) + r'[^"]*' + re.escape(suffix)).match(document, head_end)
    if previous is None:
        return document
    return document[:head_end] + document[previous.end():]


def perform_inject(source: str, output: str, options: PluginOptions):
    """讀 HTML → 注入連結 → 寫出；inject 與 watch 共用."""
    with open(source, "r", encoding="utf-8") as f:
        document = f.read()
    # 原地覆寫時重跑要保持冪等
    if os.path.abspath(source) == os.path.abspath(output):
        document = strip_previous_link(document, options)
    result = transform_index_html(document, options)
    os.makedirs(os.path.dirname(os.path.abspath(output)), exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        f.write(result)
    print(f"   ✅ Injected Material Symbols link into {output}")


def cmd_inject(args, options: PluginOptions):
    """Inject: 對單一 HTML 檔執行建置 hook."""
    print(f"💉 Injecting into: {args.html}")
    perform_inject(args.html, args.output or args.html, options)


class ChangeHandler(FileSystemEventHandler):
    """原始碼變更事件處理器，帶 debounce 防抖。"""

    def __init__(self, callback, debounce: float = 1.0):
        self.callback = callback
        self.last_trigger = 0.0
        self.debounce_seconds = debounce

    def _trigger(self, event, path: str):
        if event.is_directory:
            return
        if not path.endswith(_WATCHED_EXTENSIONS):
            return
        current_time = time.time()
        if current_time - self.last_trigger < self.debounce_seconds:
            return
        self.last_trigger = current_time
        print(f"\n🔄 File changed: {path}")
        self.callback()

    def on_modified(self, event):
        self._trigger(event, event.src_path)

    def on_created(self, event):
        self._trigger(event, event.src_path)

    def on_deleted(self, event):
        self._trigger(event, event.src_path)

    def on_moved(self, event):
        # 編輯器以 rename 原子存檔時目的檔才是原始碼；改名成其他副檔名則看來源
        if event.dest_path.endswith(_WATCHED_EXTENSIONS):
            self._trigger(event, event.dest_path)
        else:
            self._trigger(event, event.src_path)


def cmd_watch(args, options: PluginOptions):
    """Watch: 監聽原始碼變更並自動重新注入."""
    output = args.output or args.html
    print(f"👀 Watching for changes in {', '.join(options.paths) or '(no paths)'}...")
    print(f"   Target HTML: {output}")
    print("   Press Ctrl+C to stop.")

    def inject_task():
        try:
            perform_inject(args.html, output, options)
        except (OSError, MaterialSymbolsError) as e:
            print(f"   ⚠️  Inject failed: {e}")

    # 初始執行一次
    inject_task()

    event_handler = ChangeHandler(inject_task, debounce=args.debounce)
    observer = Observer()
    for scan_path in options.paths:
        observer.schedule(event_handler, path=scan_path, recursive=True)
    for file_dir in {str(Path(p).parent) for p in options.files}:
        observer.schedule(event_handler, path=file_dir, recursive=False)
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\n👋 Stopping watch...")
        observer.stop()
    finally:
        observer.join()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="material-symbols-subset",
        description="Material Symbols subset: inject a Google Fonts link with only the icons your React code uses",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config path")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--variant", choices=["sharp", "rounded", "outlined"], help="Icon font variant")
    parser.add_argument("--path", action="append", help="Directory to scan (repeatable)")
    parser.add_argument("--file", action="append", help="Extra file to scan (repeatable)")
    parser.add_argument("--safelist", action="append", help="Icon to always include (repeatable)")
    parser.add_argument("--icon-prop", action="append", help="JSX prop holding an icon name (repeatable)")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("scan", help="List discovered icons",
        epilog="Examples:\n  material-symbols-subset scan\n  material-symbols-subset --variant rounded --path src scan",
        formatter_class=argparse.RawDescriptionHelpFormatter)

    sub.add_parser("url", help="Print the Google Fonts stylesheet URL")

    inject_p = sub.add_parser("inject", help="Prepend the stylesheet link to an HTML file",
        epilog="Examples:\n  material-symbols-subset inject dist/index.html\n  material-symbols-subset inject index.html --output dist/index.html",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    inject_p.add_argument("html", help="HTML file (e.g. dist/index.html)")
    inject_p.add_argument("--output", "-o", help="Output file (default: overwrite input)")

    watch_p = sub.add_parser("watch", help="Re-inject whenever a source file changes",
        epilog="Examples:\n  material-symbols-subset watch index.html --output dist/index.html",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    watch_p.add_argument("html", help="HTML template")
    watch_p.add_argument("--output", "-o", help="Output file (default: overwrite input)")
    watch_p.add_argument("--debounce", type=float, default=1.0, help="Seconds between rebuilds")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    config = _merge_cli_overrides(load_config(args.config), args)
    try:
        options = options_from_config(config)
        if args.command == "scan":
            cmd_scan(options)
        elif args.command == "url":
            cmd_url(options)
        elif args.command == "inject":
            cmd_inject(args, options)
        elif args.command == "watch":
            cmd_watch(args, options)
    except (OSError, MaterialSymbolsError) as e:
        print(f"❌ {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
