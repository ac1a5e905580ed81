"""
建置管線 — 掃描目錄與指定檔案 → 擷取圖示 → 產生連結 → 插入 index.html

每次呼叫都重新建立圖示集合（以 safelist 為種子），不在多次建置之間殘留。
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from .collector import get_react_file_contents, read_source_file
from .exceptions import ConfigError, FileReadError
from .extractor import process_react_file
from .fonts import VARIANTS, FontAxisConfig, create_stylesheet_link, inject_stylesheet_link

PLUGIN_NAME = "material-symbols-subset"


def _warn(msg: str) -> None:
    print(f"   ⚠️  [scan] {msg}")


@dataclass
class PluginOptions:
    """管線設定；variant 與 paths 必填."""
    variant: str
    paths: list
    files: list = field(default_factory=list)
    safelist: list = field(default_factory=list)
    icon_props: list = field(default_factory=list)
    axes: FontAxisConfig = field(default_factory=FontAxisConfig)

    def __post_init__(self):
        if not self.variant:
            raise ConfigError("'variant' is required (one of: sharp, rounded, outlined)")
        if self.variant not in VARIANTS:
            valid = ", ".join(VARIANTS)
            raise ConfigError(f"Unknown variant '{self.variant}' (expected one of: {valid})")
        if self.paths is None:
            raise ConfigError("'paths' is required (list of directories to scan)")


def collect_icons(options: PluginOptions, cwd: Optional[str] = None) -> set:
    """依設定掃描所有來源，回傳圖示名稱集合（含 safelist）."""
    base_dir = cwd or os.getcwd()
    icons = {name for name in options.safelist if name.strip()}

    for scan_path in options.paths:
        for source_file in get_react_file_contents(os.path.join(base_dir, scan_path)):
            process_react_file(source_file, icons, options.variant, options.icon_props)

    for file_path in options.files:
        try:
            source_file = read_source_file(file_path, base_dir)
        except FileReadError as e:
            _warn(f"Failed to read file {e.path}: {e}")
            continue
        process_react_file(source_file, icons, options.variant, options.icon_props)

    return icons


def sorted_icons(icons: set) -> list:
    return sorted(icon for icon in icons if icon != "")


def transform_index_html(document: str, options: PluginOptions, cwd: Optional[str] = None) -> str:
    """掃描後把 Material Symbols 連結插到 <head> 最前面，回傳新的 HTML."""
    icons = sorted_icons(collect_icons(options, cwd))
    link = create_stylesheet_link(options.variant, icons, options.axes)
    return inject_stylesheet_link(document, link)


class MaterialSymbolsPlugin:
    """給建置工具呼叫的 hook：每次建置傳入 index.html，回傳注入後的 HTML."""

    name = PLUGIN_NAME
    order = "pre"

    def __init__(self, options: PluginOptions, cwd: Optional[str] = None):
        self.options = options
        self.cwd = cwd

    def transform_index_html(self, document: str) -> str:
        return transform_index_html(document, self.options, self.cwd)
