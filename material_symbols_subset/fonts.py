"""
Google Fonts 連結產生 — Material Symbols 三種變體的字族與 class 對照

依掃描結果組出只含使用到圖示的 css2 URL，並插入 index.html 的 <head> 最前面。
"""

import html
import re
from html.parser import HTMLParser
from dataclasses import dataclass

GOOGLE_FONTS_CSS_URL = "https://fonts.googleapis.com/css2"

VARIANTS = ("sharp", "rounded", "outlined")

# 變體 → URL 中的字族名稱（空白以 + 連接）
VARIANT_FONT_FAMILIES = {
    "sharp": "Material+Symbols+Sharp",
    "rounded": "Material+Symbols+Rounded",
    "outlined": "Material+Symbols+Outlined",
}

# 變體 → JSX className 中要尋找的 class
VARIANT_CLASS_NAMES = {
    "sharp": "material-symbols-sharp",
    "rounded": "material-symbols-rounded",
    "outlined": "material-symbols-outlined",
}


@dataclass
class FontAxisConfig:
    """可變字體四軸範圍，原樣帶入 URL，不做驗證."""
    opsz: str = "20..48"
    wght: str = "100..700"
    fill: str = "0..1"
    grad: str = "-50..200"


def build_stylesheet_url(variant: str, icons: list, axes: FontAxisConfig = None) -> str:
    """組出 Google Fonts css2 URL（參數順序與標點必須固定）."""
    axes = axes or FontAxisConfig()
    family = VARIANT_FONT_FAMILIES[variant]
    return (
        f"{GOOGLE_FONTS_CSS_URL}?family={family}:opsz,wght,FILL,GRAD"
        f"@{axes.opsz},{axes.wght},{axes.fill},{axes.grad}"
        f"&icon_names={','.join(icons)}&display=block"
    )


def create_stylesheet_link(variant: str, icons: list, axes: FontAxisConfig = None) -> str:
    """回傳 <link rel="stylesheet"> 標記字串."""
    url = build_stylesheet_url(variant, icons, axes)
    return f'<link rel="stylesheet" href="{html.escape(url, quote=True)}">'


class _StartTagLocator(HTMLParser):
    """記錄第一個真正的 <html> / <head> 起始標籤（註解與 script 內文不算）."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.found = {}

    def handle_starttag(self, tag, attrs):
        if tag in ("html", "head") and tag not in self.found:
            line, column = self.getpos()
            self.found[tag] = (line, column, len(self.get_starttag_text()))


def locate_start_tags(document: str) -> dict:
    """回傳 {"html": 位置, "head": 位置}，位置為起始標籤結束後的字元索引."""
    locator = _StartTagLocator()
    locator.feed(document)
    locator.close()
    line_starts = [0] + [m.end() for m in re.finditer("\n", document)]
    return {
        tag: line_starts[line - 1] + column + length
        for tag, (line, column, length) in locator.found.items()
    }


def inject_stylesheet_link(document: str, link: str) -> str:
    """把 link 插到 <head> 的第一個位置，文件其餘部分不動.

    放在最前面，避免覆蓋後續樣式表的 cascade 順序。
    沒有 <head> 時在 <html> 後補一個；連 <html> 都沒有就補在文件開頭。
    """
    positions = locate_start_tags(document)
    if "head" in positions:
        end = positions["head"]
        return document[:end] + link + document[end:]

    if "html" in positions:
        end = positions["html"]
        return document[:end] + f"<head>{link}</head>" + document[end:]

    return f"<head>{link}</head>" + document
