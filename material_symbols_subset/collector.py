"""
原始碼收集 — 遞迴列出 React 檔案（.tsx / .jsx / .js）並讀出內容
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .exceptions import FileReadError

SUPPORTED_EXTENSIONS = (".tsx", ".jsx", ".js")


@dataclass(frozen=True)
class SourceFile:
    """單一原始碼檔案（路徑 + 文字內容）."""
    path: str
    content: str


def get_react_file_contents(directory: str) -> list:
    """遞迴掃描 directory，回傳所有支援副檔名檔案的 SourceFile.

    symlink 不追也不收（沒有迴圈問題）。目錄不存在、權限錯誤等直接往上拋。
    """
    files = []

    def walk(current_dir: str) -> None:
        with os.scandir(current_dir) as entries:
            for entry in sorted(entries, key=lambda e: e.name):
                if entry.is_dir(follow_symlinks=False):
                    walk(entry.path)
                elif entry.is_file(follow_symlinks=False) and entry.name.endswith(SUPPORTED_EXTENSIONS):
                    with open(entry.path, "r", encoding="utf-8") as f:
                        files.append(SourceFile(path=entry.path, content=f.read()))

    walk(directory)
    return files


def read_source_file(file_path: str, base_dir: Optional[str] = None) -> SourceFile:
    """讀取單一指定檔案；相對路徑以 base_dir（預設目前目錄）為準.

    回傳的 SourceFile.path 保留使用者給的原始路徑，方便警告訊息對照設定檔。
    """
    absolute = Path(base_dir or os.getcwd()) / file_path
    try:
        content = absolute.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(str(e), file_path) from e
    return SourceFile(path=file_path, content=content)
