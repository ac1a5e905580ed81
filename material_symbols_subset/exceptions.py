"""
例外型別 — 掃描、讀檔與設定錯誤
"""

from typing import Optional


class MaterialSymbolsError(Exception):
    """所有本套件例外的基底類別."""
    pass


class ParseError(MaterialSymbolsError):
    """原始碼無法解析（語法錯誤）."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.line = line
        self.column = column


class FileReadError(MaterialSymbolsError):
    """指定檔案無法讀取（不存在、權限不足或不是 UTF-8）."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class ConfigError(MaterialSymbolsError):
    """必要設定缺少或值不合法，在開始掃描前就拋出."""
    pass
