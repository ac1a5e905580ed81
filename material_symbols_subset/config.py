"""設定檔載入、基本驗證與轉換成 PluginOptions."""

import json
from pathlib import Path
from typing import Any

from .exceptions import ConfigError
from .fonts import VARIANTS, FontAxisConfig
from .pipeline import PluginOptions

DEFAULT_CONFIG_PATH = "material-symbols.config.json"

# 已知有效的頂層欄位
_KNOWN_KEYS = {"variant", "paths", "files", "safelist", "iconProps", "opsz", "wght", "FILL", "GRAD"}
_LIST_KEYS = ("paths", "files", "safelist", "iconProps")
_AXIS_KEYS = ("opsz", "wght", "FILL", "GRAD")


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    # 未知欄位（拼字提示）
    for key in cfg:
        if key not in _KNOWN_KEYS:
            known = ", ".join(sorted(_KNOWN_KEYS))
            _warn(f"未知欄位 '{key}'（已知欄位：{known}）")

    variant = cfg.get("variant")
    if variant and variant not in VARIANTS:
        valid = ", ".join(VARIANTS)
        _warn(f"variant '{variant}' 不在已知值中（{valid}）")

    for key in _LIST_KEYS:
        val = cfg.get(key)
        if val is not None and not isinstance(val, list):
            _warn(f"{key} 應為陣列，目前是 {type(val).__name__}")
        elif val and not all(isinstance(item, str) for item in val):
            _warn(f"{key} 的元素應全部為字串")

    for key in _AXIS_KEYS:
        val = cfg.get(key)
        if val is not None and not isinstance(val, str):
            _warn(f"{key} 應為字串（如 \"20..48\"），目前是 {type(val).__name__}")

    # 掃描目錄存在性提示（真正掃描時才會失敗）
    paths = cfg.get("paths")
    for scan_path in paths if isinstance(paths, list) else []:
        if isinstance(scan_path, str) and not Path(scan_path).exists():
            _warn(f"paths 中的 '{scan_path}' 目錄不存在")


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        print(f"   ⚠️  [config] '{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg


def _list_option(cfg: dict, key: str) -> list:
    val = cfg.get(key)
    if val is None:
        return []
    if not isinstance(val, list):
        raise ConfigError(f"'{key}' must be a list, got {type(val).__name__}")
    for item in val:
        if not isinstance(item, str):
            raise ConfigError(f"'{key}' entries must be strings, got {type(item).__name__} ({item!r})")
    return list(val)


def options_from_config(cfg: dict) -> PluginOptions:
    """把 config dict 轉成 PluginOptions；缺 variant / paths 立即拋 ConfigError."""
    if not cfg.get("variant"):
        raise ConfigError("'variant' is required (one of: sharp, rounded, outlined)")
    if cfg.get("paths") is None:
        raise ConfigError("'paths' is required (list of directories to scan)")

    defaults = FontAxisConfig()
    axes = FontAxisConfig(
        opsz=cfg.get("opsz", defaults.opsz),
        wght=cfg.get("wght", defaults.wght),
        fill=cfg.get("FILL", defaults.fill),
        grad=cfg.get("GRAD", defaults.grad),
    )
    return PluginOptions(
        variant=cfg["variant"],
        paths=_list_option(cfg, "paths"),
        files=_list_option(cfg, "files"),
        safelist=_list_option(cfg, "safelist"),
        icon_props=_list_option(cfg, "iconProps"),
        axes=axes,
    )
