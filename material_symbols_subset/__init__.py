"""
material-symbols-subset — 建置時掃描 React 原始碼的 Material Symbols 圖示

只把實際用到的圖示放進 Google Fonts 的 icon_names 參數，避免載入整套字型。
"""

__version__ = "0.1.0"

from .exceptions import MaterialSymbolsError, ParseError, FileReadError, ConfigError
from .collector import SourceFile, get_react_file_contents, read_source_file
from .extractor import (
    extract_icons_from_expression,
    has_variant_class,
    scan_element,
    parse_source,
    process_react_file,
)
from .fonts import (
    VARIANTS,
    FontAxisConfig,
    build_stylesheet_url,
    create_stylesheet_link,
    inject_stylesheet_link,
)
from .pipeline import PluginOptions, MaterialSymbolsPlugin, collect_icons, transform_index_html
from .config import load_config, validate_config, options_from_config

__all__ = [
    "__version__",
    "MaterialSymbolsError",
    "ParseError",
    "FileReadError",
    "ConfigError",
    "SourceFile",
    "get_react_file_contents",
    "read_source_file",
    "extract_icons_from_expression",
    "has_variant_class",
    "scan_element",
    "parse_source",
    "process_react_file",
    "VARIANTS",
    "FontAxisConfig",
    "build_stylesheet_url",
    "create_stylesheet_link",
    "inject_stylesheet_link",
    "PluginOptions",
    "MaterialSymbolsPlugin",
    "collect_icons",
    "transform_index_html",
    "load_config",
    "validate_config",
    "options_from_config",
]
