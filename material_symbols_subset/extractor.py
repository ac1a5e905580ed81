"""
圖示擷取器 — 解析 React 原始碼（JSX / TSX）並找出 Material Symbols 圖示名稱

兩種來源：
  1. className 含變體 class（如 material-symbols-rounded）的元素，其子節點文字
  2. 設定的 icon props（如 leftIcon="home"）的值

三元、邏輯、樣板字串與函式呼叫（clsx、twMerge 等）都會保守地展開所有分支。
"""

import html
import re
from typing import Iterator, Optional

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser, Tree

from .collector import SourceFile
from .exceptions import ParseError
from .fonts import VARIANT_CLASS_NAMES

# TSX 文法同時涵蓋 JSX 與 TypeScript 型別語法，.js / .jsx 也用它解析
TSX_LANGUAGE = Language(ts_typescript.language_tsx())

_LOGICAL_OPERATORS = {"&&", "||", "??"}
_ELEMENT_TYPES = ("jsx_element", "jsx_self_closing_element")
_TEXT_TYPES = ("jsx_text", "html_character_reference")
_TAG_TYPES = ("jsx_opening_element", "jsx_closing_element")

_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")
_SIMPLE_ESCAPES = {
    "n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0",
    # 行接續
    "\n": "", "\r": "", "\r\n": "", "\u2028": "", "\u2029": "",
}


def _warn(msg: str) -> None:
    print(f"   ⚠️  [scan] {msg}")


# ─── 節點小工具 ──────────────────────────────────────────────────────────────

def _text(node: Node) -> str:
    return node.text.decode("utf-8")


def _named(node: Node) -> list:
    """具名子節點，排除註解."""
    return [c for c in node.named_children if c.type != "comment"]


def _first_named(node: Node) -> Optional[Node]:
    named = _named(node)
    return named[0] if named else None


def _unwrap(node: Optional[Node]) -> Optional[Node]:
    """去掉括號；括號本身不影響值."""
    while node is not None and node.type == "parenthesized_expression":
        node = _first_named(node)
    return node


def _cook(raw: str) -> str:
    """把 JS 字串 / 樣板字串的跳脫序列轉成實際字元."""
    def replace(match):
        seq = match.group(1)
        if seq[0] in "ux" and len(seq) > 1:
            code = int(seq.strip("u{}x"), 16)
            return chr(code) if code <= 0x10FFFF else match.group(0)
        return _SIMPLE_ESCAPES.get(seq, seq)

    return _ESCAPE_RE.sub(replace, raw)


def _string_value(node: Node) -> str:
    raw = _text(node)[1:-1]
    # JSX 屬性字串不處理 JS 跳脫，只解 HTML entity
    if node.parent is not None and node.parent.type == "jsx_attribute":
        return html.unescape(raw)
    return _cook(raw)


def _template_segments(node: Node) -> list:
    """樣板字串的靜態片段（cooked），數量 = 插值數 + 1."""
    source = node.text
    base = node.start_byte
    segments = []
    start = None
    for child in node.children:
        if child.type == "`":
            if start is None:
                start = child.end_byte
            else:
                segments.append(source[start - base:child.start_byte - base])
        elif child.type == "template_substitution":
            segments.append(source[start - base:child.start_byte - base])
            start = child.end_byte
    return [_cook(raw.decode("utf-8")) for raw in segments]


def _is_logical(node: Node) -> bool:
    if node.type != "binary_expression":
        return False
    operator = node.child_by_field_name("operator")
    return operator is not None and operator.type in _LOGICAL_OPERATORS


def _call_arguments(node: Node) -> list:
    arguments = node.child_by_field_name("arguments")
    # tagged template（cx`...`）不是一般呼叫
    if arguments is None or arguments.type != "arguments":
        return []
    return _named(arguments)


def _add_icon(value: str, icons: set) -> None:
    name = value.strip()
    if name:
        icons.add(name)


# ─── Expression Walker ──────────────────────────────────────────────────────

def extract_icons_from_expression(expression: Optional[Node], icons: set) -> None:
    """遞迴走訪運算式，把所有可靜態確定的字串常值加入 icons.

    三元與邏輯運算兩邊都收（建置時無法得知實際走哪一支）；
    函式呼叫不看被呼叫者，所有參數都展開。其他形狀一律忽略。
    """
    expression = _unwrap(expression)
    if expression is None:
        return

    kind = expression.type
    if kind == "string":
        _add_icon(_string_value(expression), icons)
    elif kind == "ternary_expression":
        extract_icons_from_expression(expression.child_by_field_name("consequence"), icons)
        extract_icons_from_expression(expression.child_by_field_name("alternative"), icons)
    elif _is_logical(expression):
        extract_icons_from_expression(expression.child_by_field_name("left"), icons)
        extract_icons_from_expression(expression.child_by_field_name("right"), icons)
    elif kind == "template_string":
        segments = _template_segments(expression)
        # 有插值的樣板字串不分析
        if len(segments) == 1:
            _add_icon(segments[0], icons)
    elif kind == "call_expression":
        for argument in _call_arguments(expression):
            extract_icons_from_expression(argument, icons)


# ─── Class-Attribute Matcher ────────────────────────────────────────────────

def has_variant_class(class_value: Optional[Node], class_name: str) -> bool:
    """className 的值（或其中任一分支）是否含有 class_name."""
    class_value = _unwrap(class_value)
    if class_value is None:
        return False

    kind = class_value.type
    if kind == "string":
        return class_name in _string_value(class_value)
    if kind == "jsx_expression":
        return has_variant_class(_first_named(class_value), class_name)
    if kind == "call_expression":
        return any(has_variant_class(arg, class_name) for arg in _call_arguments(class_value))
    if kind == "ternary_expression":
        return (
            has_variant_class(class_value.child_by_field_name("consequence"), class_name)
            or has_variant_class(class_value.child_by_field_name("alternative"), class_name)
        )
    if _is_logical(class_value):
        return (
            has_variant_class(class_value.child_by_field_name("left"), class_name)
            or has_variant_class(class_value.child_by_field_name("right"), class_name)
        )
    if kind == "template_string":
        return any(class_name in segment for segment in _template_segments(class_value))
    return False


# ─── Element Scanner ────────────────────────────────────────────────────────

def _opening_element(element: Node) -> Node:
    if element.type == "jsx_element":
        return element.child_by_field_name("open_tag")
    return element


def _attribute_name(attribute: Node) -> Optional[str]:
    named = _named(attribute)
    if not named or named[0].type == "jsx_namespace_name":
        return None
    return _text(named[0])


def _attribute_value(attribute: Node) -> Optional[Node]:
    named = _named(attribute)
    return named[1] if len(named) > 1 else None


def find_attribute(element: Node, name: str) -> Optional[Node]:
    """回傳第一個名稱相符的 JSX 屬性（spread 屬性不算）."""
    for child in _opening_element(element).children:
        if child.type == "jsx_attribute" and _attribute_name(child) == name:
            return child
    return None


def element_children(element: Node) -> list:
    if element.type != "jsx_element":
        return []
    return [c for c in element.children if c.type not in _TAG_TYPES]


def extract_icons_from_children(children: list, icons: set) -> None:
    """JSX 子節點：文字直接取（trim 後），{...} 交給 Expression Walker."""
    text_run = []
    for child in children:
        if child.type in _TEXT_TYPES:
            text_run.append(_text(child))
            continue
        _add_icon(html.unescape("".join(text_run)), icons)
        text_run = []
        if child.type == "jsx_expression":
            extract_icons_from_expression(_first_named(child), icons)
    _add_icon(html.unescape("".join(text_run)), icons)


def extract_icons_from_attribute(element: Node, attribute_name: str, icons: set) -> None:
    attribute = find_attribute(element, attribute_name)
    if attribute is None:
        return
    value = _attribute_value(attribute)
    if value is None:
        return
    if value.type == "string":
        _add_icon(_string_value(value), icons)
    elif value.type == "jsx_expression":
        extract_icons_from_expression(_first_named(value), icons)


def scan_element(element: Node, icons: set, class_name: str, icon_props=None) -> None:
    """單一元素：className 比對與 icon props 兩項檢查都會執行."""
    class_attribute = find_attribute(element, "className")
    if class_attribute is not None and has_variant_class(_attribute_value(class_attribute), class_name):
        extract_icons_from_children(element_children(element), icons)

    for prop in icon_props or []:
        extract_icons_from_attribute(element, prop, icons)


def iter_elements(root: Node) -> Iterator[Node]:
    """依文件順序列出所有 JSX 元素（fragment <>...</> 不算元素）."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in _ELEMENT_TYPES and _opening_element(node).child_by_field_name("name") is not None:
            yield node
        stack.extend(reversed(node.children))


# ─── File Processor ─────────────────────────────────────────────────────────

def _first_error(root: Node) -> Node:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        stack.extend(reversed(node.children))
    return root


def parse_source(text: str) -> Tree:
    """以 module + JSX + TypeScript 語法解析；有語法錯誤就拋 ParseError."""
    parser = Parser(TSX_LANGUAGE)
    tree = parser.parse(text.encode("utf-8"))
    if tree.root_node.has_error:
        error = _first_error(tree.root_node)
        line, column = error.start_point
        if error.is_missing:
            message = f"Missing '{error.type}' ({line + 1}:{column})"
        else:
            message = f"Unexpected token ({line + 1}:{column})"
        raise ParseError(message, line + 1, column)
    return tree


def process_react_file(source_file: SourceFile, icons: set, variant: str, icon_props=None) -> None:
    """解析單一檔案並把找到的圖示加入 icons；解析失敗只警告，不中斷整批掃描."""
    class_name = VARIANT_CLASS_NAMES[variant]
    try:
        tree = parse_source(source_file.content)
    except ParseError as e:
        _warn(f"Failed to parse {source_file.path}: {e}")
        return

    for element in iter_elements(tree.root_node):
        scan_element(element, icons, class_name, icon_props)
