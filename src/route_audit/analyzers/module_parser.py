"""Routing-module parser — extracts route declarations from one routing file.

Pattern-based, not a TypeScript parse.  Comments are blanked, brace and
bracket nesting is tracked (string and regex literals are skipped), and every
object literal whose *own* top-level properties include ``path: '<string>'``
is a route declaration.  Nested ``children: [...]`` arrays of a route object become
its inline children; ``loadChildren`` is captured from ``import('<module>')``
or from the legacy ``'./x/x.module#XModule'`` string form.

Usage::

    cache = ModuleParseCache()
    for decl in cache.get(Path("src/app/app-routing.module.ts")):
        print(decl.path, decl.load_children)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from route_audit.model.route import RouteDeclaration

_logger = logging.getLogger(__name__)

_QUOTES = "'\"`"

# Own-property patterns, applied to an object's interior with nested
# brackets blanked out.
_PATH_RE = re.compile(r"""(?<![\w$.])['"]?path['"]?\s*:\s*(['"`])(.*?)\1""", re.S)
_LOAD_CHILDREN_RE = re.compile(r"""(?<![\w$.])['"]?loadChildren['"]?\s*:""")
_CHILDREN_KEY_RE = re.compile(r"""(?<![\w$.])['"]?children['"]?\s*:\s*$""")
_IMPORT_RE = re.compile(r"""\bimport\(\s*(['"`])([^'"`]+)\1\s*\)""")
_LEGACY_REF_RE = re.compile(r"""\s*(['"])([^'"]+)\1""")

_HASH_ROUTING_RE = re.compile(r"\buseHash\s*:\s*true\b|\bwithHashLocation\s*\(")


class RoutingModuleParseError(ValueError):
    """Raised when a routing file's brackets do not balance."""

    def __init__(self, source_file: Path | str, line: int, detail: str) -> None:
        self.source_file = Path(source_file)
        self.line = line
        super().__init__(f"{source_file}:{line}: {detail}")


# ── lexing helpers ───────────────────────────────────────────────────


def _skip_string(text: str, start: int) -> int:
    """Return the offset just past the string literal opening at *start*."""
    quote = text[start]
    i = start + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        if ch == "\n" and quote != "`":
            # unterminated single-line literal
            return i
        i += 1
    return n


# A ``/`` after one of these (or after ``=>`` / ``return``) opens a regex
# literal; anywhere else it is division.
_REGEX_PRECEDERS = frozenset("(,=:[!&|?{};")
_RETURN_TAIL_RE = re.compile(r"(?:^|[^\w$])return$")


def _opens_regex(text: str, start: int) -> bool:
    """True when the ``/`` at *start* begins a regex literal."""
    j = start - 1
    while j >= 0 and text[j] in " \t\r\n":
        j -= 1
    if j < 0:
        return True
    ch = text[j]
    if ch in _REGEX_PRECEDERS:
        return True
    if ch == ">":
        return j > 0 and text[j - 1] == "="
    return bool(_RETURN_TAIL_RE.search(text[max(0, j - 6):j + 1]))


def _skip_regex(text: str, start: int) -> int:
    """Return the offset just past the regex literal (and flags) opening at *start*."""
    i = start + 1
    n = len(text)
    in_class = False
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "\n":
            # unterminated; regex literals never span lines
            return i
        if in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
        elif ch == "/":
            i += 1
            while i < n and (text[i].isalnum() or text[i] == "_"):
                i += 1
            return i
        i += 1
    return n


def _blank(chars: list[str], start: int, end: int) -> None:
    for k in range(start, end):
        if chars[k] != "\n":
            chars[k] = " "


def strip_comments(text: str) -> str:
    """Replace ``//`` and ``/* */`` comments with spaces, keeping offsets."""
    chars = list(text)
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _QUOTES:
            i = _skip_string(text, i)
            continue
        if text.startswith("//", i):
            end = text.find("\n", i)
            end = n if end < 0 else end
            _blank(chars, i, end)
            i = end
            continue
        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            end = n if end < 0 else end + 2
            _blank(chars, i, end)
            i = end
            continue
        if ch == "/" and _opens_regex(text, i):
            i = _skip_regex(text, i)
            continue
        i += 1
    return "".join(chars)


def _line_of(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1


@dataclass(slots=True)
class _Span:
    """A ``{...}`` or ``[...]`` region of the source."""

    kind: str
    start: int
    end: int = -1
    children: list["_Span"] = field(default_factory=list)


def _scan_spans(text: str, source_file: Path) -> list[_Span]:
    """Build the bracket tree of *text*; return the outermost spans."""
    roots: list[_Span] = []
    stack: list[_Span] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _QUOTES:
            i = _skip_string(text, i)
            continue
        if ch == "/" and _opens_regex(text, i):
            i = _skip_regex(text, i)
            continue
        if ch in "{[":
            span = _Span(kind=ch, start=i)
            (stack[-1].children if stack else roots).append(span)
            stack.append(span)
        elif ch in "}]":
            opener = "{" if ch == "}" else "["
            if not stack or stack[-1].kind != opener:
                raise RoutingModuleParseError(
                    source_file, _line_of(text, i), f"unexpected {ch!r}"
                )
            stack.pop().end = i
        i += 1
    if stack:
        open_span = stack[-1]
        raise RoutingModuleParseError(
            source_file,
            _line_of(text, open_span.start),
            f"unclosed {open_span.kind!r}",
        )
    return roots


def _own_text(text: str, span: _Span) -> str:
    """Interior of *span* with every nested bracket region blanked."""
    offset = span.start + 1
    chars = list(text[offset:span.end])
    for child in span.children:
        _blank(chars, child.start - offset, child.end - offset + 1)
    return "".join(chars)


def _value_end(own: str, start: int) -> int:
    """Offset of the comma that ends the property value starting at *start*."""
    depth = 0
    i = start
    n = len(own)
    while i < n:
        ch = own[i]
        if ch in _QUOTES:
            i = _skip_string(own, i)
            continue
        if ch == "/" and _opens_regex(own, i):
            i = _skip_regex(own, i)
            continue
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == "," and depth <= 0:
            return i
        i += 1
    return n


# ── declaration extraction ───────────────────────────────────────────


def _load_children(own: str) -> str | None:
    m = _LOAD_CHILDREN_RE.search(own)
    if m is None:
        return None
    value = own[m.end():_value_end(own, m.end())]
    legacy = _LEGACY_REF_RE.match(value)
    if legacy:
        return legacy.group(2).split("#", 1)[0]
    imported = _IMPORT_RE.search(value)
    if imported:
        return imported.group(2)
    _logger.debug("loadChildren without a static import: %s", value.strip())
    return None


def _declaration(text: str, span: _Span, source_file: Path) -> RouteDeclaration | None:
    own = _own_text(text, span)
    m = _PATH_RE.search(own)
    if m is None:
        return None

    children: list[RouteDeclaration] = []
    offset = span.start + 1
    for child in span.children:
        if child.kind == "[" and _CHILDREN_KEY_RE.search(own[:child.start - offset]):
            children.extend(_collect(text, child.children, source_file))

    return RouteDeclaration(
        path=m.group(2),
        source_file=source_file,
        load_children=_load_children(own),
        line=_line_of(text, span.start),
        children=tuple(children),
    )


def _collect(text: str, spans: list[_Span], source_file: Path) -> list[RouteDeclaration]:
    """Route declarations among *spans*, descending through non-route containers."""
    out: list[RouteDeclaration] = []
    for span in spans:
        if span.kind == "{":
            decl = _declaration(text, span, source_file)
            if decl is not None:
                out.append(decl)
                continue
        out.extend(_collect(text, span.children, source_file))
    return out


def parse_routing_module(text: str, source_file: Path | str = "<memory>") -> list[RouteDeclaration]:
    """Return the top-level route declarations of one routing file, in source order.

    Raises
    ------
    RoutingModuleParseError
        If braces or brackets do not balance.
    """
    source_file = Path(source_file)
    clean = strip_comments(text)
    return _collect(clean, _scan_spans(clean, source_file), source_file)


def uses_hash_routing(text: str) -> bool:
    """True when the routing file enables hash-based URLs."""
    return bool(_HASH_ROUTING_RE.search(strip_comments(text)))


# ── per-run cache ────────────────────────────────────────────────────


class ModuleParseCache:
    """Reads and parses each routing file at most once per extraction run.

    Keyed by resolved path, so a module reachable through several parents is
    read from disk a single time.
    """

    def __init__(self) -> None:
        self._entries: dict[Path, list[RouteDeclaration]] = {}
        self.reads = 0

    def get(self, path: Path) -> list[RouteDeclaration]:
        key = Path(path).resolve()
        cached = self._entries.get(key)
        if cached is not None:
            return cached
        # Strict decoding: an unreadable routing file is fatal.
        text = key.read_text(encoding="utf-8")
        self.reads += 1
        declarations = parse_routing_module(text, key)
        _logger.debug("Parsed %d route declarations from %s", len(declarations), key)
        self._entries[key] = declarations
        return declarations

    def __contains__(self, path: object) -> bool:
        return isinstance(path, (str, Path)) and Path(path).resolve() in self._entries

    def __len__(self) -> int:
        return len(self._entries)
