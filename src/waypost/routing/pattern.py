"""Path pattern compiler.

Compiles a route path into an object that can test a concrete pathname
(returning the extracted parameters) and render a pathname back from
parameters.

Supported string syntax::

    "/users"                 literal, exact match only
    "/users/:id"             named segment
    "/users/{id:int}"        typed named segment (str, int, float, path)
    "/files/*"               wildcard, captured under ``_``
    "/archive(/:year)"       optional group, nestable

A compiled ``re.Pattern`` is accepted too. Named groups become parameters,
unnamed groups become ``"1"``, ``"2"``, ... Regex patterns cannot be
stringified.
"""

import re
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol
from urllib.parse import quote, unquote

from waypost.errors import PatternError
from waypost.routing.params import CONVERTERS, SEGMENT_VALUE, converter_regex

_NAME_RE = re.compile(r"[A-Za-z0-9_]+")

WILDCARD_KEY = "_"


class CompiledPattern(Protocol):
    """What the registry needs from a compiled path."""

    source: Any

    def match(self, pathname: str) -> dict[str, Any] | None: ...
    def stringify(self, params: Mapping[str, Any] | None = None) -> str: ...


@dataclass(frozen=True, slots=True)
class _Literal:
    text: str


@dataclass(frozen=True, slots=True)
class _Param:
    name: str
    param_type: str | None = None  # None for ``:name`` segments


@dataclass(frozen=True, slots=True)
class _Wildcard:
    pass


@dataclass(frozen=True, slots=True)
class _Optional:
    children: tuple[Any, ...]


def parse_pattern(source: str) -> tuple[Any, ...]:
    """Parse a pattern string into literal, parameter, wildcard and optional nodes.

    Examples::

        "/users"        -> (_Literal("/users"),)
        "/users/:id"    -> (_Literal("/users/"), _Param("id"))
        "/a(/:b)"       -> (_Literal("/a"), _Optional((_Literal("/"), _Param("b"))))
    """
    nodes, _ = _parse(source, 0, 0, set())
    return tuple(nodes)


def _parse(source: str, pos: int, depth: int, seen: set[str]) -> tuple[list[Any], int]:
    nodes: list[Any] = []
    buf: list[str] = []

    def flush() -> None:
        if buf:
            nodes.append(_Literal("".join(buf)))
            buf.clear()

    def claim(name: str) -> None:
        if name in seen:
            msg = f"parameter {name!r} appears more than once in {source!r}"
            raise PatternError(msg)
        seen.add(name)

    while pos < len(source):
        ch = source[pos]
        if ch == "(":
            flush()
            children, pos = _parse(source, pos + 1, depth + 1, seen)
            nodes.append(_Optional(tuple(children)))
            continue
        if ch == ")":
            if depth == 0:
                msg = f"unbalanced ')' at position {pos} in {source!r}"
                raise PatternError(msg)
            flush()
            return nodes, pos + 1
        if ch == ":":
            m = _NAME_RE.match(source, pos + 1)
            if m is None:
                msg = f"':' must be followed by a parameter name in {source!r}"
                raise PatternError(msg)
            flush()
            claim(m.group())
            nodes.append(_Param(m.group()))
            pos = m.end()
            continue
        if ch == "{":
            end = source.find("}", pos)
            if end == -1:
                msg = f"unterminated '{{' at position {pos} in {source!r}"
                raise PatternError(msg)
            name, _, param_type = source[pos + 1 : end].partition(":")
            param_type = param_type or "str"
            if not _NAME_RE.fullmatch(name):
                msg = f"invalid parameter name {name!r} in {source!r}"
                raise PatternError(msg)
            if param_type not in CONVERTERS:
                msg = f"unknown converter {param_type!r} in {source!r}"
                raise PatternError(msg)
            flush()
            claim(name)
            nodes.append(_Param(name, param_type))
            pos = end + 1
            continue
        if ch == "*":
            flush()
            nodes.append(_Wildcard())
            pos += 1
            continue
        buf.append(ch)
        pos += 1

    if depth > 0:
        msg = f"unbalanced '(' in {source!r}"
        raise PatternError(msg)
    flush()
    return nodes, pos


class UrlPattern:
    """A compiled string pattern.

    Usage::

        pattern = UrlPattern("/users/:id")
        pattern.match("/users/42")        # {"id": "42"}
        pattern.stringify({"id": "42"})   # "/users/42"
    """

    __slots__ = ("_groups", "_nodes", "_regex", "source")

    def __init__(self, source: str) -> None:
        if source == "":
            msg = "a pattern must not be empty"
            raise PatternError(msg)
        self.source = source
        self._nodes = parse_pattern(source)
        # group name -> parameter name (None marks a wildcard)
        self._groups: dict[str, str | None] = {}
        self._regex = re.compile(self._build(self._nodes))

    def __repr__(self) -> str:
        return f"UrlPattern({self.source!r})"

    def _build(self, nodes: tuple[Any, ...]) -> str:
        parts: list[str] = []
        for node in nodes:
            if isinstance(node, _Literal):
                parts.append(re.escape(node.text))
            elif isinstance(node, _Param):
                group = f"p{len(self._groups)}"
                self._groups[group] = node.name
                regex = SEGMENT_VALUE if node.param_type is None else converter_regex(node.param_type)
                parts.append(f"(?P<{group}>{regex})")
            elif isinstance(node, _Wildcard):
                group = f"p{len(self._groups)}"
                self._groups[group] = None
                parts.append(f"(?P<{group}>.*?)")
            else:
                parts.append(f"(?:{self._build(node.children)})?")
        return "".join(parts)

    def match(self, pathname: str) -> dict[str, Any] | None:
        """Return extracted parameters, or ``None`` if *pathname* does not match."""
        m = self._regex.fullmatch(pathname)
        if m is None:
            return None
        params: dict[str, Any] = {}
        wildcards: list[str] = []
        for group, name in self._groups.items():
            value = m.group(group)
            if value is None:
                continue
            if name is None:
                wildcards.append(unquote(value))
            else:
                params[name] = unquote(value)
        if len(wildcards) == 1:
            params[WILDCARD_KEY] = wildcards[0]
        elif wildcards:
            params[WILDCARD_KEY] = wildcards
        return params

    def stringify(self, params: Mapping[str, Any] | None = None) -> str:
        """Render a pathname from *params*.

        An optional group is emitted when at least one parameter inside it
        has a value, and then every parameter it holds is required. Groups
        with no provided parameters (including groups with none at all) are
        left out. Raises ``PatternError`` when a required value is missing.
        """
        params = params or {}
        raw = params.get(WILDCARD_KEY)
        if raw is None:
            wildcards: deque[str] = deque()
        elif isinstance(raw, str):
            wildcards = deque([raw])
        else:
            wildcards = deque(str(v) for v in raw)
        return self._render(self._nodes, params, wildcards)

    def _render(
        self,
        nodes: tuple[Any, ...],
        params: Mapping[str, Any],
        wildcards: deque[str],
    ) -> str:
        parts: list[str] = []
        for node in nodes:
            if isinstance(node, _Literal):
                parts.append(node.text)
            elif isinstance(node, _Param):
                value = params.get(node.name)
                if value is None:
                    msg = f"no value provided for parameter {node.name!r} of {self.source!r}"
                    raise PatternError(msg)
                safe = "/" if node.param_type == "path" else ""
                parts.append(quote(str(value), safe=safe))
            elif isinstance(node, _Wildcard):
                if not wildcards:
                    msg = f"no value provided for wildcard of {self.source!r}"
                    raise PatternError(msg)
                parts.append(quote(wildcards.popleft(), safe="/"))
            elif _provides(node.children, params, wildcards):
                parts.append(self._render(node.children, params, wildcards))
        return "".join(parts)


def _provides(nodes: tuple[Any, ...], params: Mapping[str, Any], wildcards: deque[str]) -> bool:
    """Whether any parameter under *nodes* has a value."""
    for node in nodes:
        if isinstance(node, _Param) and params.get(node.name) is not None:
            return True
        if isinstance(node, _Wildcard) and wildcards:
            return True
        if isinstance(node, _Optional) and _provides(node.children, params, wildcards):
            return True
    return False


class RegexPattern:
    """A pattern backed by a user-supplied compiled regex."""

    __slots__ = ("source",)

    def __init__(self, source: re.Pattern[str]) -> None:
        self.source = source

    def __repr__(self) -> str:
        return f"RegexPattern({self.source.pattern!r})"

    def match(self, pathname: str) -> dict[str, Any] | None:
        m = self.source.fullmatch(pathname)
        if m is None:
            return None
        if self.source.groupindex:
            return {k: v for k, v in m.groupdict().items() if v is not None}
        return {str(i): v for i, v in enumerate(m.groups(), 1) if v is not None}

    def stringify(self, params: Mapping[str, Any] | None = None) -> str:
        msg = f"cannot stringify regex pattern {self.source.pattern!r}"
        raise PatternError(msg)


def compile_pattern(source: Any) -> CompiledPattern:
    """Compile *source* (a pattern string or a compiled regex).

    Raises ``PatternError`` for anything else, including ``None`` and
    bytes regexes, which could never match a str pathname.
    """
    if isinstance(source, str):
        return UrlPattern(source)
    if isinstance(source, re.Pattern) and isinstance(source.pattern, str):
        return RegexPattern(source)
    msg = f"a pattern must be a string or a compiled str regex, not {source!r}"
    raise PatternError(msg)
