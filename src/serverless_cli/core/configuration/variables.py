"""
Variable resolution for service configuration.

Supports the local variable sources::

    ${self:custom.tableName}       # another configuration property
    ${opt:stage}                   # CLI option
    ${env:AWS_REGION}              # environment variable
    ${sls:stage}                   # stage (option or "dev")
    ${env:REGION, 'us-east-1'}     # with fallback literal

A reference that makes up a whole string keeps the referenced value's type;
references embedded in a larger string are interpolated as text.
Unresolvable references are left in place and reported as warnings.

A bare ${self:} (the whole configuration) is not supported: it is left in
place like any other unresolvable reference, unless it carries a fallback.
"""

from __future__ import annotations

import logging
import os
import re
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..context import SessionContext

logger = logging.getLogger(__name__)

# Innermost ${...} reference (no nested braces)
VARIABLE_PATTERN = re.compile(r"\$\{([^${}]+)\}")

# Upper bound on resolution passes (chained self references)
MAX_PASSES = 10

_MISSING = object()


def resolve_variables(context: SessionContext) -> None:
    """
    Resolve variable references in ``context.configuration`` in place.

    Args:
        context: Session context with a loaded configuration
    """
    configuration = context.configuration
    if not configuration:
        return

    resolver = _Resolver(configuration, context.options or {})
    resolved = resolver.resolve()

    configuration.clear()
    configuration.update(resolved)

    for reference in sorted(resolver.unresolved(resolved)):
        logger.warning("Could not resolve variable reference ${%s}", reference)


def _parse_literal(raw: str) -> Any:
    """Parse a fallback literal: quoted string, number, boolean or bare text."""
    raw = raw.strip()
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in ("'", '"'):
        return raw[1:-1]
    if raw in ("true", "false"):
        return raw == "true"
    for cast in (int, float):
        try:
            return cast(raw)
        except ValueError:
            continue
    return raw


class _Resolver:
    def __init__(self, configuration: dict[str, Any], options: dict[str, Any]):
        self.configuration = configuration
        self.options = options
        self._current: Any = configuration

    def resolve(self) -> dict[str, Any]:
        # Always returns a fresh copy, never self.configuration itself
        current: Any = self.configuration
        for _ in range(MAX_PASSES):
            self._current = current
            updated = self._walk(current)
            if updated == current:
                return updated
            current = updated
        return current

    def unresolved(self, node: Any) -> set[str]:
        found: set[str] = set()
        if isinstance(node, dict):
            for value in node.values():
                found |= self.unresolved(value)
        elif isinstance(node, list):
            for value in node:
                found |= self.unresolved(value)
        elif isinstance(node, str):
            found.update(match.strip() for match in VARIABLE_PATTERN.findall(node))
        return found

    def _walk(self, node: Any) -> Any:
        if isinstance(node, dict):
            return {key: self._walk(value) for key, value in node.items()}
        if isinstance(node, list):
            return [self._walk(value) for value in node]
        if isinstance(node, str):
            return self._substitute(node)
        return node

    def _substitute(self, text: str) -> Any:
        whole = VARIABLE_PATTERN.fullmatch(text)
        if whole:
            value = self._lookup(whole.group(1))
            return text if value is _MISSING else value

        def replace(match: re.Match[str]) -> str:
            value = self._lookup(match.group(1))
            if value is _MISSING or isinstance(value, (dict, list)):
                return match.group(0)
            return str(value)

        return VARIABLE_PATTERN.sub(replace, text)

    def _lookup(self, reference: str) -> Any:
        address, _, fallback = reference.partition(",")
        source, sep, path = address.strip().partition(":")

        value: Any = _MISSING
        if sep:
            path = path.strip()
            if source == "self":
                value = self._lookup_self(path)
            elif source == "opt":
                value = self.options.get(path, _MISSING)
            elif source == "env":
                value = os.environ.get(path, _MISSING)
            elif source == "sls" and path == "stage":
                value = self.options.get("stage") or "dev"

        if value is _MISSING and fallback.strip():
            value = _parse_literal(fallback)
        return value

    def _lookup_self(self, path: str) -> Any:
        node: Any = self._current
        if not path:
            return _MISSING
        for part in path.split("."):
            if isinstance(node, dict) and part in node:
                node = node[part]
            elif isinstance(node, list) and part.isdigit() and int(part) < len(node):
                node = node[int(part)]
            else:
                return _MISSING
        # Not yet resolved; wait for a later pass
        if isinstance(node, str) and VARIABLE_PATTERN.search(node):
            return _MISSING
        return node
