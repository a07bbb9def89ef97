"""Pattern synthesis — turns tool-specific queries into ripgrep regex alternatives."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .ripgrep import Match

_REGEX_META = re.compile(r"[.*+?^${}()|\[\]\\]")
_PATH_PARAM = re.compile(r"/:[^/]+")

# Names this short match too much noise to be searched as literals.
MIN_NAME_VARIANT_LENGTH = 4


def escape_regex(text: str) -> str:
    """Backslash-escape regex metacharacters so *text* matches literally."""
    return _REGEX_META.sub(lambda m: "\\" + m.group(0), text)


def join_patterns(alternatives: list[str]) -> str:
    return "|".join(alternatives)


def strip_path_params(path: str) -> str:
    """Drop ``/:name`` segments, e.g. ``/users/:id/posts`` -> ``/users/posts``."""
    return _PATH_PARAM.sub("", path)


def _literal_with_param_variant(path: str) -> list[str]:
    patterns = [escape_regex(path)]
    stripped = strip_path_params(path)
    if stripped != path:
        patterns.append(escape_regex(stripped))
    return patterns


def build_api_caller_patterns(api_path: str) -> list[str]:
    """Alternatives for finding HTTP client calls to *api_path*.

    ``/api/v1/users/:id`` yields the literal path plus ``/api/v1/users`` so
    callers that interpolate the id (``/api/v1/users/${id}``) are found too.
    """
    return _literal_with_param_variant(api_path)


def filter_by_method(matches: list[Match], method: str) -> list[Match]:
    """Keep matches whose line mentions the HTTP *method*."""
    upper = method.upper()
    lower = method.lower()
    needles = (
        upper,
        lower,
        f".{lower}(",
        f"method: '{upper}'",
        f'method: "{upper}"',
    )
    return [m for m in matches if any(n in m.line_text for n in needles)]


def apply_method_filter(matches: list[Match], method: str | None) -> list[Match]:
    """Method-filter *matches*, keeping them all when the filter removes everything.

    The method is often written on a neighbouring line, so an empty filtered
    result is treated as a filter miss rather than as "no callers".
    """
    if not method or not matches:
        return matches
    filtered = filter_by_method(matches, method)
    return filtered if filtered else matches


def generate_name_variants(repo_name: str) -> list[str]:
    """Naming-convention variants of a kebab-case repo name.

    ``sub-backend`` -> sub-backend, sub_backend, subBackend, SubBackend, SUB_BACKEND
    """
    parts = repo_name.split("-")
    snake = repo_name.replace("-", "_")
    camel = parts[0] + "".join(p[:1].upper() + p[1:] for p in parts[1:])
    pascal = "".join(p[:1].upper() + p[1:] for p in parts)

    variants: list[str] = []
    for candidate in (repo_name, snake, camel, pascal, snake.upper()):
        escaped = escape_regex(candidate)
        if escaped not in variants:
            variants.append(escaped)
    return variants


def build_cross_repo_patterns(source_name: str, extra_path: str | None = None) -> list[str]:
    """Alternatives that reveal references to *source_name* from other repos."""
    patterns: list[str] = []

    if len(source_name) >= MIN_NAME_VARIANT_LENGTH:
        patterns.extend(generate_name_variants(source_name))

    if extra_path:
        patterns.extend(_literal_with_param_variant(extra_path))

    if not patterns:
        patterns.append(escape_regex(source_name))
    return patterns
