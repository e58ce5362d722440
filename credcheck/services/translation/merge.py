"""
Merge translated text into an analysis document.

The original document stays the single source of truth: a deep copy of it
is returned with only allow-listed, human-readable text fields replaced.
Scores, points, weights, enums, URLs, publishers and every other field are
never read from the translated document.
"""

import copy
from collections.abc import Mapping
from typing import Any

Path = tuple[str, ...]

# Single string fields.
TEXT_FIELDS: tuple[Path, ...] = (
    ("summary",),
    ("articleSummary",),
    ("disclaimer",),
    ("proDisclaimer",),
    ("webPresence", "observation"),
    ("corroboration", "summary"),
    ("imageSignals", "disclaimer"),
    ("imageSignals", "coherence", "explanation"),
    ("imageSignals", "scoring", "reasoning"),
    ("result", "summary"),
)

# Every entry of the ``breakdown`` mapping carries a translatable ``reason``.
BREAKDOWN_PATH: Path = ("breakdown",)
BREAKDOWN_TEXT_KEY = "reason"

# Arrays of objects merged pairwise by index; only these keys are copied.
TEXT_ARRAYS: dict[Path, tuple[str, ...]] = {
    ("result", "bestLinks"): ("title", "whyItMatters"),
    ("result", "sources"): ("title", "whyItMatters"),
}

# Lists of strings replaced wholesale, only when the translation is complete.
STRING_LISTS: tuple[Path, ...] = (
    ("imageSignals", "origin", "indicators"),
    ("imageSignals", "scoring", "severityConditionsMet"),
)


def is_text(value: Any) -> bool:
    """A string with non-whitespace content."""
    return isinstance(value, str) and bool(value.strip())


def get_path(document: Any, path: Path) -> Any:
    """Value at ``path`` or None when any step is missing or not a mapping."""
    node = document
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def _merge_text_field(out: dict[str, Any], translated: Mapping[str, Any], path: Path) -> None:
    *parents, leaf = path
    target = get_path(out, tuple(parents)) if parents else out
    if not isinstance(target, dict) or not isinstance(target.get(leaf), str):
        return
    candidate = get_path(translated, path)
    if is_text(candidate):
        target[leaf] = candidate


def _merge_breakdown(out: dict[str, Any], translated: Mapping[str, Any]) -> None:
    breakdown = get_path(out, BREAKDOWN_PATH)
    if not isinstance(breakdown, dict):
        return
    translated_breakdown = get_path(translated, BREAKDOWN_PATH)
    for key, entry in breakdown.items():
        if not isinstance(entry, dict) or not is_text(entry.get(BREAKDOWN_TEXT_KEY)):
            continue
        candidate = get_path(translated_breakdown, (key, BREAKDOWN_TEXT_KEY))
        if is_text(candidate):
            entry[BREAKDOWN_TEXT_KEY] = candidate


def _merge_text_array(
    out: dict[str, Any],
    translated: Mapping[str, Any],
    path: Path,
    keys: tuple[str, ...],
) -> None:
    items = get_path(out, path)
    translated_items = get_path(translated, path)
    if not isinstance(items, list) or not isinstance(translated_items, list):
        return
    for item, translated_item in zip(items, translated_items):
        if not isinstance(item, dict) or not isinstance(translated_item, Mapping):
            continue
        for key in keys:
            if not isinstance(item.get(key), str):
                continue
            candidate = translated_item.get(key)
            if is_text(candidate):
                item[key] = candidate


def _merge_string_list(out: dict[str, Any], translated: Mapping[str, Any], path: Path) -> None:
    *parents, leaf = path
    target = get_path(out, tuple(parents))
    if not isinstance(target, dict) or not isinstance(target.get(leaf), list):
        return
    candidate = get_path(translated, path)
    if not isinstance(candidate, list) or len(candidate) != len(target[leaf]):
        return
    if not all(is_text(value) for value in candidate):
        return
    target[leaf] = list(candidate)


def merge_translated_text(original: Mapping[str, Any], translated: Any) -> dict[str, Any]:
    """
    Copy allow-listed text from ``translated`` into a deep copy of ``original``.

    A translated value is used only when it is a non-blank string and the
    original holds a string at the same place. Arrays of sources and links
    are merged pairwise up to the shorter length. String lists are replaced
    only when the translation has the same length and no blank entries.
    ``original`` is never mutated and a non-mapping ``translated`` is a no-op.

    Args:
        original: Analysis document produced upstream
        translated: Model output parsed from JSON (untrusted)

    Returns:
        New document, equal to ``original`` outside the text allow-list
    """
    out = copy.deepcopy(dict(original))
    if not isinstance(translated, Mapping):
        return out

    for path in TEXT_FIELDS:
        _merge_text_field(out, translated, path)

    _merge_breakdown(out, translated)

    for path, keys in TEXT_ARRAYS.items():
        _merge_text_array(out, translated, path, keys)

    for path in STRING_LISTS:
        _merge_string_list(out, translated, path)

    return out
