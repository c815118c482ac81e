"""Serialisation of monitor option trees.

Two views of a :class:`~monitorkey.models.RootOptions` tree are needed:

* a nested JSON document, as found in the monitor's ``settings.json``;
* an ordered list of ``(path, value)`` pairs, where nested keys are joined
  with the configuration path separator (``Authentication:MonitorApiKey:Subject``).
  This is the form used for environment variables.

Both views include only values that were explicitly set. Plain mappings are
accepted wherever a model is, so callers can flatten arbitrary trees.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Union

from pydantic import BaseModel

PATH_SEPARATOR = ":"
"""Separator between nested setting names in a flattened path."""

OptionsTree = Union[BaseModel, Mapping[str, Any]]


def to_tree(options: OptionsTree) -> dict[str, Any]:
    """Return *options* as nested dicts keyed by setting names, unset values dropped."""
    if isinstance(options, BaseModel):
        return options.model_dump(by_alias=True, exclude_none=True)
    return _prune(options)


def to_json(options: OptionsTree, indent: int = 2) -> str:
    """Serialise the present values of *options* as an indented JSON document."""
    return json.dumps(to_tree(options), indent=indent, ensure_ascii=False)


def flatten(
    options: OptionsTree, separator: str = PATH_SEPARATOR
) -> list[tuple[str, str]]:
    """Flatten *options* into ``(path, value)`` pairs.

    Keys keep the order they were declared or inserted in. List items use
    their index as the path segment. Booleans are written as ``true`` and
    ``false``.

    Args:
        options: A model or mapping to flatten.
        separator: String placed between nested key names.

    Returns:
        The flattened pairs, depth-first.

    Example::

        flatten({"Authentication": {"MonitorApiKey": {"Subject": "abc"}}})
        # [("Authentication:MonitorApiKey:Subject", "abc")]
    """
    pairs: list[tuple[str, str]] = []
    _flatten_into(to_tree(options), "", separator, pairs)
    return pairs


def _flatten_into(
    node: Any, prefix: str, separator: str, pairs: list[tuple[str, str]]
) -> None:
    if isinstance(node, Mapping):
        items = [(str(key), value) for key, value in node.items()]
    elif isinstance(node, (list, tuple)):
        items = [(str(index), value) for index, value in enumerate(node)]
    else:
        pairs.append((prefix, _stringify(node)))
        return

    for key, value in items:
        path = f"{prefix}{separator}{key}" if prefix else key
        _flatten_into(value, path, separator, pairs)


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _prune(node: Any) -> Any:
    """Drop ``None`` values from nested mappings."""
    if isinstance(node, Mapping):
        return {
            str(key): _prune(value) for key, value in node.items() if value is not None
        }
    if isinstance(node, (list, tuple)):
        return [_prune(item) for item in node]
    return node
