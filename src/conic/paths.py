"""Key paths and navigation of the nested configuration tree."""

from typing import Any, Dict, List, Optional, Sequence

DEFAULT_DELIMITER = "."

_MISSING = object()


def split_path(key: str, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """Split a delimited key into path segments.

    An empty key is the empty path, which denotes the tree root.

    Examples:
        >>> split_path("db.host")
        ['db', 'host']
        >>> split_path("")
        []
    """
    if not key:
        return []
    return key.split(delimiter)


def join_path(path: Sequence[str], delimiter: str = DEFAULT_DELIMITER) -> str:
    """Inverse of split_path."""
    return delimiter.join(path)


def navigate(tree: Dict[str, Any], path: Sequence[str]) -> Optional[Dict[str, Any]]:
    """Return the mapping at ``path``, creating missing levels.

    - An empty path returns ``tree`` itself.
    - A missing key, or a key holding ``None``, gets a fresh empty dict.
    - A key holding anything other than a mapping makes the whole path
      unresolvable: ``None`` is returned and the value is left as is.

    Args:
        tree: Configuration tree, mutated when levels are created
        path: Path segments

    Returns:
        The mapping at path, or None if the path is unresolvable
    """
    current = tree
    for segment in path:
        value = current.get(segment, _MISSING)
        if value is _MISSING or value is None:
            value = {}
            current[segment] = value
        elif not isinstance(value, dict):
            return None
        current = value
    return current


def lookup(tree: Dict[str, Any], path: Sequence[str], default: Any = None) -> Any:
    """Return the value at ``path`` without modifying the tree.

    Unlike navigate(), the value may be a leaf. Missing keys and
    non-mapping intermediate values both yield ``default``.
    """
    current: Any = tree
    for segment in path:
        if not isinstance(current, dict) or segment not in current:
            return default
        current = current[segment]
    return current


def contains(tree: Dict[str, Any], path: Sequence[str]) -> bool:
    """Check whether ``path`` resolves to a value, without modifying the tree."""
    return lookup(tree, path, _MISSING) is not _MISSING


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries into a new one."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result
