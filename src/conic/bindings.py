"""Binding registry: keeps bound references in sync with the tree."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Sequence, Tuple

from .adapters import Adapter
from .bridge import apply_to_target, dump_target
from .errors import BindingError
from .paths import DEFAULT_DELIMITER, lookup, navigate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Binding:
    """A (path, target) pair.

    ``writeback`` is False for bindings that are only filled on load and
    never written into the tree on save.
    """

    path: Tuple[str, ...]
    target: Any
    delimiter: str = DEFAULT_DELIMITER
    writeback: bool = True

    @property
    def key(self) -> str:
        return self.delimiter.join(self.path)


class BindingRegistry:
    """Ordered list of bindings.

    Registering the same path or target twice creates a second, independent
    binding; both are synchronized, in registration order.
    """

    def __init__(self, key_delimiter: str = DEFAULT_DELIMITER) -> None:
        self.key_delimiter = key_delimiter
        self._bindings: List[Binding] = []

    def register(self, path: Sequence[str], target: Any, writeback: bool = True) -> Binding:
        """Append a binding and return it."""
        binding = Binding(tuple(path), target, self.key_delimiter, writeback)
        self._bindings.append(binding)
        logger.debug(
            "Registered binding",
            extra={"extra_fields": {"path": binding.key, "target": type(target).__name__}},
        )
        return binding

    def __iter__(self) -> Iterator[Binding]:
        return iter(list(self._bindings))

    def __len__(self) -> int:
        return len(self._bindings)

    def synchronize_from_tree(self, tree: Dict[str, Any], adapter: Adapter) -> int:
        """Copy each bound subtree into its target (load direction).

        The tree is only read: bindings whose path is missing or does not
        hold a mapping are skipped and keep their current value. If any
        target fails, the targets updated earlier in the pass are restored
        to their previous values and the error is raised.

        Args:
            tree: Configuration tree
            adapter: Adapter used to round-trip each subtree

        Returns:
            Number of targets updated

        Raises:
            BindingError: If encoding a subtree or applying it to a target fails
        """
        applied: List[Tuple[Binding, Any]] = []
        for binding in self:
            subtree = lookup(tree, binding.path)
            if not isinstance(subtree, dict):
                logger.debug(f"Skipping unresolvable binding path {binding.key!r}")
                continue
            try:
                previous = dump_target(binding.target)
                data = adapter.decode(adapter.encode(subtree))
                apply_to_target(binding.target, data)
            except Exception as e:
                self._restore(applied)
                raise BindingError(
                    f"Failed to load config into binding at {binding.key!r}: {e}",
                    path=binding.key,
                    target=type(binding.target).__name__,
                ) from e
            applied.append((binding, previous))
        return len(applied)

    def _restore(self, applied: List[Tuple[Binding, Any]]) -> None:
        for binding, previous in reversed(applied):
            try:
                apply_to_target(binding.target, previous)
            except Exception as e:
                logger.error(
                    f"Could not restore binding: {{'path': {binding.key!r}, 'error': {str(e)!r}}}",
                    exc_info=True,
                )

    def synchronize_to_tree(self, tree: Dict[str, Any], adapter: Adapter) -> int:
        """Copy each target's current value into the tree (save direction).

        Missing levels along a binding's path are created. The target's
        keys are written over the subtree; other keys of the subtree and
        sibling subtrees are left alone. Load-only bindings are skipped.

        Returns:
            Number of subtrees written

        Raises:
            BindingError: If dumping or encoding a target fails
        """
        written = 0
        for binding in self:
            if not binding.writeback:
                continue
            try:
                data = dump_target(binding.target)
                if data is None:
                    continue
                data = adapter.decode(adapter.encode(data))
            except Exception as e:
                raise BindingError(
                    f"Failed to save binding at {binding.key!r}: {e}",
                    path=binding.key,
                    target=type(binding.target).__name__,
                ) from e
            if not isinstance(data, dict):
                raise BindingError(
                    f"Binding at {binding.key!r} does not encode to a mapping",
                    path=binding.key,
                    target=type(binding.target).__name__,
                )
            subtree = navigate(tree, binding.path)
            if subtree is None:
                logger.debug(f"Skipping unresolvable binding path {binding.key!r}")
                continue
            subtree.update(data)
            written += 1
        return written
