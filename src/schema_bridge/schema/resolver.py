"""Local ``$ref`` resolution for JSON Schema documents.

Only document-local pointers (``#/path/to/node``) are followed. Remote
references, dangling pointers and cycles are left in place as the original
``$ref`` object, and a warning is logged so the loss is visible.
"""

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import unquote

from jsonpointer import EndOfList, JsonPointerException, resolve_pointer

from schema_bridge.schema.values import REF_KEY, Value, has_references, reference_of

logger = logging.getLogger(__name__)

_MISSING = object()


def _with_siblings(target: Any, reference: Mapping[str, Any]) -> Any:
    """Overlay the keys written next to ``$ref`` on a mapping target."""
    siblings = {key: value for key, value in reference.items() if key != REF_KEY}
    if not siblings or not isinstance(target, Mapping):
        return target
    return {**target, **siblings}


class ReferenceResolver:
    """Resolves local references against a root document.

    The resolver itself holds no traversal state. The set of pointers
    currently being followed is passed into each call, so one resolver can
    serve any number of independent conversions.

    Attributes:
        root: The document pointers are resolved against
    """

    def __init__(self, root: Value) -> None:
        self.root = root

    def lookup(self, pointer: str) -> Any:
        """Find the value a local pointer names.

        The fragment is percent-decoded before it is read as a JSON pointer,
        so ``#/$defs/My%20Type`` names the key ``My Type``.

        Args:
            pointer: A pointer such as ``#/$defs/Address``

        Returns:
            The target value, or ``_MISSING`` if the pointer is not local,
            is malformed or names nothing in the document.
        """
        if not pointer.startswith("#"):
            return _MISSING

        try:
            target = resolve_pointer(self.root, unquote(pointer[1:]), _MISSING)
        except JsonPointerException as e:
            logger.debug(f"Malformed pointer {pointer}: {e}")
            return _MISSING
        if isinstance(target, EndOfList):
            return _MISSING
        return target

    def _follow(self, value: Mapping[str, Any], pointer: str, in_flight: set[str]) -> Any:
        if pointer in in_flight:
            logger.warning(f"Circular reference left unresolved: {pointer}")
            return _MISSING
        if not pointer.startswith("#"):
            logger.warning(f"Non-local reference left unresolved: {pointer}")
            return _MISSING

        target = self.lookup(pointer)
        if target is _MISSING:
            logger.warning(f"Dangling reference left unresolved: {pointer}")
            return _MISSING
        return _with_siblings(target, value)

    def resolve(self, value: Value, in_flight: set[str] | None = None) -> Value:
        """Replace every local reference in a value tree by its target.

        Args:
            value: The tree to resolve
            in_flight: Pointers already being followed by the caller. A new
                set is used when omitted.

        Returns:
            A resolved copy of the tree. A tree without references is
            returned unchanged.
        """
        if in_flight is None:
            if not has_references(value):
                return value
            in_flight = set()
        return self._resolve(value, in_flight)

    def _resolve(self, value: Value, in_flight: set[str]) -> Value:
        if isinstance(value, Mapping):
            pointer = reference_of(value)
            if pointer is None:
                return {key: self._resolve(item, in_flight) for key, item in value.items()}

            target = self._follow(value, pointer, in_flight)
            if target is _MISSING:
                return value

            in_flight.add(pointer)
            try:
                return self._resolve(target, in_flight)
            finally:
                in_flight.discard(pointer)

        if isinstance(value, (list, tuple)):
            return [self._resolve(item, in_flight) for item in value]

        return value

    def dereference(self, value: Value, in_flight: set[str]) -> tuple[Value, list[str]]:
        """Follow a chain of references one node deep.

        Nested references inside the target are not touched. The in-flight
        set is only read; the caller decides how long the followed pointers
        stay in flight.

        Args:
            value: The node to dereference
            in_flight: Pointers being followed further up the current path

        Returns:
            Tuple of (node, followed pointers). The node is the original
            ``$ref`` object when the first pointer cannot be followed.
        """
        followed: list[str] = []
        pointer = reference_of(value)
        while pointer is not None:
            target = self._follow(value, pointer, in_flight | set(followed))
            if target is _MISSING:
                break
            followed.append(pointer)
            value = target
            pointer = reference_of(value)
        return value, followed


def resolve(value: Value, root: Value) -> Value:
    """Resolve all local references of ``value`` against ``root``."""
    return ReferenceResolver(root).resolve(value)
