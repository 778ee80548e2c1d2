from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

_MISSING = object()


class Scope:
    """Maps identifiers to values.

    A scope is immutable. Extending it returns a new scope whose parent is
    the old one, so closures can hold on to the scope they were created in
    without ever observing later bindings, and extension costs O(1) rather
    than a copy of every binding.

    There are two ways to extend a scope and they are deliberately not the
    same operation:

    * `define_if_absent` is used for top-level declarations: the first
      declaration of a name wins and later ones are ignored.
    * `bind` is used for function parameters and always shadows.
    """

    __slots__ = ('parent', 'name', 'value')

    def __init__(self, parent: Optional['Scope'] = None, name: Optional[str] = None, value: Any = None):
        self.parent = parent
        self.name = name
        self.value = value

    @classmethod
    def from_mapping(cls, bindings: Mapping[str, Any]) -> 'Scope':
        scope = cls()
        for name, value in bindings.items():
            scope = scope.bind(name, value)
        return scope

    def _find(self, name: str) -> Any:
        scope: Optional[Scope] = self
        while scope is not None:
            if scope.name is not None and scope.name == name:
                return scope.value
            scope = scope.parent
        return _MISSING

    def lookup(self, name: str) -> Any:
        value = self._find(name)
        if value is _MISSING:
            raise KeyError(name)
        return value

    def get(self, name: str, default: Any = None) -> Any:
        value = self._find(name)
        return default if value is _MISSING else value

    def bind(self, name: str, value: Any) -> 'Scope':
        return Scope(self, name, value)

    def define_if_absent(self, name: str, value: Any) -> 'Scope':
        if name in self:
            return self
        return Scope(self, name, value)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._find(name) is not _MISSING

    def __len__(self) -> int:
        return len(self.to_dict())

    def items(self) -> Iterator[Tuple[str, Any]]:
        """Visible bindings, oldest first."""
        return iter(self.to_dict().items())

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        chain = []
        scope: Optional[Scope] = self
        while scope is not None:
            if scope.name is not None:
                chain.append(scope)
            scope = scope.parent
        result: Dict[str, Any] = {}
        for link in reversed(chain):
            result.pop(link.name, None)
            result[link.name] = link.value
        return result

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Scope):
            return self.to_dict() == other.to_dict()
        if isinstance(other, Mapping):
            return self.to_dict() == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Scope({self.to_dict()!r})"
