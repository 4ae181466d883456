"""Runtime support imported by generated declarations.

Example usage in a generated module:
    from gql_stubgen.runtime import ExecutionContext, Omittable, graphql_query

    @graphql_query
    class Query:
        def hero(self, context: ExecutionContext, episode: Omittable[Episode | None]) -> Character | None:
            if episode.is_present:
                ...
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")

ROOT_ATTRIBUTE = "__graphql_root__"


class ExecutionContext(dict):
    """Request-scoped values available to every resolver stub.

    Behaves like a dict; callers put whatever their server provides
    (request, loaders, current user) under their own keys.
    """


class Omittable(Generic[T]):
    """A value that may be missing entirely, which differs from an explicit null.

    Example:
        Omittable.absent().is_present       # False
        Omittable.of(None).is_present       # True, explicitly null
        Omittable.of(5).get(0)              # 5
    """

    __slots__ = ("_present", "_value")

    def __init__(self, present: bool, value: Any = None):
        self._present = present
        self._value = value if present else None

    @classmethod
    def absent(cls) -> "Omittable[Any]":
        return cls(False)

    @classmethod
    def of(cls, value: T) -> "Omittable[T]":
        return cls(True, value)

    @property
    def is_present(self) -> bool:
        return self._present

    @property
    def value(self) -> T:
        """Return the value, raising if it was omitted."""
        if not self._present:
            raise ValueError("Value was omitted")
        return self._value

    def get(self, default: Any = None) -> Any:
        """Return the value, or ``default`` if it was omitted."""
        return self._value if self._present else default

    def __eq__(self, other):
        if not isinstance(other, Omittable):
            return NotImplemented
        return (self._present, self._value) == (other._present, other._value)

    def __hash__(self):
        return hash((self._present, self._value))

    def __repr__(self):
        if self._present:
            return f"Omittable.of({self._value!r})"
        return "Omittable.absent()"


@dataclass(frozen=True)
class GraphQLDefault:
    """``Annotated`` metadata holding a default value as GraphQL SDL text."""
    value: str


def _root_marker(operation: str):
    def decorator(cls):
        setattr(cls, ROOT_ATTRIBUTE, operation)
        return cls

    decorator.__name__ = f"graphql_{operation}"
    decorator.__doc__ = f"Mark a class as the {operation} root type."
    return decorator


graphql_query = _root_marker("query")
graphql_mutation = _root_marker("mutation")
graphql_subscription = _root_marker("subscription")
