"""Target type descriptors produced by the type mapper."""

from dataclasses import dataclass, replace
from enum import Enum


@dataclass(frozen=True)
class ClassRef:
    """A Python class addressed by module and name, e.g. ``datetime.datetime``."""
    module: str
    name: str

    @classmethod
    def best_guess(cls, dotted: str) -> "ClassRef":
        """Split a dotted reference into module and class name.

        A bare name such as ``str`` is taken to be a builtin.
        """
        module, _, name = dotted.rpartition(".")
        if not name:
            raise ValueError(f"Invalid class reference: {dotted!r}")
        return cls(module or "builtins", name)

    @property
    def dotted(self) -> str:
        return f"{self.module}.{self.name}"


class Wrapper(Enum):
    """Structural containers a target type can be wrapped in."""
    LIST = "list"
    OPTIONAL = "optional"
    STREAM = "stream"


LIST_CLASS = ClassRef("builtins", "list")
STREAM_CLASS = ClassRef("collections.abc", "AsyncIterator")


@dataclass(frozen=True)
class TargetType:
    """A resolved target type.

    Leaf types only carry ``ref``. Wrapped types carry the container class in
    ``ref``, the container kind in ``wrapper`` and the element in ``inner``,
    so ``list[str | None] | None`` is::

        TargetType(LIST_CLASS, True, Wrapper.LIST, TargetType(str_ref, True))
    """
    ref: ClassRef
    nullable: bool = True
    wrapper: Wrapper | None = None
    inner: "TargetType | None" = None

    def copy(self, *, nullable: bool) -> "TargetType":
        return replace(self, nullable=nullable)

    def wrap(self, wrapper: Wrapper, container: ClassRef) -> "TargetType":
        """Wrap this type in a non-null container."""
        return TargetType(container, nullable=False, wrapper=wrapper, inner=self)

    @property
    def wrappers(self) -> tuple[Wrapper, ...]:
        """Return the wrapper kinds from the outside in."""
        result = []
        current = self
        while current.inner is not None:
            result.append(current.wrapper)
            current = current.inner
        return tuple(result)

    @property
    def leaf(self) -> "TargetType":
        current = self
        while current.inner is not None:
            current = current.inner
        return current

    def class_refs(self) -> list[ClassRef]:
        """Return every class this type mentions, outermost first."""
        refs = [self.ref]
        if self.inner is not None:
            refs.extend(self.inner.class_refs())
        return refs
