"""Per-run generation context passed explicitly to every component."""

from dataclasses import dataclass
from typing import Mapping

from .config import Configuration
from .model import SchemaModel
from .types import ClassRef


@dataclass(frozen=True)
class GenerationContext:
    """Read-only view of the schema and settings for one generation run.

    Build it with :meth:`create`, which fills in built-in scalar mappings and
    resolves the configured class references once.
    """
    schema: SchemaModel
    config: Configuration
    scalar_classes: Mapping[str, ClassRef]
    optional_class: ClassRef
    execution_context_class: ClassRef

    @classmethod
    def create(cls, schema: SchemaModel, config: Configuration) -> "GenerationContext":
        config = config.with_builtin_scalars()
        return cls(
            schema=schema,
            config=config,
            scalar_classes={
                name: ClassRef.best_guess(target)
                for name, target in config.scalar_mapping.items()
            },
            optional_class=ClassRef.best_guess(config.optional_class),
            execution_context_class=ClassRef.best_guess(config.execution_context_class),
        )

    @property
    def namespace(self) -> str:
        return self.config.namespace

    def is_subscription_root(self, type_name: str) -> bool:
        return type_name == self.schema.root_type_name_for("subscription")
