"""Generation settings.

A :class:`Configuration` is built once per run and never changes afterwards.

Priority chain (highest to lowest):
  1. Init kwargs  (CLI flags passed by Click)
  2. Env vars     (``GQL_STUBGEN_*`` prefix)
  3. TOML file    (``--config``; a ``pyproject.toml`` is read from its
     ``[tool.gql-stubgen]`` table)
  4. Code defaults

Example ``pyproject.toml`` section::

    [tool.gql-stubgen]
    namespace = "server.graphql"
    annotations = true
    optional_class = "server.support.Maybe"

    [tool.gql-stubgen.scalar_mapping]
    DateTime = "datetime.datetime"
"""

import logging
import re
import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .errors import StubgenError

logger = logging.getLogger(__name__)

# Target types used for built-in scalars the caller did not map
DEFAULT_SCALAR_MAPPING = {
    "String": "builtins.str",
    "Int": "builtins.int",
    "Float": "builtins.float",
    "Boolean": "builtins.bool",
    "ID": "builtins.str",
}

TOOL_TABLE = "gql-stubgen"

_DOTTED_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a TOML file.

    A file with a ``tool`` table (any ``pyproject.toml``) only contributes its
    ``[tool.gql-stubgen]`` table, which may be absent. Any other file is read
    from the top level.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is None:
            return
        try:
            data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise StubgenError(f"Cannot read configuration {toml_path}: {e}") from e
        if "tool" in data or toml_path.name == "pyproject.toml":
            data = data.get("tool", {}).get(TOOL_TABLE, {})
        self._data = data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for the TOML path during construction.
_tls = threading.local()


class Configuration(BaseSettings):
    """Settings shared by every component for one generation run.

    Attributes:
        namespace: Dotted package the generated modules live in.
        scalar_mapping: GraphQL scalar name to dotted Python type.
        optional_class: Generic wrapper for inputs that may be omitted.
        execution_context_class: Type of the first parameter of every operation.
        annotations: Attach round-trip annotations (defaults, root markers).
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra="forbid",
        env_prefix="GQL_STUBGEN_",
    )

    namespace: str
    scalar_mapping: dict[str, str] = Field(default_factory=dict)
    optional_class: str = "gql_stubgen.runtime.Omittable"
    execution_context_class: str = "gql_stubgen.runtime.ExecutionContext"
    annotations: bool = False

    @field_validator("namespace", "optional_class", "execution_context_class")
    @classmethod
    def _check_dotted(cls, value: str) -> str:
        if not _DOTTED_NAME.match(value):
            raise ValueError(f"not a dotted Python name: {value!r}")
        return value

    @field_validator("scalar_mapping")
    @classmethod
    def _check_scalar_targets(cls, value: dict[str, str]) -> dict[str, str]:
        for scalar, target in value.items():
            if not _DOTTED_NAME.match(target):
                raise ValueError(f"scalar {scalar!r} maps to invalid type {target!r}")
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    def with_builtin_scalars(self) -> "Configuration":
        """Return a copy whose scalar mapping covers every built-in scalar."""
        mapping = dict(self.scalar_mapping)
        for scalar, target in DEFAULT_SCALAR_MAPPING.items():
            if scalar not in mapping:
                logger.debug("No mapping for built-in scalar %s, using %s", scalar, target)
                mapping[scalar] = target
        return self.model_copy(update={"scalar_mapping": mapping})

    @classmethod
    def from_toml(cls, path: str | Path | None, **overrides: Any) -> "Configuration":
        """Build settings from a TOML file, letting ``overrides`` win.

        Overrides set to None are ignored so unset CLI flags keep the file's
        values. A ``scalar_mapping`` override extends the file's mapping.
        """
        _tls.toml_path = Path(path) if path is not None else None
        try:
            return cls(**{k: v for k, v in overrides.items() if v is not None})
        finally:
            _tls.toml_path = None
