"""Writes generated declarations to disk.

Every module is built and rendered before the output directory is touched,
so a schema that fails to map leaves the previous output in place.
"""

import logging
import shutil
from dataclasses import replace
from pathlib import Path
from typing import Optional

from .config import Configuration
from .context import GenerationContext
from .declarations import EmissionRequest
from .emitter import TypeDeclarationEmitter
from .hooks import HookRunner
from .model import SchemaModel
from .render import ModuleRenderer, ancestry

logger = logging.getLogger(__name__)

PACKAGE_DOCSTRING = '"""Generated GraphQL declarations."""\n'


class CodeGenerator:
    """Generates one Python module per schema type.

    Example:
        generator = CodeGenerator(
            schema=SchemaParser("./schema").parse_all(),
            config=Configuration(namespace="server.graphql"),
            output_dir="./src",
        )
        generator.generate()
    """

    def __init__(
        self,
        schema: SchemaModel,
        config: Configuration,
        output_dir: str | Path,
        template_dir: Optional[str] = None,
        hooks: Optional[HookRunner] = None,
    ):
        """Initialize the code generator.

        Args:
            schema: The validated schema model
            config: Generation settings
            output_dir: Root directory; modules go to ``<output_dir>/<namespace path>``
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
            hooks: Optional pre/post generation hooks
        """
        self.context = GenerationContext.create(schema, config)
        self.output_dir = Path(output_dir)
        self.renderer = ModuleRenderer(template_dir)
        self.hooks = hooks or HookRunner()

    @property
    def package_dir(self) -> Path:
        return self.output_dir.joinpath(*self.context.namespace.split("."))

    def build_requests(self) -> list[EmissionRequest]:
        """Build all emission requests, raising on the first inconsistency."""
        return list(TypeDeclarationEmitter(self.context).emit())

    def generate(self) -> list[Path]:
        """Generate all modules and return the written paths."""
        requests = self.build_requests()
        ancestors = ancestry(requests)
        requests = self._drop_filtered_bases(self.hooks.run_pre_hooks(requests))
        contents = [(request, self.render(request, ancestors)) for request in requests]

        package_dir = self.package_dir
        if package_dir.exists():
            logger.debug("Removing previous output in %s", package_dir)
            shutil.rmtree(package_dir)
        package_dir.mkdir(parents=True)
        (package_dir / "__init__.py").write_text(PACKAGE_DOCSTRING, encoding="utf-8")

        written = []
        for request, content in contents:
            written.append(self._write(request, content))
        logger.info("Wrote %d modules to %s", len(written), package_dir)
        return written

    def render(self, request: EmissionRequest, ancestors=None) -> str:
        """Render a request and check that the result is valid Python."""
        filename = f"{request.name}.py"
        content = self.renderer.render(request, ancestors)
        try:
            compile(content, filename, "exec")
        except SyntaxError as e:
            raise ValueError(
                f"Generated invalid Python for {filename}: {e}"
            ) from e
        return self.hooks.run_post_hooks(filename, content)

    @staticmethod
    def _drop_filtered_bases(requests: list[EmissionRequest]) -> list[EmissionRequest]:
        """Remove supertypes whose module a pre-generation hook dropped.

        Bases are imported at runtime, so a kept class cannot extend a module
        that is never written.
        """
        kept = {r.class_ref for r in requests}
        result = []
        for request in requests:
            supertypes = request.declaration.supertypes
            remaining = tuple(ref for ref in supertypes if ref in kept)
            if remaining != supertypes:
                logger.debug(
                    "%s no longer extends filtered types %s",
                    request.name,
                    ", ".join(ref.name for ref in supertypes if ref not in kept),
                )
                declaration = replace(request.declaration, supertypes=remaining)
                request = replace(request, declaration=declaration)
            result.append(request)
        return result

    def _write(self, request: EmissionRequest, content: str) -> Path:
        path = self.package_dir / f"{request.name}.py"
        path.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s", path)
        return path
