"""Extension points around rendering.

A pre-generation hook sees the full list of emission requests before any
module is rendered and returns the requests to keep. A post-generation hook
sees each rendered module and returns the text to write.

Example usage:
    from gql_stubgen.core.hooks import HookRunner, FilterTypesHook, AddHeaderHook

    hooks = HookRunner()
    hooks.add_pre_hook(FilterTypesHook(exclude_prefix="Internal"))
    hooks.add_post_hook(AddHeaderHook("# Generated by gql-stubgen"))
    CodeGenerator(schema, config, "./src", hooks=hooks).generate()
"""

from typing import Iterable, Protocol, runtime_checkable

from .declarations import DeclarationKind, EmissionRequest


@runtime_checkable
class PreGenerateHook(Protocol):
    """Selects or reorders emission requests before rendering.

    Requests that are dropped are not written, but other modules may still
    refer to their classes.
    """

    def pre_generate(self, requests: list[EmissionRequest]) -> list[EmissionRequest]:
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Rewrites a rendered module before it is written.

    ``filename`` is the module file name inside the namespace package, e.g.
    ``Query.py``. The returned text is written as is.
    """

    def post_generate(self, filename: str, content: str) -> str:
        ...


class AddHeaderHook:
    """Prepends a fixed header, separated by one blank line.

    Example:
        AddHeaderHook("# Generated by gql-stubgen, do not edit")
    """

    def __init__(self, header: str):
        self.header = header.rstrip("\n") + "\n\n"

    def post_generate(self, _filename: str, content: str) -> str:
        return self.header + content


class FilterTypesHook:
    """Keeps requests by schema type name and declaration kind.

    Every given criterion must hold for a request to be kept.

    Example:
        # Skip scalar placeholders and anything prefixed with an underscore
        FilterTypesHook(exclude_prefix="_", exclude_kinds={DeclarationKind.SCALAR})
    """

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
        include_prefix: str | None = None,
        include_suffix: str | None = None,
        exclude_kinds: Iterable[DeclarationKind] = (),
    ):
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix
        self.include_prefix = include_prefix
        self.include_suffix = include_suffix
        self.exclude_kinds = frozenset(exclude_kinds)

    def keeps(self, request: EmissionRequest) -> bool:
        name = request.name
        if request.declaration.kind in self.exclude_kinds:
            return False
        if self.exclude_prefix and name.startswith(self.exclude_prefix):
            return False
        if self.exclude_suffix and name.endswith(self.exclude_suffix):
            return False
        if self.include_prefix and not name.startswith(self.include_prefix):
            return False
        return not self.include_suffix or name.endswith(self.include_suffix)

    def pre_generate(self, requests: list[EmissionRequest]) -> list[EmissionRequest]:
        return [r for r in requests if self.keeps(r)]


class HookRunner:
    """Applies registered hooks in registration order."""

    def __init__(self):
        self.pre_hooks: list[PreGenerateHook] = []
        self.post_hooks: list[PostGenerateHook] = []

    def add_pre_hook(self, hook: PreGenerateHook):
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        self.post_hooks.append(hook)

    def run_pre_hooks(self, requests: list[EmissionRequest]) -> list[EmissionRequest]:
        """Feed the requests through every pre-generation hook."""
        for hook in self.pre_hooks:
            requests = hook.pre_generate(requests)
        return requests

    def run_post_hooks(self, filename: str, content: str) -> str:
        """Feed a rendered module through every post-generation hook."""
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
