"""Command-line interface for gql-stubgen."""

from pathlib import Path

import click
from pydantic import ValidationError

from .core.config import Configuration
from .core.errors import StubgenError
from .core.generator import CodeGenerator
from .core.hooks import AddHeaderHook, FilterTypesHook, HookRunner
from .core.parser import SchemaParser
from .log_config import configure_logging


def parse_scalar_options(values: tuple[str, ...]) -> dict[str, str]:
    """Parse repeated ``NAME=dotted.Type`` options into a mapping."""
    mapping = {}
    for value in values:
        name, sep, target = value.partition("=")
        if not sep or not name.strip() or not target.strip():
            raise click.BadParameter(
                f"expected NAME=module.Type, got {value!r}", param_hint="--scalar"
            )
        mapping[name.strip()] = target.strip()
    return mapping


def load_configuration(config_file: str | None, **overrides) -> Configuration:
    """Layer CLI overrides over the environment and the config file (if any)."""
    try:
        return Configuration.from_toml(config_file, **overrides)
    except ValidationError as e:
        if any(err["loc"] == ("namespace",) and err["type"] == "missing" for err in e.errors()):
            raise click.UsageError(
                "--package is required when no --config file sets a namespace"
            ) from e
        raise


@click.group()
@click.version_option(package_name="gql-stubgen")
def main():
    """Typed Python declarations from GraphQL schemas.

    Generate resolver skeletons for a schema-first GraphQL service.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to a GraphQL schema file or a directory of .graphql/.graphqls files.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(file_okay=False),
    help="Root directory; modules are written under the package path.",
)
@click.option(
    "--package",
    "-p",
    "namespace",
    default=None,
    help="Dotted package for generated modules, e.g. server.graphql.",
)
@click.option(
    "--scalar",
    "scalars",
    multiple=True,
    metavar="NAME=TYPE",
    help="Map a custom scalar to a Python type, e.g. DateTime=datetime.datetime. Repeatable.",
)
@click.option(
    "--optional-class",
    default=None,
    help="Generic wrapper used for inputs that may be omitted.",
)
@click.option(
    "--execution-context-class",
    default=None,
    help="Type of the context parameter of every operation.",
)
@click.option(
    "--annotations/--no-annotations",
    default=None,
    help="Emit default-value and root-operation annotations.",
)
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="TOML file with settings ([tool.gql-stubgen] table in pyproject.toml works).",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with Jinja2 templates overriding the built-in ones.",
)
@click.option("--header", default=None, help="Text prepended to every generated file.")
@click.option("--exclude-prefix", default=None, help="Skip types whose name starts with this prefix.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--log-json", is_flag=True, help="Emit logs as JSON lines.")
def generate(
    schema: str,
    output: str,
    namespace: str | None,
    scalars: tuple[str, ...],
    optional_class: str | None,
    execution_context_class: str | None,
    annotations: bool | None,
    config_file: str | None,
    template_dir: str | None,
    header: str | None,
    exclude_prefix: str | None,
    verbose: bool,
    log_json: bool,
):
    """Generate Python declarations from a GraphQL schema.

    Examples:

        gql-stubgen generate --schema ./schema.graphqls --output ./src --package server.graphql

        gql-stubgen generate -s ./schema -o ./src -p api --scalar DateTime=datetime.datetime

        gql-stubgen generate -s ./schema -o ./src --config pyproject.toml
    """
    configure_logging(verbose=verbose, log_json=log_json)

    try:
        config = load_configuration(
            config_file,
            namespace=namespace,
            scalar_mapping=parse_scalar_options(scalars) or None,
            optional_class=optional_class,
            execution_context_class=execution_context_class,
            annotations=annotations,
        )
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration:\n{e}") from e
    except StubgenError as e:
        raise click.ClickException(str(e)) from e

    hooks = HookRunner()
    if exclude_prefix:
        hooks.add_pre_hook(FilterTypesHook(exclude_prefix=exclude_prefix))
    if header:
        hooks.add_post_hook(AddHeaderHook(header))

    schema_path = Path(schema).resolve()
    output_path = Path(output).resolve()
    if verbose:
        click.echo(f"Schema: {schema_path}")
        click.echo(f"Output: {output_path}")
        click.echo(f"Package: {config.namespace}")

    try:
        click.echo("Parsing schema...")
        model = SchemaParser(str(schema_path)).parse_all()
        if verbose:
            click.echo(f"  Types: {len(model.types)}")

        click.echo("Generating code...")
        generator = CodeGenerator(
            model, config, output_path, template_dir=template_dir, hooks=hooks
        )
        written = generator.generate()
    except (StubgenError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Done! Generated {len(written)} modules in {generator.package_dir}")


if __name__ == "__main__":
    main()
