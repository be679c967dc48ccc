"""CLI commands for redis-derive."""

from pathlib import Path

import typer

app = typer.Typer(
    name="redis-derive",
    help="redis-derive - Generate Redis encode/decode adapters",
    no_args_is_help=True,
)


@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug events to stderr"),
):
    """Configure logging for every command."""
    from redis_derive.log import setup_logging

    setup_logging(verbose=verbose)


@app.command()
def generate(
    schema: Path = typer.Argument(..., help="JSON schema describing the types"),
    output: Path | None = typer.Option(
        None, help="Output module (default: <schema>_redis.py next to the schema)"
    ),
    dry_run: bool = typer.Option(
        False, help="Print the generated module instead of writing it"
    ),
):
    """
    Generate a module with Redis adapters for every type in a schema file.
    """
    from redis_derive.codegen import generate_for_descriptors, write_module
    from redis_derive.exceptions import RedisDeriveError
    from redis_derive.schema import load_schema_file

    try:
        descriptors = load_schema_file(schema)
        content = generate_for_descriptors(descriptors)
    except RedisDeriveError as e:
        typer.secho(f"❌ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    if dry_run:
        typer.echo(content, nl=False)
        return

    target = output or schema.with_name(f"{schema.stem}_redis.py")
    try:
        write_module(target, content)
    except OSError as e:
        typer.secho(f"❌ Cannot write {target}: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    names = ", ".join(d.name for d in descriptors)
    typer.secho(f"✅ Generated adapters for {names}: {target}", fg=typer.colors.GREEN)


@app.command()
def show(
    target: str = typer.Argument(..., help="Class to inspect, as package.module:Class"),
):
    """
    Print the adapters generated for a class.
    """
    import importlib

    from redis_derive.codegen import render_adapters
    from redis_derive.core import describe
    from redis_derive.exceptions import RedisDeriveError

    module_name, sep, class_name = target.partition(":")
    if not sep or not class_name:
        typer.secho("❌ Target must look like package.module:Class", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        typer.secho(f"❌ Cannot import {module_name}: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    cls = getattr(module, class_name, None)
    if not isinstance(cls, type):
        typer.secho(f"❌ {module_name} has no class {class_name}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    try:
        typer.echo(render_adapters(describe(cls)))
    except RedisDeriveError as e:
        typer.secho(f"❌ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
