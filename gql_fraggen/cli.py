"""Command-line interface for gql-fraggen."""

import asyncio
import logging
import shutil
import sys
import tarfile
import tempfile
import zipfile
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .core.auth import BearerAuth, ChainedAuth, HeaderAuth
from .core.errors import FragmentGeneratorError
from .core.generator import FragmentGenerator
from .core.introspection import IntrospectionClient
from .core.options import FragmentOptions
from .core.parser import SchemaParser

log = logging.getLogger("gql_fraggen")

ARCHIVE_SUFFIXES = (".zip", ".tar.gz", ".tgz")


def extract_archive(archive_path: Path) -> str:
    """Extract archive to temp directory. Returns path to extracted content."""
    temp_dir = tempfile.mkdtemp()
    if archive_path.suffix == ".zip":
        with zipfile.ZipFile(archive_path, "r") as zip_ref:
            zip_ref.extractall(temp_dir)
    elif archive_path.name.endswith((".tar.gz", ".tgz")):
        with tarfile.open(archive_path, "r:gz") as tar_ref:
            tar_ref.extractall(temp_dir)
    else:
        shutil.rmtree(temp_dir)
        raise ValueError(f"Unsupported archive format: {archive_path.suffix}")
    return temp_dir


def configure_logging(verbose: bool):
    """Send log records to stderr; stdout may carry the fragments."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(__version__, package_name="gql-fraggen")
def main():
    """Generate GraphQL fragments for every type in a schema.

    Each fragment selects the type's own fields and can be copied into
    queries and edited by hand.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    type=click.Path(exists=True),
    help="Path to GraphQL schema file, directory, or archive (.zip, .tar.gz, .tgz).",
)
@click.option(
    "--endpoint",
    "-e",
    help="GraphQL endpoint URL to introspect instead of reading a schema file.",
)
@click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    help="Extra 'Name: value' header for --endpoint requests. Repeatable.",
)
@click.option(
    "--bearer-token",
    envvar="GQL_FRAGGEN_TOKEN",
    help="Bearer token for --endpoint requests.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Output file for the fragments (default: stdout).",
)
@click.option("--prefix", default="", help="Fragment name prefix.")
@click.option("--suffix", default="Fields", show_default=True, help="Fragment name suffix.")
@click.option(
    "--typename",
    is_flag=True,
    help="Add __typename to object type fragments.",
)
@click.option(
    "--inputs/--no-inputs",
    default=True,
    show_default=True,
    help="Generate fragments for input object types.",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with a custom fragment.graphql.j2 template.",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Do not report schema warnings.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str | None,
    endpoint: str | None,
    headers: tuple[str, ...],
    bearer_token: str | None,
    output: str | None,
    prefix: str,
    suffix: str,
    typename: bool,
    inputs: bool,
    template_dir: str | None,
    quiet: bool,
    verbose: bool,
):
    """Generate a fragment for every type in a GraphQL schema.

    Examples:

        gql-fraggen generate --schema ./schema.graphql --typename

        gql-fraggen generate -s ./schema --prefix My -o fragments.graphql

        gql-fraggen generate -e https://api.example.com/graphql -H "x-api-key: KEY"
    """
    configure_logging(verbose)
    if bool(schema) == bool(endpoint):
        raise click.UsageError("Provide exactly one of --schema or --endpoint.")

    try:
        options = FragmentOptions(
            prefix=prefix,
            suffix=suffix,
            mark_concrete_types=typename,
            quiet=quiet,
            include_input_objects=inputs,
        )
    except ValidationError as e:
        raise click.UsageError(str(e)) from e

    temp_dir = None
    try:
        parser = SchemaParser(quiet=quiet)
        if endpoint:
            try:
                auth = ChainedAuth(HeaderAuth.from_lines(headers))
            except ValueError as e:
                raise click.BadParameter(str(e), param_hint="--header") from e
            if bearer_token:
                auth = ChainedAuth(auth, BearerAuth(bearer_token))
            client = IntrospectionClient(endpoint, auth=auth)
            sdl = asyncio.run(client.fetch_sdl())
            ir = parser.parse_string(sdl, name=endpoint)
        else:
            # Handle archives
            schema_path = Path(schema).resolve()
            actual_schema_path = schema_path
            if schema_path.is_file() and schema_path.name.lower().endswith(ARCHIVE_SUFFIXES):
                log.info("Extracting archive %s", schema_path.name)
                temp_dir = extract_archive(schema_path)
                actual_schema_path = Path(temp_dir)

            log.info("Schema: %s", actual_schema_path)
            parser.schema_path = str(actual_schema_path)
            ir = parser.parse_all()

        if output:
            output_path = Path(output).resolve()
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                count = FragmentGenerator(ir, f, options, template_dir).execute()
            log.info("Wrote %d fragments to %s", count, output_path)
        else:
            FragmentGenerator(ir, sys.stdout, options, template_dir).execute()
            sys.stdout.flush()
    except FragmentGeneratorError as e:
        raise click.ClickException(str(e)) from e
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    finally:
        # Clean up temp directory
        if temp_dir:
            shutil.rmtree(temp_dir)


if __name__ == "__main__":
    main()
