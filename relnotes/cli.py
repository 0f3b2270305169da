import io
import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from relnotes.notes import RelnotesError, create_document, render_markdown
from relnotes.notes.downloads import PRODUCTION_BUCKET
from relnotes.notes_file import load_notes
from relnotes.serialize import DATA_FORMATS, dump_document

try:
    __version__ = version("relnotes")
except PackageNotFoundError:
    __version__ = "0.0.1-dev"


@click.group()
@click.option("--debug/--no-debug", default=False)
@click.option("--trace/--no-trace", default=False)
@click.option(
    "--log-file",
    type=click.Path(file_okay=True, dir_okay=False),
    envvar="RELNOTES_LOG_FILE",
)
@click.version_option(__version__, prog_name="relnotes")
def cli(debug: bool, trace: bool, log_file: Optional[str] = None) -> None:
    """Configure logging and load environment variables.

    Args:
        debug: Toggle debug logging.
        trace: Toggle trace logging.
        log_file: Optional path to the log file.
    """
    if trace:
        level = 1
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        filename=log_file,
        level=level,
        format="[%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if trace:
        logging.debug("Trace mode is on")
    if debug:
        logging.debug("Debug mode is on")
    load_dotenv()


@cli.command()
@click.argument("notes_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--bucket",
    envvar="RELNOTES_BUCKET",
    default=PRODUCTION_BUCKET,
    show_default=True,
    help="Storage bucket the release artifacts are published to.",
)
@click.option(
    "--tars",
    envvar="RELNOTES_TARS",
    default="",
    help="Directory with the release tarballs; enables the downloads table.",
)
@click.option(
    "--prev-tag",
    envvar="RELNOTES_PREV_TAG",
    default="",
    help="Tag of the previous release.",
)
@click.option(
    "--new-tag",
    envvar="RELNOTES_NEW_TAG",
    default="",
    help="Tag of the release being documented.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(file_okay=True, dir_okay=False),
    default=None,
    help="Write output to FILE instead of the console.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["markdown", *DATA_FORMATS]),
    default="markdown",
    help="Output format.",
)
def render(
    notes_file: str,
    bucket: str = PRODUCTION_BUCKET,
    tars: str = "",
    prev_tag: str = "",
    new_tag: str = "",
    output_path: Optional[str] = None,
    output_format: str = "markdown",
) -> None:
    """Organize a file of release notes into a release notes document.

    Args:
        notes_file: JSON or YAML file with the release notes and,
            optionally, the order to list them in.
        bucket: Storage bucket used to build the download links.
        tars: Directory holding the release tarballs. The downloads
            table is only rendered when this is set.
        prev_tag: Tag of the previous release.
        new_tag: Tag of the release being documented.
        output_path: Optional file path for the rendered document.
        output_format: Format of the rendered document. The download
            options only apply to Markdown.
    """

    if output_format in DATA_FORMATS and (tars or prev_tag or new_tag):
        raise click.UsageError(
            "--tars, --prev-tag and --new-tag only apply to markdown output."
        )

    try:
        notes, history = load_notes(Path(notes_file))
        doc = create_document(notes, history)

        if output_format in DATA_FORMATS:
            content = dump_document(doc, output_format)
        else:
            # Nothing reaches the output until rendering has succeeded.
            buffer = io.StringIO()
            render_markdown(buffer, doc, bucket, tars, prev_tag, new_tag)
            content = buffer.getvalue()

        if output_path:
            Path(output_path).write_text(content, encoding="utf-8")
        else:
            click.echo(content, nl=False)
    except (RelnotesError, OSError) as exc:
        raise click.ClickException(str(exc)) from exc
