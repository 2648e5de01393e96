"""CLI entry point for modbus-decode."""

import configparser

import click
from rich.console import Console
from rich.markup import escape

from modbus_decode import __version__
from modbus_decode.config import load_settings
from modbus_decode.decoding import DecodedMessage, decode
from modbus_decode.exceptions import FormatError
from modbus_decode.export import MessageAccumulator, message_record
from modbus_decode.logs import LogManager
from modbus_decode.report import format_report, render_table

console = Console()
err_console = Console(stderr=True)

word_order_option = click.option(
    "--swapped-order/--natural-order",
    "swapped",
    default=None,
    help="Word order of 32-bit floats: low register first (Modicon, default) or as sent",
)
table_option = click.option(
    "--table",
    is_flag=True,
    help="Show values as a table instead of the text report",
)


def _resolve_word_order(ctx: click.Context, swapped) -> bool:
    if swapped is None:
        return ctx.obj["settings"].swapped_word_order
    return swapped


def _show(message: DecodedMessage, table: bool) -> None:
    if table:
        console.print(render_table(message))
    else:
        console.print(format_report(message), markup=False, highlight=False, soft_wrap=True, end="")


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="INI configuration file (default: ./modbus_decode.ini)",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging of decoded fields",
)
@click.pass_context
def cli(ctx, config_path, debug):
    """modbus-decode - Decode Mdbus Monitor log lines into Modbus messages."""
    try:
        settings = load_settings(config_path)
    except (ValueError, configparser.Error) as e:
        raise click.ClickException(f"Invalid configuration: {e}")

    level = "DEBUG" if debug else settings.log_level
    logger = LogManager("modbus_decode", log_dir=settings.log_dir, level=level).get_logger()
    logger.debug("Settings: %s", settings)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["logger"] = logger


@cli.command()
@click.argument("lines", nargs=-1, required=True)
@word_order_option
@table_option
@click.option("--json", "as_json", is_flag=True, help="Print decoded messages as JSON")
@click.pass_context
def line(ctx, lines, swapped, table, as_json):
    """Decode one or more lines given as arguments."""
    swapped_word_order = _resolve_word_order(ctx, swapped)

    messages = []
    for text in lines:
        try:
            messages.append(decode(text, swapped_word_order))
        except FormatError as e:
            raise click.ClickException(str(e))

    if as_json:
        console.print_json(
            data=[message_record(message) for message in messages], allow_nan=False
        )
        return

    for message in messages:
        _show(message, table)


@cli.command(name="file")
@click.argument("log_file", type=click.File("r", errors="replace"))
@word_order_option
@table_option
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also save decoded messages to this JSON file",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Stop at the first line that cannot be decoded",
)
@click.pass_context
def file_command(ctx, log_file, swapped, table, output, strict):
    """Decode every line of a Mdbus Monitor log (use - for stdin)."""
    swapped_word_order = _resolve_word_order(ctx, swapped)
    logger = ctx.obj["logger"]
    accumulator = MessageAccumulator(output) if output else None

    decoded = 0
    skipped = 0
    for line_number, text in enumerate(log_file, start=1):
        if not text.strip():
            continue
        try:
            message = decode(text, swapped_word_order)
        except FormatError as e:
            if strict:
                raise click.ClickException(f"Line {line_number}: {e}")
            logger.debug("Skipping line %d: %r", line_number, text)
            err_console.print(f"[yellow]⚠️  Line {line_number}: {escape(str(e))}[/yellow]", highlight=False)
            skipped += 1
            continue

        decoded += 1
        _show(message, table)
        console.print()
        if accumulator is not None:
            accumulator.add_message(message, line_number)

    if accumulator is not None:
        accumulator.save()

    err_console.print(f"✅ Decoded {decoded} line(s), skipped {skipped}")


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
