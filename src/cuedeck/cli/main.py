"""Main CLI entry point."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from cuedeck import __version__
from cuedeck.exceptions import CueDeckError

from .commands import audio_group, config, send, serial_group

logger = logging.getLogger(__name__)

QUIT_WORDS = ("quit", "exit")


class EchoObserver:
    """Prints cue lifecycle events to the console."""

    def on_cue_event(self, event, handle) -> None:
        click.echo(f"[cue #{handle.cue_id}] {event.value.removeprefix('cue_')}: {handle.identifier}")


def run_repl(app, stream) -> None:
    """Read commands line by line until EOF or quit."""
    from .runtime import echo_error

    interactive = stream.isatty()
    while True:
        if interactive:
            click.echo("> ", nl=False)
        line = stream.readline()
        if not line:
            break
        line = line.strip()
        if line in QUIT_WORDS:
            break

        try:
            result = app.execute(line)
        except CueDeckError as e:
            logger.warning(f"Command failed: {line!r}: {e.technical_message}")
            echo_error(e)
            continue

        if result:
            click.echo(result)


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__, prog_name="cuedeck")
@click.option(
    '--config', 'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Config file (default: ~/.cuedeck/config.json)'
)
@click.option(
    '--port', '-p',
    type=str,
    default=None,
    help='Serial port of the DMX interface (overrides config)'
)
@click.option(
    '--universes', '-u',
    type=click.IntRange(min=1),
    default=None,
    help='Number of DMX universes (overrides config)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./cuedeck-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
def cli(
    ctx,
    config_path: Optional[Path],
    port: Optional[str],
    universes: Optional[int],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    cuedeck - live-event console for audio cues and DMX lighting.

    With no subcommand, reads commands from stdin, one per line:

    \b
      set_dmx_value UNIVERSE CHANNEL VALUE
      get_dmx_value UNIVERSE CHANNEL
      flush [UNIVERSE]
      blackout
      play_sound FILE [VOLUME]
      stop_sound FILE
      stop_all_sounds
      set_volume LEVEL
      status

    \b
    Examples:
      # Interactive console on a USB DMX interface
      cuedeck --port /dev/ttyUSB0

      # Run a single command
      cuedeck send play_sound intro.wav 0.8

      # List serial ports and audio devices
      cuedeck serial list
      cuedeck audio list
    """
    ctx.ensure_object(dict)
    ctx.obj.update(
        config_path=config_path,
        port=port,
        universes=universes,
        verbose=verbose,
        debug=debug,
        log_file=log_file,
        log_level=log_level,
    )

    # Subcommands set up what they need themselves
    if ctx.invoked_subcommand is not None:
        return

    from .runtime import build_application, echo_error, start_logging

    log_path = start_logging(ctx.obj)
    logger.info("Starting cuedeck console")

    app = None
    try:
        app = build_application(ctx.obj)
        app.register_observer(EchoObserver())
        click.echo("cuedeck ready. Type 'quit' to exit.", err=True)
        run_repl(app, click.get_text_stream('stdin'))

    except KeyboardInterrupt:
        logger.info("Console interrupted by user")
        click.echo("\nShutting down...", err=True)
    except click.Abort:
        raise
    except Exception as e:
        logger.exception("Error running console")
        echo_error(e)
        click.echo(f"\nFor details, check the log file: {log_path}", err=True)
        sys.exit(1)
    finally:
        if app is not None:
            app.shutdown()


cli.add_command(audio_group)
cli.add_command(serial_group)
cli.add_command(config)
cli.add_command(send)

if __name__ == "__main__":
    cli()
