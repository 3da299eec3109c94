"""Run a single console command and exit."""

import logging
import sys

import click

from cuedeck.exceptions import CueDeckError

logger = logging.getLogger(__name__)


@click.command(name="send")
@click.argument("verb")
@click.argument("args", nargs=-1)
@click.option(
    "--wait/--no-wait",
    default=False,
    help="For play_sound, block until every cue has finished",
)
@click.pass_context
def send(ctx, verb: str, args: tuple[str, ...], wait: bool):
    """
    Execute VERB with ARGS against a freshly started console.

    \b
    Examples:
      cuedeck send set_dmx_value 0 1 255
      cuedeck send play_sound intro.wav 0.8 --wait
    """
    from ..runtime import build_application, echo_error, start_logging

    start_logging(ctx.obj)
    logger.info(f"send: {verb} {' '.join(args)}")

    app = None
    try:
        app = build_application(ctx.obj)
        result = app.execute_verb(verb, list(args))
        if result:
            click.echo(result)
        if wait:
            app.playback.wait_idle()
    except CueDeckError as e:
        echo_error(e)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("send interrupted by user")
    finally:
        if app is not None:
            app.shutdown()
