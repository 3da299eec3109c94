"""Serial port command implementations."""

import click

from cuedeck.dmx import SerialTransport


@click.group(name="serial")
def serial_group():
    """Serial (DMX interface) commands."""
    pass


@serial_group.command(name="list")
def list_serial():
    """List serial ports that can drive a DMX interface."""
    ports = SerialTransport.list_ports()

    if not ports:
        click.echo("No serial ports found.")
        click.echo("Check that the DMX interface is connected and its driver is installed.")
        return

    click.echo("Available serial ports:\n")
    for device, description in ports:
        click.echo(f"  {device}  {description}")
