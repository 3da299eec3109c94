"""Audio command implementations."""

import click


@click.group(name="audio")
def audio_group():
    """Audio device commands."""
    pass


@audio_group.command(name="list")
@click.option("--all", is_flag=True, help="Show all audio devices, not just low-latency ones")
def list_audio(all: bool):
    """List available audio output devices."""
    from cuedeck.audio import AudioDevice

    devices, api_names = AudioDevice.list_output_devices(all_devices=all)
    default_device_id = AudioDevice.get_default_device()

    if all:
        click.echo("Available audio output devices:\n")
    else:
        click.echo(f"Available low-latency audio output devices ({api_names}):\n")

    if not devices:
        click.echo("No output devices found.")
        if not all:
            click.echo("Use --all to include devices on other host APIs.")
        return

    for device_id, name, host_api, info in devices:
        if device_id == default_device_id:
            click.echo(f"[{device_id}] {name}  [Default]")
        else:
            click.echo(f"[{device_id}] {name}")
        click.echo(f"    Host API: {host_api}")
        click.echo(f"    Channels: {info['max_output_channels']} out")
        click.echo(f"    Sample Rate: {info['default_samplerate']} Hz")
        click.echo()
