"""Audio output device discovery and validation."""

import logging
import sys
from typing import Optional

import sounddevice as sd

from cuedeck.exceptions import AudioDeviceError

logger = logging.getLogger(__name__)


class AudioDevice:
    """
    Queries the host's audio output devices.

    Cue sinks open their own streams; this class only answers which devices
    exist and whether a configured device ID is usable.
    """

    @staticmethod
    def _get_platform_apis() -> tuple[list[str], str]:
        """
        Get platform-specific low-latency APIs.

        - Windows: ASIO, WASAPI
        - macOS: Core Audio
        - Linux: ALSA, JACK

        Returns:
            Tuple of (api_list, api_names_string)
        """
        if sys.platform == 'win32':
            return ['ASIO', 'WASAPI'], "ASIO/WASAPI"
        elif sys.platform == 'darwin':
            return ['Core Audio'], "Core Audio"
        else:
            return ['ALSA', 'JACK'], "ALSA/JACK"

    @staticmethod
    def resolve(device_id: Optional[int]) -> Optional[int]:
        """
        Check that a configured output device exists.

        Args:
            device_id: Device ID, or None for the system default

        Returns:
            The device ID unchanged (None stays None)

        Raises:
            AudioDeviceError: If the device does not exist or has no outputs
        """
        if device_id is None:
            return None

        try:
            info = sd.query_devices(device_id)
        except (sd.PortAudioError, ValueError) as e:
            raise AudioDeviceError(
                f"Audio device {device_id} not found.",
                device_id=device_id,
                technical_message=f"query_devices({device_id}) failed: {e}",
                recoverable=True,
            ) from e

        if info['max_output_channels'] < 1:
            raise AudioDeviceError(
                f"Audio device '{info['name']}' has no outputs.",
                device_id=device_id,
                recoverable=True,
            )

        hostapi_name = sd.query_hostapis(info['hostapi'])['name']
        low_latency_apis, api_names = AudioDevice._get_platform_apis()
        if not any(api in hostapi_name for api in low_latency_apis):
            logger.warning(
                f"Device '{info['name']}' uses {hostapi_name}; {api_names} is recommended for low latency"
            )

        logger.info(f"Using audio device: {info['name']} ({hostapi_name})")
        return device_id

    @staticmethod
    def list_output_devices(all_devices: bool = False):
        """
        List audio output devices.

        Args:
            all_devices: Include devices on non-low-latency host APIs

        Returns:
            Tuple of (devices, api_names) where devices is a list of
            (device_id, device_name, host_api_name, device_info)
        """
        devices = sd.query_devices()
        hostapis = sd.query_hostapis()

        low_latency_apis, api_names = AudioDevice._get_platform_apis()
        available_devices = []

        for i, device in enumerate(devices):
            if device['max_output_channels'] > 0:
                hostapi_name = hostapis[device['hostapi']]['name']
                if all_devices or any(api in hostapi_name for api in low_latency_apis):
                    available_devices.append((i, device['name'], hostapi_name, device))

        return available_devices, api_names

    @staticmethod
    def get_default_device() -> int:
        """Get default output device ID."""
        return sd.default.device[1]
