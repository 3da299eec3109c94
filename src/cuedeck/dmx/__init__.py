"""DMX channel buffers, device controller and transports."""

from .buffer import DMX_CHANNEL_COUNT, DMX_MAX_VALUE, ChannelBuffer
from .controller import DeviceController
from .transport import NullTransport, SerialTransport

__all__ = [
    "DMX_CHANNEL_COUNT",
    "DMX_MAX_VALUE",
    "ChannelBuffer",
    "DeviceController",
    "NullTransport",
    "SerialTransport",
]
