"""Pytest fixtures for tests."""

import threading
import time
from pathlib import Path
from tempfile import TemporaryDirectory

import numpy as np
import pytest
import soundfile as sf

from cuedeck.core import PlaybackController
from cuedeck.dmx import DeviceController
from cuedeck.exceptions import DecodeError, TransportError


class FakeTransport:
    """Records every frame written; can be told to fail."""

    def __init__(self, fail: bool = False, write_delay: float = 0.0):
        self.frames: list[bytes] = []
        self.closed = False
        self.fail = fail
        self.write_delay = write_delay
        self.overlaps = 0
        self._writing = False

    def write(self, data: bytes) -> None:
        if self._writing:
            self.overlaps += 1
        self._writing = True
        try:
            if self.write_delay:
                time.sleep(self.write_delay)
            if self.fail:
                raise TransportError("DMX interface write failed", original_error="fake failure")
            self.frames.append(bytes(data))
        finally:
            self._writing = False

    def close(self) -> None:
        self.closed = True


class FakeSink:
    """Sink that records volume updates and drains only when told to."""

    def __init__(self):
        self.appended = []
        self.volumes: list[float] = []
        self.stopped = threading.Event()
        self._drained = threading.Event()

    def append(self, decoder) -> None:
        self.appended.append(decoder)

    def set_volume(self, volume: float) -> None:
        self.volumes.append(volume)

    def stop(self) -> None:
        self.stopped.set()

    @property
    def empty(self) -> bool:
        return self._drained.is_set()

    def drain(self) -> None:
        """Pretend every appended source has finished playing."""
        self._drained.set()


class FakeBackend:
    """Backend whose sources are plain strings; listed sources fail to open."""

    def __init__(self, fail_sources: tuple[str, ...] = ()):
        self.fail_sources = set(fail_sources)
        self.sinks: list[FakeSink] = []
        self._lock = threading.Lock()

    def open(self, source: str) -> str:
        if source in self.fail_sources:
            raise DecodeError(source, "corrupt header")
        return source

    def create_sink(self) -> FakeSink:
        sink = FakeSink()
        with self._lock:
            self.sinks.append(sink)
        return sink

    def sinks_for(self, source: str) -> list[FakeSink]:
        with self._lock:
            return [s for s in self.sinks if source in s.appended]


def wait_until(predicate, timeout: float = 2.0, interval: float = 0.005) -> bool:
    """Poll predicate until it is true or the timeout passes."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_audio_file(temp_dir):
    """Create a simple test audio file."""
    sample_rate = 44100
    duration = 0.1  # 100ms
    t = np.linspace(0, duration, int(sample_rate * duration), dtype=np.float32)
    audio_data = np.sin(2 * np.pi * 440 * t).astype(np.float32)

    file_path = temp_dir / "test.wav"
    sf.write(str(file_path), audio_data, sample_rate)

    return file_path


@pytest.fixture
def stereo_audio_file(temp_dir):
    """Create a short stereo test file."""
    sample_rate = 48000
    frames = 2400
    audio_data = np.zeros((frames, 2), dtype=np.float32)
    audio_data[:, 0] = 0.25
    audio_data[:, 1] = -0.25

    file_path = temp_dir / "stereo.wav"
    sf.write(str(file_path), audio_data, sample_rate, subtype="FLOAT")

    return file_path


@pytest.fixture
def transport():
    """Create a recording DMX transport."""
    return FakeTransport()


@pytest.fixture
def dmx(transport):
    """Create a two-universe DeviceController on a fake transport."""
    return DeviceController(transport, universe_count=2)


@pytest.fixture
def backend():
    """Create a fake audio backend."""
    return FakeBackend(fail_sources=("broken.wav",))


@pytest.fixture
def playback(backend):
    """Create a fast-polling PlaybackController; shut down after the test."""
    controller = PlaybackController(backend, poll_interval=0.01, restart_timeout=1.0)
    yield controller
    controller.shutdown(timeout=2.0)
