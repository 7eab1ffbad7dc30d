"""Microphone recorder adapter."""

from __future__ import annotations

import io
import logging
import threading
import time
import wave
from pathlib import Path
from queue import Empty, Full, Queue
from typing import Any

from models import AudioFrame

try:
    import numpy as np
except Exception:  # pragma: no cover
    np = None  # type: ignore

try:
    import sounddevice as sd
except Exception:  # pragma: no cover
    sd = None  # type: ignore

logger = logging.getLogger(__name__)

BUFFER_HEADROOM_BLOCKS = 50


def pcm_to_wav_bytes(
    pcm: bytes,
    sample_rate: int = 16000,
    channels: int = 1,
    sample_width: int = 2,
) -> bytes:
    """Wrap raw PCM bytes in a WAV container."""
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(sample_width)
        wf.setframerate(sample_rate)
        wf.writeframes(pcm)
    return buf.getvalue()


def save_wav(path: Path, pcm: bytes, sample_rate: int = 16000, channels: int = 1) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(pcm_to_wav_bytes(pcm, sample_rate=sample_rate, channels=channels))
    return path


def buffer_blocks(max_duration_s: int, chunk_ms: int = 100) -> int:
    """Number of blocks needed to hold a whole take, with headroom for the final tick."""
    return (max_duration_s * 1000) // chunk_ms + BUFFER_HEADROOM_BLOCKS


class SoundDeviceRecorder:
    def __init__(
        self,
        sample_rate: int = 16000,
        channels: int = 1,
        chunk_ms: int = 100,
        max_duration_s: int = 60,
    ) -> None:
        self.sample_rate = sample_rate
        self.channels = channels
        self.chunk_ms = chunk_ms
        self._stream: Any = None
        self._running = False
        self._paused = False
        self._lock = threading.Lock()
        self._level = 0.0
        self.dropped_chunks = 0
        self._frames: Queue[AudioFrame] = Queue(maxsize=buffer_blocks(max_duration_s, chunk_ms))

    @property
    def level(self) -> float:
        """RMS level of the most recent block, in 0..1."""
        return self._level

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            if sd is None:
                raise RuntimeError("sounddevice is not installed")
            self._frames = Queue(maxsize=self._frames.maxsize)
            self.dropped_chunks = 0
            blocksize = int(self.sample_rate * (self.chunk_ms / 1000.0))
            self._stream = sd.InputStream(
                samplerate=self.sample_rate,
                channels=self.channels,
                dtype="int16",
                blocksize=blocksize,
                callback=self._on_audio,
            )
            try:
                self._stream.start()
            except Exception:
                self._stream.close()
                self._stream = None
                raise
            self._paused = False
            self._running = True

    def pause(self) -> None:
        with self._lock:
            self._paused = True
            self._level = 0.0

    def resume(self) -> None:
        with self._lock:
            self._paused = False

    def stop(self) -> bytes:
        """Close the stream and return everything captured since ``start``."""
        with self._lock:
            if self._running:
                self._running = False
                if self._stream is not None:
                    self._stream.stop()
                    self._stream.close()
                    self._stream = None
            self._level = 0.0
            self._paused = False
            pcm = self._drain()
        if self.dropped_chunks:
            logger.warning("dropped %d audio chunks", self.dropped_chunks)
        return pcm

    def _drain(self) -> bytes:
        chunks: list[bytes] = []
        while True:
            try:
                chunks.append(self._frames.get_nowait().pcm16_bytes)
            except Empty:
                return b"".join(chunks)

    def _on_audio(self, indata: Any, frames: int, time_info: Any, status: Any) -> None:
        if not self._running or self._paused:
            return
        if np is None:
            return
        samples = np.asarray(indata, dtype=np.int16)
        if samples.size:
            rms = float(np.sqrt(np.mean(samples.astype(np.float32) ** 2)))
            self._level = min(1.0, rms / 32768.0)
        frame = AudioFrame(
            pcm16_bytes=samples.tobytes(),
            sample_rate=self.sample_rate,
            channels=self.channels,
            timestamp_ms=int(time.time() * 1000),
        )
        try:
            self._frames.put_nowait(frame)
        except Full:
            self.dropped_chunks += 1
