"""Shared error codes, user-facing messages and pacing exceptions."""

from __future__ import annotations

INVALID_TRANSITION = "INVALID_TRANSITION"
INVALID_CONFIG = "INVALID_CONFIG"
PERMISSION_DENIED = "PERMISSION_DENIED"
AUDIO_DEVICE_ERROR = "AUDIO_DEVICE_ERROR"
SAVE_FAILED = "SAVE_FAILED"

ERROR_MESSAGES = {
    INVALID_TRANSITION: "That action is not available right now.",
    INVALID_CONFIG: "Words per minute must be a positive number.",
    PERMISSION_DENIED: "Microphone permission is required in system settings.",
    AUDIO_DEVICE_ERROR: "Audio device failed, recording continues without sound.",
    SAVE_FAILED: "The recording could not be saved.",
}


class PacingError(Exception):
    """Base class for errors raised by the pacing core."""

    code = "PACING_ERROR"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)

    @property
    def user_message(self) -> str:
        return ERROR_MESSAGES.get(self.code, self.detail)


class InvalidTransition(PacingError):
    """Raised when an event is not permitted from the current session state."""

    code = INVALID_TRANSITION

    def __init__(self, state: str, event: str) -> None:
        self.state = state
        self.event = event
        super().__init__(f"cannot {event} while {state}")


class InvalidConfig(PacingError):
    """Raised for a non-positive words-per-minute rate."""

    code = INVALID_CONFIG
