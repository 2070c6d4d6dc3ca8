"""Exceptions raised by the remote-service layers."""


class VidscribeError(RuntimeError):
    """Base class for vidscribe failures surfaced to the user."""


class ServiceError(VidscribeError):
    """The generation service rejected the video or failed to analyze it."""


class TranslationError(VidscribeError):
    """The translation call failed or returned an unusable envelope."""
