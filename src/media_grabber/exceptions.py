"""Exceptions raised by the media grabber."""


class MediaGrabberError(Exception):
    """Base class for all media grabber errors."""


class HostError(MediaGrabberError):
    """A host could not satisfy a request."""


class FixtureError(HostError):
    """A site fixture file is missing or malformed."""
