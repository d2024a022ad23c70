class SoundCloudError(RuntimeError):
    """Base class for errors raised by the SoundCloud client."""


class RequestFailed(SoundCloudError):
    """A SoundCloud HTTP call failed (4xx, 5xx, transport or non-JSON response).

    The original httpx/JSON exception is kept as ``__cause__``.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
