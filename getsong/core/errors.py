from __future__ import annotations


class GetSongError(Exception):
    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class SearchError(GetSongError):
    pass


class RetrievalError(GetSongError):
    pass


class BootstrapError(GetSongError):
    pass


class ArchiveError(GetSongError):
    pass


class TranscodeError(GetSongError):
    pass


class UnsupportedPlatformError(Exception):
    """Raised when no encoder can be found or downloaded for this platform.

    Not a ``GetSongError``: there is no fallback, so callers should treat it as fatal.
    """

    def __init__(self, platform: str, context: str | None = None):
        message = f"no ffmpeg download available for platform '{platform}'"
        super().__init__(f"{context}: {message}" if context else message)
        self.code = "BOOTSTRAP_UNSUPPORTED_PLATFORM"
        self.platform = platform
        self.message = str(self)
