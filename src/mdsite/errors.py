"""Error taxonomy for the publishing pipeline"""


class SiteError(Exception):
    """Base error tied to one source document (or output file)."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class IOUnreadable(SiteError):
    """A source file or the content root cannot be read."""


class MalformedFrontMatter(SiteError):
    """Front matter delimiters are missing or required metadata is absent/invalid."""


class IOWriteFailure(SiteError):
    """An output artifact cannot be written."""
