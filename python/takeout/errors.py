"""Exception types for Takeout."""


class TakeoutError(Exception):
    """Base class for all Takeout errors."""


class SetupError(TakeoutError):
    """Base directories could not be resolved or created."""


class ArchiveOpenError(TakeoutError):
    """The source archive is missing, unreadable or not a zip file."""


class ExtractionError(TakeoutError):
    """A single archive entry could not be extracted."""


class DestinationCreateError(ExtractionError):
    """The destination file could not be created or written."""


class CopyError(ExtractionError):
    """The archive entry stream was corrupt, truncated or unreadable."""


class MetadataError(TakeoutError):
    """Tag metadata could not be read from an extracted file."""


class FileOpenError(MetadataError):
    """The extracted file could not be opened."""


class TagParseError(MetadataError):
    """The file has no recognizable tag block or the block is malformed."""
