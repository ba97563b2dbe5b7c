# Exceptions that abort the migration run

class MigrationError(Exception):
    """Base class for every fatal, structural migration failure."""


class MissingFieldError(MigrationError):
    """An expected marker or field is absent from the archived page."""


class MalformedLinkError(MigrationError):
    """An anchor could not be parsed or does not carry an archive prefix."""


class UnrecognizedLinkShapeError(MalformedLinkError):
    """An internal link is neither a tag page nor a dated permalink."""


class MalformedImageError(MigrationError):
    """An image tag has no usable source attribute."""


class MalformedCommentError(MigrationError):
    """A comment's third-party identity could not be resolved."""


class FetchError(MigrationError):
    """A page could not be fetched from the archive."""
