"""
Error taxonomy for the Prompt Studio.

Generation errors carry a single user-facing (localized) message; the
underlying cause is chained and logged, never shown.
"""


class PromptStudioError(Exception):
    """Base class for all Prompt Studio errors."""


class NotInitializedError(PromptStudioError):
    """A generation call was attempted without an active credential."""


class GenerationFailedError(PromptStudioError):
    """The external model call failed or returned an unusable response."""


class MalformedEditError(PromptStudioError, ValueError):
    """Raw text could not be parsed into a valid prompt document."""


class InvalidUpdateError(PromptStudioError, ValueError):
    """A store mutation would leave the document violating the schema."""


class DocumentAbsentError(PromptStudioError, LookupError):
    """A field-level mutation was attempted while no document is loaded."""
