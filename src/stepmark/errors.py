"""Exception classes for stepmark.

Segmenting and inline formatting never raise: malformed input degrades to
paragraphs and plain text. These exceptions belong to the layers around the
core (rendering and step content loading).
"""

from __future__ import annotations


class StepmarkError(Exception):
    """Base exception for all stepmark errors."""

    pass


class RenderError(StepmarkError):
    """Error during HTML rendering.

    Raised when the renderer is handed something that is not a document node.
    """

    pass


class StepContentError(StepmarkError):
    """Malformed step content payload.

    Raised when a step JSON document is missing fields or has the wrong types.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize step content error with optional context.

        Args:
            message: Error description
            field: Name of the offending field (optional)
            source_file: Path of the step file (optional)
        """
        self.message = message
        self.field = field
        self.source_file = source_file

        prefix = ""
        if source_file:
            prefix = f"{source_file}: "
        if field:
            prefix += f"field '{field}': "

        super().__init__(f"{prefix}{message}")
