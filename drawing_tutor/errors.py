"""Exceptions that abort a tutorial request."""


class TutorialError(Exception):
    """Base class — the API turns these into a 500 response."""


class AnalysisError(TutorialError):
    """The vision model could not describe the uploaded image."""


class SketchGenerationError(TutorialError):
    """No reference sketch was produced, so no steps can be generated."""
