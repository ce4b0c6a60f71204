from __future__ import annotations


class EcgRiskError(Exception):
    """Base class for errors raised by the analysis pipeline."""


class NarrativeRequestError(EcgRiskError):
    """Raised when the inference service cannot produce a narrative."""


class ExportUnavailableError(EcgRiskError):
    """Raised when a report export is requested for an empty batch."""


class ConfigError(EcgRiskError):
    """Raised when an environment setting cannot be parsed."""
