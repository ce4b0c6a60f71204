"""ECG heart-risk batch analysis: validation, scoring, narratives and reports."""

__version__ = "0.1.0"
