"""hostpanel — hosting panel setup orchestrator and entity reconciliation engine."""

__version__ = "1.0.0"
