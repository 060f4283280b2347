"""FlowShare: shared diagram documents with role-based editing."""

__version__ = "0.1.0"
