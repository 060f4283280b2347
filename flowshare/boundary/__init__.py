"""System boundaries: the diagram document store."""
