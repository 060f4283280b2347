"""Shared router helpers."""

from .error_handling import handle_service_errors

__all__ = ["handle_service_errors"]
