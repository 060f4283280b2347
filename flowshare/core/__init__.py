"""
Core domain layer.

Role resolution, graph change semantics, the edit buffer and the
exception hierarchy. No persistence or transport concerns live here.
"""
