"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (HTTP survey service,
    in-memory survey source, photo destinations, and filesystem preferences)
    used by use cases and the survey view model.

Dependencies:
    Individual submodules depend on ``requests``, filesystem APIs, and domain
    protocol definitions.

Call context:
    Imported by app composition modules (for runtime wiring) and by tests (for
    offline doubles and transport-level behavior verification).
"""
