"""Application composition layer.

Modules here wire settings, adapters, use cases, and the survey view model
into a runnable headless workflow without placing business logic in views.
"""
