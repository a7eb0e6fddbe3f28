"""
Application package initializer.

This package contains the entrypoint for the API and its submodules:
``core`` (configuration, persistence, security, logging), ``schemas``
(request/response models), ``services`` (business logic) and ``api``
(versioned HTTP routes).
"""

from .main import app, create_app  # noqa: F401
