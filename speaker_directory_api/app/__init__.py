"""
Application package initializer.

The project is organised into logical pieces: ``core`` holds
configuration, logging, the JSON document store and security helpers;
``schemas`` holds the pydantic models for speakers, nominations and
reviews; ``services`` holds the business logic; and ``api/v1``
exposes one router per domain.
"""

from .main import app  # noqa: F401
