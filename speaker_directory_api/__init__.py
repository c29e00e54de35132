"""
Speaker Directory API.

A small service that keeps a directory of event speakers, the pending
nominations for it and the reviews speakers receive, plus AI-assisted
topic and matching suggestions.  The FastAPI application is
``speaker_directory_api.app.main:app``.
"""

__all__ = []
