"""
HTTP layer.  ``v1.router`` is mounted under ``/api/v1`` by ``main``.
"""
