"""
Version 1 of the API.

Paths are the ones the directory client calls (``/data``,
``/nominations``, ``/speakers`` and the suggestion endpoints).
"""
