"""
Pydantic schema definitions for the directory.

Speakers, nominations and reviews are stored in a single JSON document
and returned verbatim by the API, so the same models describe both the
persisted shape and the API payloads.  Field aliases keep the JSON
names (``lastVerified``, ``rateMin`` and so on) while the Python
attributes stay snake_case.
"""
