"""
Core infrastructure: settings, logging, persistence and security.
"""
