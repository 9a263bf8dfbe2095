"""
utils/ - Shared Utilities
=========================
Logging setup and the error types raised across the data access layer.
"""
