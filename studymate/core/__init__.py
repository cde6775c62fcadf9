"""
Core utilities shared across StudyMate.

This package hosts configuration helpers, logging setup and the error
taxonomy used by repositories and services. Nothing here should import from
the service or router layers.
"""
