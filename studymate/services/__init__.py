"""
High-level use cases for StudyMate.

The service owns the in-memory records, enforces id uniqueness and course
references, and drives persistence through the repositories. Routers and
scripts call these services instead of touching repositories directly.
"""
