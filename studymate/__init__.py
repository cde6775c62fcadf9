"""StudyMate: academic records held in memory and mirrored to storage backends."""

__version__ = "0.1.0"
