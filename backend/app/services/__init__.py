"""
Services for CourseHub.

- catalog: course catalog lookups and content administration
- progress: purchases, progress reconciliation and watched videos
"""

from .catalog import CourseCatalog
from .progress import ProgressTracker

__all__ = [
    "CourseCatalog",
    "ProgressTracker"
]
