"""
Utility helpers for CourseHub.

- analytics: progress, analytics, streak and watched-video calculations
"""
