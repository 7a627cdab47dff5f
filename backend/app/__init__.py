"""
CourseHub backend: course catalog, purchases and learning progress.
"""
