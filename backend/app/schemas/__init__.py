"""
Pydantic request/response schemas for CourseHub.
"""
