"""
Error taxonomy for CourseHub.

Each error is an HTTPException so FastAPI renders it as ``{"detail": ...}``
with the matching status code, whether raised from a route or a service.
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """Missing user, course, module or lesson."""

    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ForbiddenError(HTTPException):
    """Role or ownership check failed."""

    def __init__(self, detail: str = "Access denied"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class ConflictError(HTTPException):
    """Duplicate unique key such as a course id or a purchase."""

    def __init__(self, detail: str = "Already exists"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class UnauthorizedError(HTTPException):
    """Bad credentials or an invalid bearer token."""

    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )
