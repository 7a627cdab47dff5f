from datetime import datetime, timedelta, timezone

from app.core.security import create_access_token


FIXED_NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def sample_modules():
    return [
        {
            "id": "m1",
            "title": "Getting started",
            "lessons": [
                {"id": "l1", "title": "Welcome", "duration": "05:00"},
                {"id": "l2", "title": "Setup", "duration": "12:30", "thumbnail": "/thumbs/l2.png"},
            ],
        },
        {
            "id": "m2",
            "title": "Basics",
            "lessons": [
                {"id": "l3", "title": "Variables"},
            ],
        },
    ]


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}
