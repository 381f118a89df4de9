"""Domain entity describing who is looking at the notification center."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ActingUser:
    """Identity and role supplied by the authentication collaborator."""

    user_id: str
    role: str | None = None


__all__ = ["ActingUser"]
