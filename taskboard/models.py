from dataclasses import dataclass

PRIORITIES = ("High", "Medium", "Low")
UNKNOWN_USER = "Unknown"

_PRIORITY_RANK = {"high": 3, "medium": 2, "low": 1}


def priority_rank(priority):
    """Sort rank for a priority label; unrecognized labels rank 0."""
    return _PRIORITY_RANK.get((priority or "").lower(), 0)


@dataclass(frozen=True)
class User:
    id: int
    username: str


@dataclass
class Task:
    id: int
    title: str
    description: str
    priority: str  # High, Medium, Low
    assigned_to_user_id: int
    assigned_to_username: str
    is_complete: bool
    progress: int  # 0-100, not enforced

    def __str__(self):
        status = "[COMPLETE]" if self.is_complete else "[PENDING]"
        return (
            f"{status} ID: {self.id} | {self.title} | Priority: {self.priority} "
            f"| Progress: {self.progress}% | Assigned to: {self.assigned_to_username}"
        )


def preview_text(text, limit=50):
    """Shorten a description for a board card: limit-3 chars plus '...' when too long."""
    text = text or ""
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def format_assignee(user):
    return f"{user.id} - {user.username}"


def parse_assignee(label):
    """'3 - bob' -> 3. Raises ValueError on anything else."""
    head, sep, _ = (label or "").partition(" - ")
    if not sep:
        raise ValueError(f"invalid assignee: {label!r}")
    return int(head)
