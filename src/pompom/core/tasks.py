"""Pure task quick-add logic - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import datetime

from .due import parse_due_or_null
from .events import LOCAL_FORMAT
from .tags import extract_tags_from_text

DEFAULT_TASK_TITLE = "New Task"


@dataclass
class TaskDraft:
    """A task typed into the quick-add box, before it is stored."""

    title: str
    tags: list[str] = field(default_factory=list)
    due_local: str | None = None

    @property
    def has_due(self) -> bool:
        return self.due_local is not None

    def is_overdue(self, as_of: datetime | None = None) -> bool:
        """Due time already passed."""
        if not self.due_local:
            return False
        as_of = as_of or datetime.now()
        return datetime.strptime(self.due_local, LOCAL_FORMAT) < as_of.replace(tzinfo=None)

    def to_dict(self) -> dict:
        return {"text": self.title, "tags": list(self.tags), "dueLocal": self.due_local}


def parse_task_input(text: str | None, now: datetime | None = None) -> TaskDraft:
    """
    Split quick-add text into title, tags and an optional due date.

    Pure function - no I/O. The due date is only set when the text
    carries a date signal (today, tomorrow, "in N days", a weekday).
    """
    clean, tags = extract_tags_from_text(text)
    return TaskDraft(
        title=clean or DEFAULT_TASK_TITLE,
        tags=tags,
        due_local=parse_due_or_null(text, now),
    )
