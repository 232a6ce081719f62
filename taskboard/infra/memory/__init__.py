"""In-memory repositories. State lives for the lifetime of the process."""

from taskboard.infra.memory.sessions import InMemorySessions
from taskboard.infra.memory.tasks import InMemoryTasks
from taskboard.infra.memory.users import InMemoryUsers

__all__ = [
    "InMemorySessions",
    "InMemoryTasks",
    "InMemoryUsers",
]
