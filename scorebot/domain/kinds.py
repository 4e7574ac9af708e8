from __future__ import annotations
from enum import Enum

class TaskKind(str, Enum):
    HOMEWORK = "homework"
    LAB = "lab"
    TEST = "test"

# tasks table of the grading site stores homeworks as "task"
KIND_ALIASES = {"task": TaskKind.HOMEWORK}

def parse_kind(raw: str) -> TaskKind | None:
    value = (raw or "").strip().lower()
    if value in KIND_ALIASES:
        return KIND_ALIASES[value]
    try:
        return TaskKind(value)
    except ValueError:
        return None
