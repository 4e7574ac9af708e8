from __future__ import annotations
from scorebot.domain.errors import UnsupportedTaskKind
from scorebot.domain.kinds import TaskKind, parse_kind
from scorebot.domain.models import Task

KIND_SEGMENTS = {
    TaskKind.HOMEWORK: "homeworks",
    TaskKind.LAB: "labs",
    TaskKind.TEST: "tests",
}

def kind_segment(task: Task) -> str:
    kind = parse_kind(task.kind)
    if kind is None:
        raise UnsupportedTaskKind(task.kind, task.id)
    return KIND_SEGMENTS[kind]

def module_link(base_url: str, module_id: str) -> str:
    return f"{base_url}/modules/{module_id}"

def task_link(base_url: str, task: Task) -> str:
    return f"{module_link(base_url, task.module_id)}/{kind_segment(task)}/{task.id}"
