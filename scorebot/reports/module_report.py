"""
Module score report: required tasks split into homeworks / labs / tests,
optional extra tasks with their own subtotal and a grand total.

Rendering is pure: the same (module_id, results, tasks) always produce
the same text.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Sequence

from scorebot.domain.errors import UnsupportedTaskKind
from scorebot.domain.kinds import TaskKind, parse_kind
from scorebot.domain.models import Task, TaskResult
from scorebot.reports.links import module_link
from scorebot.reports.markdown import NEW_LINE, PARAGRAPH, bold, code, italic, link, num

# fixed rendering order of the required pool
REQUIRED_GROUPS: tuple[tuple[str, TaskKind], ...] = (
    ("Homeworks", TaskKind.HOMEWORK),
    ("Labs", TaskKind.LAB),
    ("Tests", TaskKind.TEST),
)
EXTRA_GROUP_TITLE = "Extra tasks"
HELP_HINT = "/help"

@dataclass(frozen=True)
class TaskGroup:
    text: str
    total: float
    max_total: float

def achieved_score(task: Task, results: Iterable[TaskResult]) -> float:
    """Score of the first result for this task; ungraded or missing counts as 0."""
    res = next((r for r in results if r.task == task.id), None)
    return res.score if res is not None and res.score else 0

def render_task_group(title: str, results: Sequence[TaskResult], tasks: Sequence[Task]) -> TaskGroup:
    total = 0
    max_total = 0
    text = f"{bold(title)} ({len(tasks)}):{NEW_LINE}"
    for task in tasks:
        score = achieved_score(task, results)
        max_score = task.score or 0
        total += score
        max_total += max_score
        text += f"{bold(num(score))}/{num(max_score)}: {code(task.id)}{NEW_LINE}"
    return TaskGroup(text=text, total=total, max_total=max_total)

def _check_kinds(tasks: Iterable[Task]) -> None:
    for task in tasks:
        if parse_kind(task.kind) is None:
            raise UnsupportedTaskKind(task.kind, task.id)

def build_module_report(module_id: str, results: Sequence[TaskResult],
                        tasks: Sequence[Task], base_url: str) -> str:
    # extras included
    _check_kinds(tasks)
    required = [t for t in tasks if not t.is_extra]
    extra = [t for t in tasks if t.is_extra]

    text = f"Your scores in module {link(module_id, module_link(base_url, module_id))}:{PARAGRAPH}"
    text += f"Required tasks ({len(required)}):{NEW_LINE}{code('---')}{NEW_LINE}"

    required_score = 0
    max_required_score = 0
    for title, kind in REQUIRED_GROUPS:
        group = render_task_group(title, results, [t for t in required if parse_kind(t.kind) is kind])
        text += group.text
        required_score += group.total
        max_required_score += group.max_total
    text += (f"{code('---')}{NEW_LINE}{bold(num(required_score))}/{num(max_required_score)} "
             f"{italic('total required scores')}")

    if extra:
        group = render_task_group(EXTRA_GROUP_TITLE, results, extra)
        text += PARAGRAPH + group.text
        text += (f"{code('---')}{NEW_LINE}{bold(num(group.total))}/{num(group.max_total)} "
                 f"{italic('total extra scores')}")
        text += (f"{PARAGRAPH}{code('===')}{NEW_LINE}"
                 f"{bold(num(required_score + group.total))}/{num(max_required_score + group.max_total)} "
                 f"{italic('total scores')}")

    text += PARAGRAPH + HELP_HINT
    return text
