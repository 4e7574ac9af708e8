from __future__ import annotations
from scorebot.domain.models import Task, TaskResult
from scorebot.reports.links import task_link
from scorebot.reports.markdown import NEW_LINE, PARAGRAPH, bold, escape, link, num

def render_checked_message(task: Task, result: TaskResult, base_url: str) -> str:
    """Push message sent to a subscribed student once a submission is graded."""
    score = bold(num(result.score) if result.score else "-")
    title = bold(f"\"{task.title}\"")
    comment = f"{PARAGRAPH}{escape(result.comment)}" if result.comment else ""
    return (f"Your task was checked:{NEW_LINE}{title}{NEW_LINE}"
            f"{link(f'{result.course}/{result.task}', task_link(base_url, task))}{PARAGRAPH}"
            f"Score: {score}/{num(task.score)}{comment}")
