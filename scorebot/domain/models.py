from dataclasses import dataclass
from typing import Optional

@dataclass
class User:
    username: str
    fullname: str = ""
    group_id: str = ""
    student_id: Optional[int] = None
    telegram_id: Optional[str] = None

@dataclass
class Task:
    id: str
    module_id: str
    kind: str
    title: str
    score: float
    is_extra: bool = False
    is_published: bool = True

@dataclass
class TaskResult:
    username: str
    course: str
    task: str
    score: Optional[float] = None
    comment: Optional[str] = None
    updtime: str = ""
    source: str = ""
    commit: str = ""
    checktime: Optional[str] = None
