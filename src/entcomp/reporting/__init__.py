from .base import (
    Reporter,
    TaskStatus,
    get_reporter,
    set_reporter,
    section,
    task,
)
from .base import (
    set_verbosity,
    get_verbosity,
)
from .plain import PlainReporter
from .jsonl import JsonLinesReporter
from .silent import SilentReporter
from .rich_reporter import RichReporter

REPORTERS = {
    "plain": PlainReporter,
    "rich": RichReporter,
    "json": JsonLinesReporter,
    "silent": SilentReporter,
}

__all__ = [
    "Reporter",
    "TaskStatus",
    "get_reporter",
    "set_reporter",
    "section",
    "task",
    "set_verbosity",
    "get_verbosity",
    "PlainReporter",
    "JsonLinesReporter",
    "SilentReporter",
    "RichReporter",
    "REPORTERS",
]
