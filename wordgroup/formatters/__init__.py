"""Output formatter registry: pluggable format hub.

WHY: The CLI needs a single lookup to find the right formatter by name.
A central dict makes it trivial to add new formats: create the formatter
class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["json"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Type

from wordgroup.formatters.json_words import JsonWordsFormatter
from wordgroup.formatters.plain_text import PlainTextFormatter
from wordgroup.formatters.table import TableFormatter

if TYPE_CHECKING:
    from wordgroup.formatters.base import BaseFormatter

FORMATTERS: Dict[str, Type[BaseFormatter]] = {
    "plain_text": PlainTextFormatter,
    "json": JsonWordsFormatter,
    "table": TableFormatter,
}

DEFAULT_FORMAT = "plain_text"
