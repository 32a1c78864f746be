import math
from typing import Any, Iterable, Optional

import pendulum

WORDS_PER_MINUTE = 200
DATE_DISPLAY_FORMAT = "DD MMM YYYY"
DATE_DISPLAY_LOCALE = "pt_br"


def _field(item: Any, name: str):
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def count_words(text: str) -> int:
    # Split on the literal space only, so "" still counts as one token.
    return len(text.split(" "))


def estimate_reading_time(
    content: Iterable[Any], words_per_minute: int = WORDS_PER_MINUTE
) -> int:
    """Minutes needed to read the given content sections, rounded up."""
    total_words = 0
    for section in content:
        total_words += count_words(_field(section, "heading") or "")
        for block in _field(section, "body") or []:
            text = _field(block, "text")
            if text is None:
                continue
            total_words += count_words(text)

    return math.ceil(total_words / words_per_minute)


def format_publication_date(value: Optional[str]) -> str:
    if not value:
        return ""
    return pendulum.parse(value).format(DATE_DISPLAY_FORMAT, locale=DATE_DISPLAY_LOCALE)
