"""
Helpers for embedding schema values into generated PHP source.

Field names, labels and titles come from user supplied JSON and end up
inside single-quoted PHP strings, HTML attributes and comments.
"""

import re


def php_string(value: str) -> str:
    """Escape a value for use inside a single-quoted PHP string literal."""
    return str(value).replace("\\", "\\\\").replace("'", "\\'")


def php_comment(value: str) -> str:
    """Make a value safe inside a block or line comment."""
    text = re.sub(r"[\r\n]+", " ", str(value))
    return text.replace("*/", "* /").replace("?>", "? >")


def html_class(value: str) -> str:
    """Escape a value placed in a double-quoted HTML attribute within a PHP literal."""
    return php_string(str(value).replace('"', "&quot;"))
