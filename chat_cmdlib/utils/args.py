"""
Argument Tokenizer
Splits the text after a command invocation into a list of arguments
"""

import re
from enum import Enum
from typing import Any, Dict, List, Tuple

PIPE = "|"
QUOTE = '"'
ESCAPE = "\\"


class ArgType(str, Enum):
    """How a command's argument string is split."""

    PIPES = "pipes"
    SPACES = "spaces"
    ONE = "one"
    AUTO = "auto"

    @classmethod
    def parse(cls, value: Any) -> "ArgType":
        """
        Convert a config value to an ArgType.

        Args:
            value: ArgType, its name or value (any case), or None for AUTO

        Returns:
            Matching ArgType

        Raises:
            ValueError: If the value names no argument type
        """
        if value is None:
            return cls.AUTO
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise ValueError(f"Unknown argument type: {value!r}")


# Compiled (split, unescape) patterns per separator
_PATTERN_CACHE: Dict[str, Tuple[re.Pattern, re.Pattern]] = {}


def separator_pattern(sep: str) -> str:
    """
    Build the regex fragment matching a single separator character.

    Only the first character of ``sep`` is used. Punctuation is escaped with
    a backslash; letters and digits are used as-is.

    Args:
        sep: Separator character

    Returns:
        Regex fragment
    """
    letter = sep[:1]
    if re.match(r"[a-zA-Z0-9]", letter):
        return letter
    return ESCAPE + letter


def _patterns(sep: str) -> Tuple[re.Pattern, re.Pattern]:
    patterns = _PATTERN_CACHE.get(sep)
    if patterns is None:
        fragment = separator_pattern(sep)
        patterns = (
            re.compile(r"(?<!\\)" + fragment),
            re.compile(r"\\" + fragment),
        )
        _PATTERN_CACHE[sep] = patterns
    return patterns


def split_escaped(text: str, sep: str) -> List[str]:
    """
    Split text on every separator not preceded by a backslash.

    Escaped separators inside each segment are turned back into the literal
    separator. Empty segments are kept.

    Args:
        text: Text to split
        sep: Separator character

    Returns:
        List of segments
    """
    split_regex, escaped_regex = _patterns(sep)
    literal = sep[:1]
    return [escaped_regex.sub(lambda _: literal, part) for part in split_regex.split(text)]


def parse_args(text: str) -> List[str]:
    """
    Parse pipe separated arguments.

    Example: ``"a | b\\|c | d"`` -> ``["a", "b|c", "d"]``

    Args:
        text: Argument string

    Returns:
        List of arguments, one per segment
    """
    return [part.strip() for part in split_escaped(text, PIPE)]


def parse_args_spaces(text: str) -> List[str]:
    """
    Parse space separated arguments with double quote grouping.

    Text inside quotes is kept verbatim as one argument; everything else is
    split on whitespace. Unbalanced quotes are not an error.

    Args:
        text: Argument string

    Returns:
        List of arguments
    """
    unescaped = text.replace(ESCAPE + PIPE, PIPE)

    args: List[str] = []
    for index, item in enumerate(split_escaped(unescaped, QUOTE)):
        if index % 2 == 0:
            # outside quotes
            args.extend(item.split())
        else:
            args.append(item)

    return args


def has_unescaped_pipe(text: str) -> bool:
    """Check whether text contains a pipe that is not escaped."""
    return PIPE in text.replace(ESCAPE + PIPE, "")


def tokenize(text: str, arg_type: ArgType = ArgType.AUTO) -> List[str]:
    """
    Tokenize an argument string according to a command's argument type.

    Args:
        text: Argument string
        arg_type: How to split the arguments

    Returns:
        List of arguments
    """
    if arg_type is ArgType.PIPES:
        return parse_args(text)
    if arg_type is ArgType.SPACES:
        return parse_args_spaces(text)
    if arg_type is ArgType.ONE:
        return [text]

    if has_unescaped_pipe(text):
        return parse_args(text)
    return parse_args_spaces(text)
