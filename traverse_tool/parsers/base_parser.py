"""
Base Parser Module

Abstract base class and shared helpers for survey record parsers.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union
import logging
import math

from ..config.settings import get_settings
from ..engine.errors import MalformedRecordError, TraverseError


logger = logging.getLogger(__name__)


def split_fields(text: str, count: int) -> List[str]:
    """
    Split a record into at most ``count`` whitespace-delimited fields.

    The text is trimmed first. The first ``count - 1`` fields are single
    tokens; the last field is the rest of the line with its leading
    whitespace removed, so it may contain embedded whitespace.

        >>> split_fields("how now brown cow", 3)
        ['how', 'now', 'brown cow']

    Fewer than ``count`` fields are returned when the text runs out.
    """
    if count < 1:
        raise ValueError("count must be at least 1")
    text = text.strip()
    if not text:
        return []
    return text.split(maxsplit=count - 1)


def parse_number(raw: str, field: str) -> float:
    """
    Parse a numeric field as a finite float.

    Raises:
        MalformedRecordError: the text is not a finite number
    """
    try:
        value = float(raw)
    except ValueError:
        raise MalformedRecordError(
            f"invalid {field} '{raw}'", field=field, raw=raw
        ) from None
    if not math.isfinite(value):
        raise MalformedRecordError(
            f"{field} must be a finite number, got '{raw}'", field=field, raw=raw
        )
    return value


def check_range(value: float, field: str, raw: str,
                low: Optional[float] = None, high: Optional[float] = None,
                high_inclusive: bool = True):
    """Raise MalformedRecordError if value falls outside [low, high]."""
    too_low = low is not None and value < low
    if high is None:
        too_high = False
    elif high_inclusive:
        too_high = value > high
    else:
        too_high = value >= high
    if too_low or too_high:
        closing = ']' if high_inclusive else ')'
        raise MalformedRecordError(
            f"{field} '{raw}' out of range [{low}, {high}{closing}",
            field=field, raw=raw
        )


def require_fields(parts: Sequence[str], names: Sequence[str], record: str):
    """Raise MalformedRecordError naming the first missing field."""
    if len(parts) < len(names):
        missing = names[len(parts)]
        raise MalformedRecordError(
            f"missing {missing} field in {record} "
            f"(expected {len(names)} fields, found {len(parts)})",
            field=missing, raw=' '.join(parts)
        )


class BaseParser(ABC):
    """Abstract base class for survey record file parsers."""

    def __init__(self, encoding: str = None):
        """
        Initialize the parser.

        Args:
            encoding: File encoding to use. If None, uses default from settings.
        """
        self.settings = get_settings()
        self.encoding = encoding or self.settings.encoding.default_encoding

    @abstractmethod
    def parse_text(self, text: str) -> Any:
        """Parse raw file contents."""
        pass

    def parse(self, filepath: Union[str, Path]) -> Any:
        """
        Read and parse a file.

        Any TraverseError raised while parsing is tagged with the file path.
        """
        text = self.read_file(filepath)
        try:
            return self.parse_text(text)
        except TraverseError as e:
            raise e.add_context(source=str(filepath))

    def read_file(self, filepath: Union[str, Path]) -> str:
        """
        Read file contents, trying the configured encodings in turn.

        Args:
            filepath: Path to the file

        Returns:
            File contents as text
        """
        encodings = [self.encoding] + self.settings.encoding.fallback_encodings

        for enc in encodings:
            try:
                with open(filepath, 'r', encoding=enc) as f:
                    text = f.read()
                logger.debug(f"Read {filepath} with encoding {enc}")
                return text
            except (UnicodeDecodeError, LookupError):
                continue

        raise MalformedRecordError(
            f"could not decode file with any of {', '.join(encodings)}",
            source=str(filepath)
        )
