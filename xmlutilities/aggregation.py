#
# Copyright (c), 2026, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""
Error aggregation helpers. Each public load or validate call creates its own
:class:`ErrorCollection` and uses it as the sink for the errors reported by
the XSD engine, then exposes to the caller only an immutable snapshot.
"""
import dataclasses as dc
from collections.abc import Iterator
from enum import Enum
from typing import Any, Optional, Union

from .logger import logger

__all__ = ['Severity', 'ValidationError', 'ErrorCollection']


class Severity(str, Enum):
    ERROR = 'error'
    WARNING = 'warning'


@dc.dataclass(frozen=True)
class ValidationError:
    """
    An immutable record of an error found while loading schemas or
    validating an XML document.

    :param message: the error message.
    :param line: the line number of the error, if known.
    :param column: the column number of the error, if known.
    :param path: the path of the XML element related to the error, if known.
    :param severity: the severity of the error.
    :param exception: the original exception, not used for equality.
    """
    message: str
    line: Optional[int] = None
    column: Optional[int] = None
    path: Optional[str] = None
    severity: Severity = Severity.ERROR
    exception: Optional[BaseException] = dc.field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        return self.message

    @property
    def position(self) -> Optional[tuple[Optional[int], Optional[int]]]:
        if self.line is None and self.column is None:
            return None
        return self.line, self.column

    @classmethod
    def from_exception(cls, error: BaseException,
                       severity: Severity = Severity.ERROR) -> 'ValidationError':
        """
        Builds a record from an exception raised by the XML parser or by the
        XSD engine. The message includes the reason of xmlschema's errors and
        the path of the offending element.
        """
        message: str = getattr(error, 'message', None) or str(error)
        reason = getattr(error, 'reason', None)
        if reason:
            message = f"{message.rstrip('.:')}: {reason}"

        try:
            path: Optional[str] = getattr(error, 'path', None)
        except (AttributeError, ValueError, TypeError):
            path = None  # a path can't be computed for detached elements

        if path and path not in message:
            message = f"{path}: {message}"

        line = column = None
        position = getattr(error, 'position', None)
        if isinstance(position, tuple) and len(position) == 2:
            line, column = position
        elif isinstance(getattr(error, 'lineno', None), int):
            # SyntaxError-like parse errors
            line = error.lineno  # type: ignore[attr-defined]
            offset = getattr(error, 'offset', None)
            if isinstance(offset, int):
                column = offset
        else:
            sourceline = getattr(error, 'sourceline', None)
            if isinstance(sourceline, int):
                line = sourceline

        return cls(message, line, column, path, severity, error)

    @classmethod
    def from_warning(cls, warning: Union[str, Warning]) -> 'ValidationError':
        if isinstance(warning, Warning):
            return cls.from_exception(warning, Severity.WARNING)
        return cls(str(warning), severity=Severity.WARNING)


class ErrorCollection:
    """
    An ordered, append-only collection of validation errors, scoped to a
    single load or validate call. An instance is also usable as the error
    sink of the XSD processing: called with an error it records the error
    only if it has an error severity, warnings are logged and discarded.
    """
    __slots__ = ('_errors',)

    def __init__(self) -> None:
        self._errors: list[ValidationError] = []

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self._errors!r})'

    def __len__(self) -> int:
        return len(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __iter__(self) -> Iterator[ValidationError]:
        yield from self._errors

    def __call__(self, error: Any, severity: Optional[Severity] = None) -> None:
        if isinstance(error, ValidationError):
            if severity is not None and error.severity != severity:
                error = dc.replace(error, severity=severity)
        elif isinstance(error, BaseException):
            error = ValidationError.from_exception(error, severity or Severity.ERROR)
        else:
            error = ValidationError(str(error), severity=severity or Severity.ERROR)

        if error.severity == Severity.ERROR:
            logger.debug("Collected error: %s", error.message)
            self._errors.append(error)
        else:
            logger.info("Discarded warning: %s", error.message)

    def snapshot(self) -> tuple[ValidationError, ...]:
        """Returns the immutable snapshot of the collected errors."""
        return tuple(self._errors)
