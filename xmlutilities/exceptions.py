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
This module contains the exception classes of the package. All the errors
share a single base class, the kind of the error is stored in the *kind*
attribute and the subclasses only fix it, for selecting errors with the
except clause.
"""
from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Any, ClassVar, Optional

from .aggregation import ValidationError

__all__ = ['ErrorKind', 'XmlUtilitiesError', 'MissingInputError',
           'LoadSchemaSetError', 'XmlValidationError', 'CompareError',
           'MarshalError']


class ErrorKind(Enum):
    MISSING_INPUT = 'missing-input'
    LOAD = 'load'
    VALIDATION = 'validation'
    COMPARE = 'compare'
    MARSHAL = 'marshal'


MESSAGE_TEMPLATES = {
    ErrorKind.MISSING_INPUT: "The {} is missing.",
    ErrorKind.LOAD: "Errors ({} errors) were encountered while loading a XSD schema set.",
    ErrorKind.VALIDATION: "Errors ({} errors) were encountered while validating a XML document.",
    ErrorKind.COMPARE: "Error while comparing XML documents.",
    ErrorKind.MARSHAL: "Error while marshaling an object: {}",
}


class XmlUtilitiesError(Exception):
    """
    Package's base exception class.

    :param kind: the kind of the error.
    :param errors: the ordered causes of the error, if any.
    :param arg: an optional argument for the message template of the kind.
    """
    default_kind: ClassVar[Optional[ErrorKind]] = None

    kind: ErrorKind
    errors: tuple[ValidationError, ...]

    def __init__(self, kind: Optional[ErrorKind] = None,
                 errors: Optional[Iterable[ValidationError]] = None,
                 arg: Any = None) -> None:
        if kind is None:
            if self.default_kind is None:
                raise TypeError(f"{self.__class__.__name__!r} requires an error kind")
            kind = self.default_kind
        elif self.default_kind is not None and kind is not self.default_kind:
            raise ValueError(f"{self.__class__.__name__!r} can't have a {kind} kind")

        self.kind = kind
        self.errors = tuple(errors) if errors is not None else ()

        if arg is None and kind in (ErrorKind.LOAD, ErrorKind.VALIDATION):
            arg = len(self.errors)
        super().__init__(MESSAGE_TEMPLATES[kind].format(arg))

    @property
    def message(self) -> str:
        return str(self.args[0])

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return True

    def __iter__(self) -> Iterator[ValidationError]:
        yield from self.errors

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(kind={self.kind}, errors={len(self.errors)})'

    def __str__(self) -> str:
        if not self.errors:
            return self.message
        return '\n'.join([self.message] + [f'  - {e}' for e in self.errors])


class MissingInputError(XmlUtilitiesError):
    """Raised when a required document, schema set or object is missing."""
    default_kind = ErrorKind.MISSING_INPUT

    def __init__(self, name: str = 'input') -> None:
        super().__init__(arg=name)


class LoadSchemaSetError(XmlUtilitiesError):
    """
    Raised when one or more XSD sources can't be parsed or when the schema
    set can't be compiled. The *errors* attribute contains all the causes.
    """
    default_kind = ErrorKind.LOAD

    def __init__(self, errors: Iterable[ValidationError]) -> None:
        super().__init__(errors=errors)


class XmlValidationError(XmlUtilitiesError):
    """
    Raised when an XML document is not valid. The *errors* attribute contains
    all the validation errors found in the document.
    """
    default_kind = ErrorKind.VALIDATION

    def __init__(self, errors: Iterable[ValidationError]) -> None:
        super().__init__(errors=errors)


class CompareError(XmlUtilitiesError):
    """Raised when an unexpected error occurs while comparing two XML documents."""
    default_kind = ErrorKind.COMPARE

    def __init__(self) -> None:
        super().__init__()


class MarshalError(XmlUtilitiesError):
    """Raised when an object can't be serialized or XML data can't be deserialized."""
    default_kind = ErrorKind.MARSHAL

    def __init__(self, reason: Any = None) -> None:
        super().__init__(arg=reason if reason is not None else 'unexpected error')
