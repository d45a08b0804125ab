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
This module contains the validation of XML documents against schema sets.
"""
from collections.abc import Iterator
from typing import Any, NamedTuple, Optional
from xml.etree.ElementTree import ParseError

from xmlschema import XMLResource, XMLResourceError

from .aliases import XMLSourceType, ErrorSinkType
from .aggregation import ValidationError, ErrorCollection
from .exceptions import MissingInputError, XmlValidationError
from .logger import logger, logged
from .schemas import RESOURCE_KWARGS, SchemaSet

__all__ = ['ValidationResult', 'validate_xml', 'try_validate_xml', 'iter_errors']

# Allowed keyword arguments for the validation of a document
VALIDATION_KWARGS = frozenset(('path', 'namespaces', 'use_defaults', 'max_depth'))


class ValidationResult(NamedTuple):
    success: bool
    error: Optional[XmlValidationError]


def bind_document(document: XMLSourceType, **kwargs: Any) -> XMLResource:
    """
    Returns the XML resource to validate for a document argument. The
    schema is never taken from the document, so also an :class:`XMLResource`
    with location hints is validated only against the given schema set.
    """
    if isinstance(document, XMLResource):
        return document

    resource_kwargs = {k: v for k, v in kwargs.items() if k in RESOURCE_KWARGS}
    return XMLResource(document, **resource_kwargs)


def _iter_validation_errors(document: XMLSourceType,
                            schema_set: SchemaSet,
                            **kwargs: Any) -> Iterator[Exception]:
    """
    Iterates the errors found by a single pass of validation of the whole
    document, in document order. A document that is not well-formed gives
    a single parse error.
    """
    if document is None:
        raise MissingInputError('XML document')
    elif schema_set is None:
        raise MissingInputError('XSD schema set')

    try:
        resource = bind_document(document, **kwargs)
    except (ParseError, XMLResourceError) as err:
        yield err
        return

    logger.debug("Validate %r with %r", resource, schema_set)
    validation_kwargs = {k: v for k, v in kwargs.items() if k in VALIDATION_KWARGS}
    yield from schema_set.validator.iter_errors(resource, **validation_kwargs)


def _validate_xml(document: XMLSourceType,
                  schema_set: SchemaSet,
                  sink: ErrorSinkType,
                  **kwargs: Any) -> None:
    for error in _iter_validation_errors(document, schema_set, **kwargs):
        sink(error)


@logged
def validate_xml(document: XMLSourceType,
                 schema_set: SchemaSet,
                 raise_error: bool = False,
                 **kwargs: Any) -> bool:
    """
    Validates an XML document against a schema set. All the violations found
    in the document are collected, not only the first.

    :param document: can be an :class:`XMLResource` instance, a file-like object \
    a path to a file or an URI of a resource or an Element instance or an \
    ElementTree instance or a string containing the XML data.
    :param schema_set: the compiled :class:`SchemaSet` instance.
    :param raise_error: if `True` raises an :exc:`XmlValidationError` with all \
    the errors if the document is not valid.
    :param kwargs: other optional arguments for building the :class:`XMLResource` \
    instance or for the validation (*path*, *namespaces*, *use_defaults*, \
    *max_depth*). Use *loglevel* for changing the logging level of the call.
    :return: `True` if the document is valid, `False` otherwise.
    """
    errors = ErrorCollection()
    _validate_xml(document, schema_set, errors, **kwargs)

    if errors and raise_error:
        raise XmlValidationError(errors.snapshot())
    return not errors


@logged
def try_validate_xml(document: XMLSourceType,
                     schema_set: SchemaSet,
                     **kwargs: Any) -> ValidationResult:
    """
    Like :meth:`validate_xml` but returns a :class:`ValidationResult` tuple
    with the success flag and the error instance (`None` if the document
    is valid).
    """
    errors = ErrorCollection()
    _validate_xml(document, schema_set, errors, **kwargs)

    if errors:
        return ValidationResult(False, XmlValidationError(errors.snapshot()))
    return ValidationResult(True, None)


def iter_errors(document: XMLSourceType,
                schema_set: SchemaSet,
                **kwargs: Any) -> Iterator[ValidationError]:
    """
    Creates an iterator for the errors generated by the validation of an
    XML document against a schema set. Accepts the same arguments of
    :meth:`validate_xml`.
    """
    for error in _iter_validation_errors(document, schema_set, **kwargs):
        yield ValidationError.from_exception(error)
