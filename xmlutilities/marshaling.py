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
Marshaling helpers, for converting Python data to XML and back using the
declarations of a compiled schema set, and a deep clone helper based on a
round-trip serialization.
"""
import pickle
from typing import Any, Optional, TypeVar, Union
from xml.etree import ElementTree

from elementpath.etree import etree_tostring
from xmlschema import XMLResource

from .aliases import ElementType, XMLSourceType
from .exceptions import MissingInputError, MarshalError
from .logger import logger, logged
from .schemas import RESOURCE_KWARGS, SchemaSet

__all__ = ['serialize', 'serialize_to_element', 'deserialize', 'deep_clone']

ENCODE_KWARGS = frozenset(('converter', 'namespaces', 'use_defaults', 'unordered'))
DECODE_KWARGS = frozenset(('converter', 'namespaces', 'use_defaults', 'decimal_type',
                           'datetime_types', 'preserve_root', 'strip_namespaces'))

T = TypeVar('T')


def get_prefixes(schema_set: SchemaSet) -> dict[str, str]:
    """Returns the prefixes of the schema set's target namespaces, if any."""
    target_namespaces = schema_set.namespaces
    return {
        prefix: uri for prefix, uri in schema_set.validator.namespaces.items()
        if prefix and uri and uri in target_namespaces
    }


@logged
def serialize_to_element(obj: Any,
                         schema_set: SchemaSet,
                         path: Optional[str] = None,
                         **kwargs: Any) -> ElementType:
    """
    Serializes Python data to an XML Element, using the declarations of a
    schema set. The data is validated during the encoding.

    :param obj: the data that has to be serialized.
    :param schema_set: the compiled :class:`SchemaSet` instance.
    :param path: an optional XPath expression for selecting the XSD element \
    to use for encoding. Can be omitted if the schema set has only one global \
    element declaration.
    :param kwargs: other options for the encoding, like *converter* and \
    *namespaces*.
    """
    if obj is None:
        raise MissingInputError('object to serialize')
    elif schema_set is None:
        raise MissingInputError('XSD schema set')

    encode_kwargs = {k: v for k, v in kwargs.items() if k in ENCODE_KWARGS}
    try:
        elem = schema_set.validator.encode(obj, path=path, **encode_kwargs)
    except Exception as err:
        raise MarshalError(err) from err

    logger.debug("Serialized %r to %r", type(obj), elem)
    return elem


@logged
def serialize(obj: Any,
              schema_set: SchemaSet,
              path: Optional[str] = None,
              encoding: str = 'utf-8',
              indent: Union[None, int, str] = None,
              xml_declaration: bool = False,
              **kwargs: Any) -> Union[str, bytes]:
    """
    Serializes Python data to XML text. Returns bytes, or a string if the
    encoding is 'unicode'.

    :param obj: the data that has to be serialized.
    :param schema_set: the compiled :class:`SchemaSet` instance.
    :param path: an optional XPath expression for selecting the XSD element.
    :param encoding: the character encoding of the output, 'utf-8' for default.
    :param indent: if provided the output is indented, using the given number \
    of spaces or the given string for each level.
    :param xml_declaration: if `True` inserts the XML declaration at the head.
    :param kwargs: other options for the encoding.
    """
    elem = serialize_to_element(obj, schema_set, path, **kwargs)

    try:
        if indent is not None:
            ElementTree.indent(elem, space=' ' * indent if isinstance(indent, int) else indent)

        return etree_tostring(
            elem,
            namespaces=get_prefixes(schema_set),
            xml_declaration=xml_declaration,
            encoding=encoding,
        )
    except Exception as err:
        raise MarshalError(err) from err


@logged
def deserialize(xml_data: XMLSourceType,
                schema_set: SchemaSet,
                path: Optional[str] = None,
                converter: Optional[Any] = None,
                **kwargs: Any) -> Any:
    """
    Deserializes XML data to Python data, using the declarations of a schema
    set. The XML data is validated during the decoding.

    :param xml_data: the XML data, can be bytes, a string, a file-like object, \
    a path, an Element or an ElementTree instance or an :class:`XMLResource`.
    :param schema_set: the compiled :class:`SchemaSet` instance.
    :param path: an optional XPath expression that matches the elements of the \
    XML data that have to be decoded. If not provided the XML root element is used.
    :param converter: an optional converter class or instance that defines the \
    type of the decoded data (e.g. :class:`xmlschema.DataElementConverter`).
    :param kwargs: other options for building the resource and for the decoding.
    """
    if xml_data is None:
        raise MissingInputError('XML data')
    elif schema_set is None:
        raise MissingInputError('XSD schema set')

    decode_kwargs = {k: v for k, v in kwargs.items() if k in DECODE_KWARGS}
    if converter is not None:
        decode_kwargs['converter'] = converter

    try:
        if isinstance(xml_data, XMLResource):
            resource = xml_data
        else:
            resource_kwargs = {k: v for k, v in kwargs.items() if k in RESOURCE_KWARGS}
            resource = XMLResource(xml_data, **resource_kwargs)

        obj = schema_set.validator.decode(resource, path=path, **decode_kwargs)
    except Exception as err:
        raise MarshalError(err) from err

    logger.debug("Deserialized %r to %r", resource, type(obj))
    return obj


def deep_clone(obj: T) -> T:
    """Returns a deep copy of an object, obtained with a round-trip serialization."""
    if obj is None:
        raise MissingInputError('object to clone')

    try:
        return pickle.loads(pickle.dumps(obj, protocol=pickle.HIGHEST_PROTOCOL))
    except (pickle.PicklingError, pickle.UnpicklingError,
            AttributeError, TypeError) as err:
        raise MarshalError(err) from err
