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
Type aliases for static typing analysis.
"""
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import IO, TYPE_CHECKING, Union
from xml.etree.ElementTree import Element, ElementTree

from elementpath.protocols import ElementProtocol, DocumentProtocol

if TYPE_CHECKING:
    from xmlschema import XMLResource
    from .comparison import DocumentNode

__all__ = ['ElementType', 'EtreeType', 'SourceType', 'XMLSourceType',
           'SchemaSourceType', 'DocumentSourceType', 'EscapeSpecType',
           'ErrorSinkType']

##
# Type aliases for ElementTree
ElementType = Element
EtreeType = Union[Element, ElementTree, ElementProtocol, DocumentProtocol]

##
# Type aliases for XML sources
SourceType = Union[str, bytes, Path, IO[str], IO[bytes]]
XMLSourceType = Union[SourceType, EtreeType, 'XMLResource']
SchemaSourceType = XMLSourceType
DocumentSourceType = Union[XMLSourceType, 'DocumentNode']

##
# Mapping from namespace URI to the local names of the elements to neutralize
EscapeSpecType = Mapping[str, Iterable[str]]

ErrorSinkType = Callable[..., None]
