#
# Copyright (c), 2026, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
from .logger import set_logging_level
from .aggregation import Severity, ValidationError, ErrorCollection
from .exceptions import ErrorKind, XmlUtilitiesError, MissingInputError, \
    LoadSchemaSetError, XmlValidationError, CompareError, MarshalError
from .schemas import SchemaSet, LoadResult, load_schema_set, try_load_schema_set
from .validation import ValidationResult, validate_xml, try_validate_xml, iter_errors
from .comparison import DocumentNode, to_document_node, neutralize, compare_xml
from .marshaling import serialize, serialize_to_element, deserialize, deep_clone

__version__ = '1.0.0'
__author__ = "Davide Brunato"
__contact__ = "brunato@sissa.it"
__copyright__ = "Copyright 2026, SISSA"
__license__ = "MIT"
__status__ = "Production/Stable"

__all__ = [
    'set_logging_level', 'Severity', 'ValidationError', 'ErrorCollection',
    'ErrorKind', 'XmlUtilitiesError', 'MissingInputError', 'LoadSchemaSetError',
    'XmlValidationError', 'CompareError', 'MarshalError', 'SchemaSet',
    'LoadResult', 'load_schema_set', 'try_load_schema_set', 'ValidationResult',
    'validate_xml', 'try_validate_xml', 'iter_errors', 'DocumentNode',
    'to_document_node', 'neutralize', 'compare_xml', 'serialize',
    'serialize_to_element', 'deserialize', 'deep_clone',
]
