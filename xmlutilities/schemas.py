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
This module contains the loader of XSD schema sets. A schema set is loaded
in two phases: first each source is parsed as a standalone schema, collecting
all the errors of all sources, then, only if every source has been accepted,
the schemas are compiled together into a single set.
"""
from collections.abc import Iterable, Iterator, Sequence
from typing import Any, NamedTuple, Optional, Type, Union, overload

from xmlschema import XMLResource, XMLSchemaBase, XMLSchema10, XMLSchema11

from .aliases import SchemaSourceType, ErrorSinkType
from .aggregation import Severity, ErrorCollection
from .exceptions import MissingInputError, LoadSchemaSetError
from .logger import logger, logged

__all__ = ['SchemaSet', 'LoadResult', 'get_schema_class',
           'load_schema_set', 'try_load_schema_set']

XSD_NAMESPACE = 'http://www.w3.org/2001/XMLSchema'

# Allowed keyword arguments for building resource and schema instances.
RESOURCE_KWARGS = frozenset(
    ('base_url', 'allow', 'defuse', 'timeout', 'uri_mapper', 'opener', 'iterparse')
)
SCHEMA_KWARGS = frozenset(('locations', 'use_fallback', 'use_xpath3'))

EMPTY_SCHEMA_TEMPLATE = '<xs:schema xmlns:xs="{}"/>'


class SchemaSet(Sequence[XMLSchemaBase]):
    """
    A compiled set of XSD schemas. Iterating a schema set yields the member
    schemas, one for each source accepted by the loader, in input order.

    :param validator: the compiled schema instance used for validation, \
    its global maps contain the declarations of all the member schemas.
    :param schemas: the member schemas.
    """
    __slots__ = ('validator', '_schemas')

    def __init__(self, validator: XMLSchemaBase,
                 schemas: Iterable[XMLSchemaBase] = ()) -> None:
        self.validator = validator
        self._schemas = tuple(schemas)

    def __repr__(self) -> str:
        return '%s(namespaces=%r, compiled=%r)' % (
            self.__class__.__name__, self.namespaces, self.compiled
        )

    @overload
    def __getitem__(self, i: int) -> XMLSchemaBase: ...  # noqa: E704

    @overload
    def __getitem__(self, s: slice) -> Sequence[XMLSchemaBase]: ...  # noqa: E704

    def __getitem__(self, i: Union[int, slice]) \
            -> Union[XMLSchemaBase, Sequence[XMLSchemaBase]]:
        return self._schemas[i]

    def __len__(self) -> int:
        return len(self._schemas)

    def __iter__(self) -> Iterator[XMLSchemaBase]:
        yield from self._schemas

    @property
    def compiled(self) -> bool:
        """`True` if all the declarations of the set are built and valid."""
        return self.validator.built and self.validator.validity == 'valid'

    @property
    def namespaces(self) -> tuple[str, ...]:
        """The target namespaces of the member schemas, without duplicates."""
        namespaces: list[str] = []
        for schema in self._schemas:
            if schema.target_namespace not in namespaces:
                namespaces.append(schema.target_namespace)
        return tuple(namespaces)

    @property
    def xsd_version(self) -> str:
        return self.validator.XSD_VERSION


class LoadResult(NamedTuple):
    success: bool
    schema_set: Optional[SchemaSet]
    error: Optional[LoadSchemaSetError]


def get_schema_class(cls: Union[None, str, Type[XMLSchemaBase]] = None) \
        -> Type[XMLSchemaBase]:
    """
    Returns the XSD processor class. The argument can be a subclass of
    :class:`XMLSchemaBase` or an XSD version string ('1.0' or '1.1').
    Defaults to :class:`XMLSchema10`.
    """
    if cls is None or cls == '1.0':
        return XMLSchema10
    elif cls == '1.1':
        return XMLSchema11
    elif isinstance(cls, type) and issubclass(cls, XMLSchemaBase):
        return cls
    raise TypeError(f"invalid schema class {cls!r}")


def iter_schema_warnings(schema: XMLSchemaBase) -> Iterator[Any]:
    """Iterates the warnings of a schema and of the other schemas of its maps."""
    yield from schema.warnings
    for other in schema.maps.iter_schemas():
        if other is not schema:
            yield from getattr(other, 'warnings', ())


def _parse_schema(source: SchemaSourceType,
                  sink: ErrorSinkType,
                  cls: Type[XMLSchemaBase],
                  **kwargs: Any) -> Optional[XMLResource]:
    """
    Parses a single XSD source as a standalone schema, without building it.
    Returns the XML resource of the schema or `None` if errors are found.
    """
    resource_kwargs = {k: v for k, v in kwargs.items() if k in RESOURCE_KWARGS}
    schema_kwargs = {k: v for k, v in kwargs.items() if k in SCHEMA_KWARGS}

    try:
        if isinstance(source, XMLResource):
            resource = source
        else:
            resource = XMLResource(source, **resource_kwargs)

        schema = cls(resource, validation='lax', build=False, **schema_kwargs)
    except Exception as err:
        # Errors that are not collected by the lax mode (e.g. malformed XML)
        sink(err)
        return None

    if schema.errors:
        for err in schema.errors:
            sink(err)
        return None

    for msg in schema.warnings:
        sink(msg, Severity.WARNING)

    logger.debug("Parsed schema %r", schema)
    return resource


def _compile_schemas(resources: Sequence[XMLResource],
                     sink: ErrorSinkType,
                     cls: Type[XMLSchemaBase],
                     **kwargs: Any) -> Optional[SchemaSet]:
    """
    Compiles the parsed XSD resources into a schema set. The first resource
    is the main schema, the others are added to its global maps before the
    build. Returns `None` if the compilation reports errors.
    """
    schema_kwargs = {k: v for k, v in kwargs.items() if k in SCHEMA_KWARGS}

    if not resources:
        validator = cls(EMPTY_SCHEMA_TEMPLATE.format(XSD_NAMESPACE))
        return SchemaSet(validator)

    schemas: list[XMLSchemaBase] = []
    try:
        validator = cls(resources[0], validation='lax', build=False, **schema_kwargs)
        schemas.append(validator)
        for resource in resources[1:]:
            schema = validator.add_schema(resource)
            if all(schema is not s for s in schemas):
                schemas.append(schema)

        validator.build()
    except Exception as err:
        sink(err)
        return None

    errors = validator.maps.all_errors
    for err in errors:
        sink(err)

    for msg in iter_schema_warnings(validator):
        sink(msg, Severity.WARNING)

    if errors:
        return None
    return SchemaSet(validator, schemas)


def _load_schema_set(sources: Iterable[SchemaSourceType],
                     sink: ErrorCollection,
                     cls: Union[None, str, Type[XMLSchemaBase]] = None,
                     **kwargs: Any) -> Optional[SchemaSet]:
    schema_class = get_schema_class(cls)

    resources = []
    for k, source in enumerate(sources):
        logger.debug("Parse XSD source n.%d: %r", k + 1, source)
        resource = _parse_schema(source, sink, schema_class, **kwargs)
        if resource is not None:
            resources.append(resource)

    if sink:
        logger.debug("%d errors found parsing XSD sources, skip compilation", len(sink))
        return None

    schema_set = _compile_schemas(resources, sink, schema_class, **kwargs)
    if sink:
        logger.debug("%d errors found compiling the schema set", len(sink))
        return None

    logger.debug("Loaded %r", schema_set)
    return schema_set


@logged
def load_schema_set(*sources: SchemaSourceType,
                    cls: Union[None, str, Type[XMLSchemaBase]] = None,
                    **kwargs: Any) -> SchemaSet:
    """
    Loads and compiles a set of XSD schemas. Raises a :exc:`LoadSchemaSetError`
    containing all the errors found if a source can't be parsed or if the
    schema set can't be compiled.

    :param sources: the XSD sources, each can be a file-like object, a path \
    or an URL of a resource, a string containing the schema, an lxml Element \
    or ElementTree (the standard library trees don't keep the namespace \
    declarations required by XSD QNames) or an :class:`XMLResource` instance.
    :param cls: the XSD processor class or the XSD version ('1.0' or '1.1'), \
    for default :class:`XMLSchema10` is used.
    :param kwargs: other optional arguments for building :class:`XMLResource` \
    and :class:`XMLSchema` instances. Use *loglevel* for changing the logging \
    level of the call.
    :return: the compiled :class:`SchemaSet` instance.
    """
    if len(sources) == 1 and isinstance(sources[0], (list, tuple)):
        sources = tuple(sources[0])  # called with a list of sources

    errors = ErrorCollection()
    schema_set = _load_schema_set(sources, errors, cls, **kwargs)
    if schema_set is None:
        raise LoadSchemaSetError(errors.snapshot())
    return schema_set


@logged
def try_load_schema_set(sources: Iterable[SchemaSourceType],
                        cls: Union[None, str, Type[XMLSchemaBase]] = None,
                        **kwargs: Any) -> LoadResult:
    """
    Like :meth:`load_schema_set` except that does not raise an exception
    for loading errors but returns a :class:`LoadResult` tuple, containing
    the success flag, the schema set (`None` in case of errors) and the error
    instance (`None` in case of success).
    """
    if sources is None:
        raise MissingInputError('collection of XSD sources')
    elif isinstance(sources, (str, bytes)):
        raise TypeError("the 'sources' argument must be a collection of XSD sources, "
                        f"not a {type(sources).__name__!r} instance")

    errors = ErrorCollection()
    schema_set = _load_schema_set(sources, errors, cls, **kwargs)
    if schema_set is None:
        return LoadResult(False, None, LoadSchemaSetError(errors.snapshot()))
    return LoadResult(True, schema_set, None)
