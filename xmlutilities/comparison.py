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
This module contains the structural comparison of XML documents. The
documents are converted to trees of :class:`DocumentNode` instances, then
the text of the nodes selected by an optional escape specification is
neutralized and the two trees are compared.
"""
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any, Optional
from xml.etree.ElementTree import Element, SubElement

from elementpath.etree import etree_tostring
from xmlschema import XMLResource

from .aliases import ElementType, EtreeType, DocumentSourceType, EscapeSpecType
from .exceptions import MissingInputError, CompareError
from .logger import logger, logged
from .schemas import RESOURCE_KWARGS

__all__ = ['DocumentNode', 'to_document_node', 'neutralize', 'compare_xml']


def normalize_text(text: Optional[str]) -> str:
    """Ignorable whitespace is normalized to an empty string."""
    if text is None or not text.strip():
        return ''
    return text


def split_tag(tag: str) -> tuple[str, str]:
    """Splits an extended name into the couple (namespace, local name)."""
    if tag[0] == '{':
        namespace, name = tag[1:].split('}')
        return namespace, name
    return '', tag


class DocumentNode:
    """
    A node of the canonical tree of an XML document, that represents an
    element. Comments and processing instructions are not included, the
    whitespace-only text is normalized to an empty string.

    :param name: the local name of the element.
    :param namespace: the namespace URI of the element, empty if it has no namespace.
    :param attributes: the attributes of the element, with extended names as keys.
    :param children: the child nodes, in document order.
    :param text: the text before the first child.
    :param tail: the text that follows the element, before its next sibling.
    """
    __slots__ = ('name', 'namespace', 'attributes', 'children', 'text', 'tail')

    name: str
    namespace: str
    attributes: MutableMapping[str, str]
    children: list['DocumentNode']
    text: str
    tail: str

    def __init__(self, name: str,
                 namespace: str = '',
                 attributes: Optional[Mapping[str, str]] = None,
                 children: Optional[list['DocumentNode']] = None,
                 text: Optional[str] = None,
                 tail: Optional[str] = None) -> None:
        self.name = name
        self.namespace = namespace
        self.attributes = dict(attributes) if attributes else {}
        self.children = children if children is not None else []
        self.text = normalize_text(text)
        self.tail = normalize_text(tail)

    def __repr__(self) -> str:
        return '%s(tag=%r, children=%d)' % (
            self.__class__.__name__, self.tag, len(self.children)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DocumentNode):
            return NotImplemented
        return self.get_difference(other) is None

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator['DocumentNode']:
        yield from self.children

    @property
    def tag(self) -> str:
        """The extended name of the element."""
        return f'{{{self.namespace}}}{self.name}' if self.namespace else self.name

    @classmethod
    def from_element(cls, elem: EtreeType) -> 'DocumentNode':
        """
        Builds a node tree from an ElementTree or lxml element. A document
        (ElementTree instance) is converted from its root element.
        """
        if hasattr(elem, 'getroot'):
            elem = elem.getroot()

        namespace, name = split_tag(elem.tag)
        node = cls(name, namespace, elem.attrib, text=elem.text, tail=elem.tail)

        for child in elem:
            if callable(child.tag):
                # A comment or a processing instruction: keep only its tail
                if child.tail:
                    if node.children:
                        node.children[-1].tail = normalize_text(
                            node.children[-1].tail + child.tail
                        )
                    else:
                        node.text = normalize_text(node.text + child.tail)
            else:
                node.children.append(cls.from_element(child))

        return node

    def to_element(self, parent: Optional[ElementType] = None) -> ElementType:
        """Builds an ElementTree structure from the node tree."""
        if parent is None:
            elem = Element(self.tag, self.attributes)
        else:
            elem = SubElement(parent, self.tag, self.attributes)
        elem.text = self.text or None
        elem.tail = self.tail or None

        for child in self.children:
            child.to_element(elem)
        return elem

    def tostring(self, indent: str = '', max_lines: Optional[int] = None) -> str:
        """Serializes the node tree to a string, for reports and debugging."""
        return str(etree_tostring(self.to_element(), indent=indent, max_lines=max_lines))

    def copy(self) -> 'DocumentNode':
        """Returns a deep copy of the node tree."""
        return DocumentNode(
            name=self.name,
            namespace=self.namespace,
            attributes=self.attributes,
            children=[child.copy() for child in self.children],
            text=self.text,
            tail=self.tail,
        )

    def iter(self, namespace: Optional[str] = None,
             name: Optional[str] = None) -> Iterator['DocumentNode']:
        """
        Iterates the node and its descendants in document order, optionally
        filtering by namespace and/or local name.
        """
        if (namespace is None or namespace == self.namespace) and \
                (name is None or name == self.name):
            yield self

        for child in self.children:
            yield from child.iter(namespace, name)

    def iter_descendants(self, namespace: Optional[str] = None,
                         name: Optional[str] = None) -> Iterator['DocumentNode']:
        """Like :meth:`iter` but excluding the node itself."""
        for child in self.children:
            yield from child.iter(namespace, name)

    def get_difference(self, other: 'DocumentNode') -> Optional[str]:
        """
        Returns a description of the first structural difference between
        two node trees, `None` if the trees are equal.
        """
        if self.tag != other.tag:
            return f"{self!r} != {other!r}: tags differ"
        elif self.attributes != other.attributes:
            return f"{self!r} != {other!r}: attributes differ: " \
                   f"{self.attributes!r} != {other.attributes!r}"
        elif self.text != other.text:
            return f"{self!r} != {other!r}: texts differ: {self.text!r} != {other.text!r}"
        elif self.tail != other.tail:
            return f"{self!r} != {other!r}: tails differ: {self.tail!r} != {other.tail!r}"
        elif len(self.children) != len(other.children):
            return f"{self!r} != {other!r}: children number differ: " \
                   f"{len(self.children)} != {len(other.children)}"

        for child, other_child in zip(self.children, other.children):
            difference = child.get_difference(other_child)
            if difference is not None:
                return difference
        return None


def to_document_node(document: DocumentSourceType, **kwargs: Any) -> DocumentNode:
    """
    Converts a document to a new tree of nodes. The document can be a
    :class:`DocumentNode` instance, that is copied, or any XML source
    accepted by :class:`XMLResource`.
    """
    if isinstance(document, DocumentNode):
        return document.copy()
    elif not isinstance(document, XMLResource):
        resource_kwargs = {k: v for k, v in kwargs.items() if k in RESOURCE_KWARGS}
        document = XMLResource(document, **resource_kwargs)

    return DocumentNode.from_element(document.root)


def neutralize(node: DocumentNode, escape_spec: EscapeSpecType) -> int:
    """
    Replaces with an empty string the text of the descendant nodes selected
    by the escape specification. Returns the number of neutralized nodes.

    :param node: the root of the tree to process.
    :param escape_spec: a mapping from namespace URI to local names. Use an \
    empty string as key for elements without namespace.
    """
    count = 0
    for namespace, names in escape_spec.items():
        if isinstance(names, str):
            names = (names,)

        for name in names:
            for descendant in node.iter_descendants(namespace or '', name):
                descendant.text = ''
                count += 1
    return count


@logged
def compare_xml(source: DocumentSourceType,
                target: DocumentSourceType,
                escape_spec: Optional[EscapeSpecType] = None,
                **kwargs: Any) -> bool:
    """
    Compares the structure of two XML documents. Returns `True` if the two
    documents have the same tree of elements, with the same names,
    attributes and texts. Raises a :exc:`MissingInputError` if a document
    is missing and a :exc:`CompareError` for any other error.

    :param source: the source XML document.
    :param target: the XML document to compare with the source.
    :param escape_spec: an optional mapping from namespace URI to local \
    names of the elements whose text has to be ignored in the comparison.
    :param kwargs: optional arguments for building :class:`XMLResource` \
    instances. Use *loglevel* for changing the logging level of the call.
    """
    if source is None:
        raise MissingInputError('source XML document')
    elif target is None:
        raise MissingInputError('target XML document')

    try:
        source_node = to_document_node(source, **kwargs)
        target_node = to_document_node(target, **kwargs)

        if escape_spec:
            count = neutralize(source_node, escape_spec)
            logger.debug("Neutralized %d nodes of the source document", count)
            count = neutralize(target_node, escape_spec)
            logger.debug("Neutralized %d nodes of the target document", count)

        difference = source_node.get_difference(target_node)
    except Exception as err:
        raise CompareError() from err

    if difference is not None:
        logger.debug("XML documents differ: %s", difference)
        return False
    return True
