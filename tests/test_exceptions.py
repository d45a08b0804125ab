#!/usr/bin/env python
#
# Copyright (c), 2026, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""Tests concerning the exceptions and the error aggregation helpers"""

import unittest
import dataclasses
from xml.etree import ElementTree

from xmlutilities import ErrorKind, XmlUtilitiesError, MissingInputError, \
    LoadSchemaSetError, XmlValidationError, CompareError, MarshalError, \
    Severity, ValidationError, ErrorCollection


class TestValidationError(unittest.TestCase):

    def test_initialization(self):
        error = ValidationError('wrong value', 3, 7, '/root/a')
        self.assertEqual(str(error), 'wrong value')
        self.assertEqual(error.position, (3, 7))
        self.assertIs(error.severity, Severity.ERROR)
        self.assertIsNone(error.exception)
        self.assertIsNone(ValidationError('wrong value').position)

        with self.assertRaises(dataclasses.FrozenInstanceError):
            error.message = 'other'  # noqa

    def test_equality(self):
        error1 = ValidationError('wrong value', exception=ValueError('a'))
        error2 = ValidationError('wrong value', exception=ValueError('b'))
        self.assertEqual(error1, error2)
        self.assertNotEqual(error1, ValidationError('wrong value', line=1))

    def test_from_exception(self):
        with self.assertRaises(ElementTree.ParseError) as ctx:
            ElementTree.XML('<root>\n<a></root>')

        error = ValidationError.from_exception(ctx.exception)
        self.assertEqual(error.line, 2)
        self.assertIsNotNone(error.column)
        self.assertIs(error.exception, ctx.exception)
        self.assertEqual(error.message, str(ctx.exception))

        syntax_error = SyntaxError('invalid token', ('schema.xsd', 4, 12, '<a>'))
        error = ValidationError.from_exception(syntax_error)
        self.assertEqual(error.position, (4, 12))

        error = ValidationError.from_exception(ValueError('unexpected value'))
        self.assertEqual(error.message, 'unexpected value')
        self.assertIsNone(error.position)
        self.assertIsNone(error.path)

    def test_from_warning(self):
        warning = ValidationError.from_warning('a warning')
        self.assertIs(warning.severity, Severity.WARNING)
        self.assertEqual(warning.message, 'a warning')

        warning = ValidationError.from_warning(UserWarning('another warning'))
        self.assertIs(warning.severity, Severity.WARNING)
        self.assertIsInstance(warning.exception, UserWarning)


class TestErrorCollection(unittest.TestCase):

    def test_collect_errors(self):
        errors = ErrorCollection()
        self.assertFalse(errors)
        self.assertEqual(len(errors), 0)

        errors(ValueError('first'))
        errors('second')
        errors(ValidationError('third'))
        self.assertTrue(errors)
        self.assertListEqual([str(e) for e in errors], ['first', 'second', 'third'])
        self.assertTrue(repr(errors).startswith('ErrorCollection(['))

    def test_warnings_are_discarded(self):
        errors = ErrorCollection()
        with self.assertLogs('xmlutilities', level='INFO') as ctx:
            errors('a warning', Severity.WARNING)
            errors(ValidationError.from_warning('another warning'))

        self.assertEqual(len(errors), 0)
        self.assertEqual(len(ctx.output), 2)
        self.assertIn('a warning', ctx.output[0])

        errors(ValidationError('promoted', severity=Severity.WARNING), Severity.ERROR)
        self.assertEqual(len(errors), 1)
        self.assertIs(list(errors)[0].severity, Severity.ERROR)

    def test_snapshot(self):
        errors = ErrorCollection()
        errors('first')
        snapshot = errors.snapshot()
        errors('second')

        self.assertIsInstance(snapshot, tuple)
        self.assertEqual(len(snapshot), 1)
        self.assertEqual(len(errors.snapshot()), 2)


class TestExceptions(unittest.TestCase):

    def test_messages(self):
        errors = [ValidationError('first'), ValidationError('second')]

        self.assertEqual(str(MissingInputError('XML document')),
                         "The XML document is missing.")
        self.assertEqual(str(MissingInputError()), "The input is missing.")
        self.assertEqual(
            LoadSchemaSetError(errors).message,
            "Errors (2 errors) were encountered while loading a XSD schema set."
        )
        self.assertEqual(
            XmlValidationError(errors[:1]).message,
            "Errors (1 errors) were encountered while validating a XML document."
        )
        self.assertEqual(str(CompareError()), "Error while comparing XML documents.")
        self.assertEqual(str(MarshalError('invalid data')),
                         "Error while marshaling an object: invalid data")
        self.assertEqual(str(MarshalError()),
                         "Error while marshaling an object: unexpected error")

    def test_error_kinds(self):
        self.assertIs(MissingInputError().kind, ErrorKind.MISSING_INPUT)
        self.assertIs(LoadSchemaSetError([]).kind, ErrorKind.LOAD)
        self.assertIs(XmlValidationError([]).kind, ErrorKind.VALIDATION)
        self.assertIs(CompareError().kind, ErrorKind.COMPARE)
        self.assertIs(MarshalError().kind, ErrorKind.MARSHAL)

        for cls in (MissingInputError, LoadSchemaSetError, XmlValidationError,
                    CompareError, MarshalError):
            self.assertTrue(issubclass(cls, XmlUtilitiesError))

        error = XmlUtilitiesError(ErrorKind.COMPARE)
        self.assertIs(error.kind, ErrorKind.COMPARE)
        self.assertEqual(error.errors, ())

        with self.assertRaises(TypeError):
            XmlUtilitiesError()

    def test_errors_are_immutable(self):
        errors = [ValidationError('first')]
        exc = XmlValidationError(errors)
        errors.append(ValidationError('second'))

        self.assertIsInstance(exc.errors, tuple)
        self.assertEqual(len(exc), 1)
        self.assertTrue(exc)
        self.assertTrue(XmlValidationError([]))
        self.assertEqual(repr(exc), "XmlValidationError(kind=ErrorKind.VALIDATION, errors=1)")

    def test_string_representation(self):
        exc = LoadSchemaSetError([ValidationError('first'), ValidationError('second')])
        self.assertListEqual(str(exc).splitlines(), [
            "Errors (2 errors) were encountered while loading a XSD schema set.",
            "  - first",
            "  - second",
        ])
        self.assertListEqual([e.message for e in exc], ['first', 'second'])


if __name__ == '__main__':
    import platform
    header_template = "Test xmlutilities's exceptions with Python {} on {}"
    header = header_template.format(platform.python_version(), platform.platform())
    print('{0}\n{1}\n{0}'.format("*" * len(header), header))

    unittest.main()
