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
if __name__ == '__main__':
    import unittest
    import os
    import platform

    def load_tests(loader, tests, pattern):
        tests_dir = os.path.dirname(__file__)
        if pattern is not None:
            tests.addTests(loader.discover(start_dir=tests_dir, pattern=pattern))
            return tests

        tests.addTests(loader.discover(start_dir=tests_dir, pattern="test_logger.py"))
        tests.addTests(loader.discover(start_dir=tests_dir, pattern="test_exceptions.py"))
        tests.addTests(loader.discover(start_dir=tests_dir, pattern="test_schemas.py"))
        tests.addTests(loader.discover(start_dir=tests_dir, pattern="test_validation.py"))
        tests.addTests(loader.discover(start_dir=tests_dir, pattern="test_comparison.py"))
        tests.addTests(loader.discover(start_dir=tests_dir, pattern="test_marshaling.py"))
        tests.addTests(loader.discover(start_dir=tests_dir, pattern="test_package.py"))
        return tests

    header_template = "Test xmlutilities with Python {} on {}"
    header = header_template.format(platform.python_version(), platform.platform())
    print('{0}\n{1}\n{0}'.format("*" * len(header), header))

    unittest.main()
