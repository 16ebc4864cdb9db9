#!/usr/bin/env python
# Copyright (C) 2013 Hewlett-Packard.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations
# under the License.

# Provides local yaml parsing classes and extend yaml module

"""Custom application specific yamls tags are supported to provide
enhancements when reading yaml configuration.

These allow inclusion of arbitrary files as a method of having blocks of data
managed separately to the yaml job configurations. A specific usage of this
is the raw markup attributes of a job (``properties``, ``publishers``,
``build-wrappers``, ...), whose pre-rendered XML is more conveniently kept
in files of its own.

Relative paths are resolved against the directory of the including yaml
file, then against the current working directory.

The tag ``!include:`` will treat the following string as file which should be
parsed as yaml configuration data.

The tag ``!include-raw:`` will treat the given string as the name of a file
whose contents are used as is.

Example::

    - job:
        name: test-job-include-raw
        publishers: !include-raw: publishers/junit.xml
        triggers: !include: triggers/nightly.yaml
"""

import functools
import io
import logging
import os

import yaml

logger = logging.getLogger(__name__)


class LocalLoader(yaml.SafeLoader):
    """Subclass for yaml.SafeLoader which handles storing the search_path
    used by the include tags to find files.

    Loading::

        # use the load function provided in this module
        import local_yaml
        data = local_yaml.load(io.open(fn, 'r', encoding='utf-8'))

        # Loading with a search path
        from local_yaml import LocalLoader
        import functools
        data = yaml.load(io.open(fn, 'r', encoding='utf-8'),
                         functools.partial(LocalLoader, search_path=['path']))
    """

    def __init__(self, stream, search_path=None):
        self.search_path = list()
        for p in search_path or []:
            logger.debug("Adding '{0}' to search path for include tags"
                         .format(p))
            self.search_path.append(os.path.normpath(p))

        name = getattr(stream, 'name', None)
        super(LocalLoader, self).__init__(stream)

        if name and not name.startswith('<'):
            self.search_path.append(os.path.normpath(os.path.dirname(name)))
        self.search_path.append(os.path.normpath(os.path.curdir))

    def find_file(self, filename):
        for dirname in self.search_path:
            candidate = os.path.expanduser(os.path.join(dirname, filename))
            if os.path.isfile(candidate):
                logger.debug("Including file '{0}' from path '{1}'"
                             .format(filename, dirname))
                return candidate
        return filename

    def read_file(self, node):
        filename = self.find_file(self.construct_scalar(node))
        try:
            with io.open(filename, 'r', encoding='utf-8') as f:
                return f.read()
        except IOError:
            logger.error("Failed to include file using search path: '{0}'"
                         .format(':'.join(self.search_path)))
            raise


def _include(loader, node):
    return yaml.load(loader.read_file(node),
                     functools.partial(LocalLoader,
                                       search_path=loader.search_path))


def _include_raw(loader, node):
    return loader.read_file(node)


LocalLoader.add_constructor(u'!include:', _include)
LocalLoader.add_constructor(u'!include-raw:', _include_raw)


def load(stream, **kwargs):
    return yaml.load(stream, functools.partial(LocalLoader, **kwargs))
