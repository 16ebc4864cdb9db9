#!/usr/bin/env python
# Copyright (C) 2015 Wayne Warren
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

# Manage jenkins_markup configuration sources, defaults, and access.

from collections import defaultdict
import configparser
import io
import logging
import os

from jenkins_markup.errors import MarkupConfigException

__all__ = [
    "MarkupConfig"
]

logger = logging.getLogger(__name__)

DEFAULT_CONF = """
[job_builder]
recursive=False
exclude=.*
allow_duplicates=False

[markup]
# number of spaces, or "tab"
indent=4
# unix or windows
newline=unix
timestamp_format=on %%b %%d, %%Y at %%H:%%M:%%S
jenkins_url=http://localhost:8080
generation_source=
"""

CONFIG_REQUIRED_MESSAGE = ("A valid configuration file is required. "
                           "No configuration file passed.")

NEWLINES = {
    'unix': '\n',
    'windows': '\r\n',
}


class MarkupConfig(object):

    def __init__(self, config_filename=None,
                 config_file_required=False):

        """
        The MarkupConfig class resolves priority between all sources of
        configuration (defaults, configuration files and command line
        options) and gives them a consistent accessor interface.

        :arg str config_filename: Name of configuration file on which to base
            this config object.
        :arg bool config_file_required: Whether failure to read the
            configuration file raises an exception or simply logs a warning
            indicating that default values are used.
        """

        config_parser = self._init_defaults()

        global_conf = '/etc/jenkins_markup/jenkins_markup.ini'
        user_conf = os.path.join(os.path.expanduser('~'), '.config',
                                 'jenkins_markup', 'jenkins_markup.ini')
        local_conf = os.path.join(os.path.dirname(__file__),
                                  'jenkins_markup.ini')
        conf = None
        if config_filename is not None:
            conf = config_filename
        else:
            if os.path.isfile(local_conf):
                conf = local_conf
            elif os.path.isfile(user_conf):
                conf = user_conf
            else:
                conf = global_conf

        config_fp = None
        try:
            config_fp = self._read_config_file(conf)
        except MarkupConfigException:
            if config_file_required:
                raise MarkupConfigException(CONFIG_REQUIRED_MESSAGE)
            else:
                logger.warning("Config file, {0}, not found. Using "
                               "default config values.".format(conf))

        if config_fp is not None:
            with config_fp:
                config_parser.read_file(config_fp)

        self.config_parser = config_parser

        self.markup = defaultdict(None)
        self.yamlparser = defaultdict(None)

        self._setup()

    def _init_defaults(self):
        """ Initialize default configuration values using DEFAULT_CONF
        """
        config = configparser.ConfigParser()
        config.read_file(io.StringIO(DEFAULT_CONF))
        return config

    def _read_config_file(self, config_filename):
        """ Given path to configuration file, read it in as a ConfigParser
        object and return that object.
        """
        if os.path.isfile(config_filename):
            logger.debug("Reading config from {0}".format(config_filename))
            config_fp = io.open(config_filename, 'r', encoding='utf-8')
        else:
            raise MarkupConfigException(
                "A valid configuration file is required. "
                "\n{0} is not valid.".format(config_filename))

        return config_fp

    def _setup(self):
        config = self.config_parser

        self.recursive = config.getboolean('job_builder', 'recursive')
        self.excludes = config.get('job_builder', 'exclude').split(os.pathsep)

        self.yamlparser['allow_duplicates'] = config.getboolean(
            'job_builder', 'allow_duplicates')

        self.markup['indent'] = config.get('markup', 'indent')
        self.markup['newline'] = config.get('markup', 'newline')
        self.markup['timestamp_format'] = config.get('markup',
                                                     'timestamp_format')
        self.markup['jenkins_url'] = config.get('markup', 'jenkins_url')

        # jobs may declare their own generation source
        source = config.get('markup', 'generation_source')
        self.markup['generation_source'] = source or None

    def validate(self):
        indent = str(self.markup['indent']).strip()
        if indent != 'tab' and not (indent.isdigit() and int(indent) > 0):
            raise MarkupConfigException(
                "Indent must be a positive number of spaces or 'tab', "
                "not '{0}'".format(indent))

        if self.markup['newline'] not in NEWLINES:
            raise MarkupConfigException(
                "Newline must be one of {0}, not '{1}'".format(
                    ', '.join(sorted(NEWLINES)), self.markup['newline']))

        if not self.markup['timestamp_format']:
            raise MarkupConfigException("A timestamp format is required")

    @property
    def indent(self):
        indent = str(self.markup['indent']).strip()
        if indent == 'tab':
            return '\t'
        return ' ' * int(indent)

    @property
    def newline(self):
        return NEWLINES[self.markup['newline']]
