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

import logging
import sys
import time

from jenkins_markup.builder import Builder
import jenkins_markup.cli.subcommand.base as base
from jenkins_markup.errors import JenkinsMarkupException
from jenkins_markup.parser import YamlParser
from jenkins_markup.xml_config import XmlJobGenerator


logger = logging.getLogger(__name__)


class TestSubCommand(base.BaseSubCommand):
    """Generate the config markup of jobs without uploading it anywhere."""

    def parse_arg_path(self, parser):
        parser.add_argument(
            'path',
            nargs='?',
            default=sys.stdin,
            help="colon-separated list of paths to YAML files "
            "or directories")

    def parse_arg_names(self, parser):
        parser.add_argument(
            'names',
            help='name(s) of job(s)', nargs='*')

    def parse_args(self, subparser):
        test = subparser.add_parser('test')

        self.parse_option_recursive_exclude(test)

        self.parse_arg_path(test)
        self.parse_arg_names(test)

        test.add_argument(
            '--config-xml',
            action='store_true',
            dest='config_xml',
            default=False,
            help='use alternative output file layout using config.xml files')
        test.add_argument(
            '-o',
            dest='output_dir',
            default=sys.stdout,
            help='path to output XML')

    def _generate_xmljobs(self, options, markup_config):
        logger.info("Generating jobs in {0} ({1})".format(
            options.path, options.names))
        orig = time.time()

        parser = YamlParser(markup_config)
        parser.load_files(options.path)
        jobs = parser.expand(options.names)

        xml_jobs = XmlJobGenerator(markup_config).generateXML(jobs)

        logger.debug('%d XML files generated in %ss',
                     len(jobs), time.time() - orig)
        return xml_jobs

    def execute(self, options, markup_config):
        xml_jobs = self._generate_xmljobs(options, markup_config)
        if options.names and not xml_jobs:
            raise JenkinsMarkupException(
                "No job matches {0}".format(', '.join(options.names)))

        Builder().write_jobs(xml_jobs, options.output_dir,
                             config_xml=options.config_xml)
