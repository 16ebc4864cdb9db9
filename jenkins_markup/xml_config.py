#!/usr/bin/env python
# Copyright (C) 2015 OpenStack, LLC.
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

# Manage Jenkins XML config file output.

import hashlib
import logging
import time

from jenkins_markup import errors
from jenkins_markup.modules.config_markup import ConfigMarkup

__all__ = [
    "XmlJobGenerator",
    "XmlJob"
]

logger = logging.getLogger(__name__)


class XmlJob(object):
    """A generated ``config.xml`` document, ready to be written out."""

    def __init__(self, builder, name):
        self.builder = builder
        self.name = name

    def md5(self):
        return hashlib.md5(self.output()).hexdigest()

    def output(self):
        return self.builder.to_string().encode('utf-8')


class XmlJobGenerator(object):
    """ This class is responsible for generating Jenkins Configuration XML from
    the :class:`jenkins_markup.model.Job` models loaded by the parser.
    """

    def __init__(self, markup_config):
        self.markup_config = markup_config

    def timestamp(self):
        # the format has no leading blank, configparser strips it
        fmt = self.markup_config.markup['timestamp_format']
        return ' ' + time.strftime(fmt)

    def generateXML(self, jobs):
        timestamp = self.timestamp()
        xml_objs = []
        for job in jobs:
            xml_objs.append(self._getXMLForJob(job, timestamp))
        return xml_objs

    def _getXMLForJob(self, job, timestamp):
        try:
            builder = ConfigMarkup(job, timestamp,
                                   self.markup_config.indent,
                                   self.markup_config.newline).markup()
        except errors.JenkinsMarkupException as e:
            logger.error("Failed to generate the markup of job '%s': %s",
                         getattr(job, 'id', job), e)
            raise
        return XmlJob(builder, job.id)
