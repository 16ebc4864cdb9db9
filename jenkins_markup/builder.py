#!/usr/bin/env python
# Copyright (C) 2012 OpenStack, LLC.
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

# Write generated job documents

import errno
import io
import logging
import os
import time

from jenkins_markup import utils

__all__ = [
    "Builder"
]

logger = logging.getLogger(__name__)


class Builder(object):
    """Writes :class:`jenkins_markup.xml_config.XmlJob` documents to a
    stream or to a directory.
    """

    @staticmethod
    def _setup_output(output, item, config_xml=False):
        output_dir = output
        output_fn = os.path.join(output, item)
        if '/' in item:
            # in item folder
            output_fn = os.path.join(output, os.path.normpath(item))
            output_dir = os.path.dirname(output_fn)

        if config_xml:
            output_dir = os.path.join(output_dir, os.path.basename(item))
            output_fn = os.path.join(output_dir, 'config.xml')

        if output_dir != output:
            logger.debug("Creating directory %s" % output_dir)
            try:
                os.makedirs(output_dir)
            except OSError:
                if not os.path.isdir(output_dir):
                    raise

        return output_fn

    def write_jobs(self, xml_jobs, output, config_xml=False):
        """Write every job of ``xml_jobs``, sorted by name, to ``output``.

        ``output`` is either a file-like object receiving all documents one
        after the other, or a directory receiving one file per job
        (``output/<name>``, or ``output/<name>/config.xml`` with
        ``config_xml``).
        """
        orig = time.time()
        logger.info("Number of jobs generated:  %d", len(xml_jobs))
        xml_jobs = sorted(xml_jobs, key=lambda job: job.name)

        if not hasattr(output, 'write') and not os.path.isdir(output):
            logger.debug("Creating directory %s" % output)
            try:
                os.makedirs(output)
            except OSError:
                if not os.path.isdir(output):
                    raise

        if hasattr(output, 'write'):
            output = utils.wrap_stream(output)

        for job in xml_jobs:
            if hasattr(output, 'write'):
                # `output` is a file-like object
                logger.info("Job name:  %s", job.name)
                logger.debug("Writing XML to '{0}'".format(output))
                try:
                    output.write(job.output())
                except IOError as exc:
                    if exc.errno == errno.EPIPE:
                        # EPIPE could happen if piping output to something
                        # that doesn't read the whole input (e.g.: the UNIX
                        # `head` command)
                        return xml_jobs, len(xml_jobs)
                    raise
                continue

            output_fn = self._setup_output(output, job.name, config_xml)
            logger.debug("Writing XML to '{0}'".format(output_fn))
            # newline='' keeps the configured line separator
            with io.open(output_fn, 'w', encoding='utf-8', newline='') as f:
                f.write(job.output().decode('utf-8'))

        logger.debug("Wrote %d jobs in %ss", len(xml_jobs),
                     time.time() - orig)
        return xml_jobs, len(xml_jobs)
