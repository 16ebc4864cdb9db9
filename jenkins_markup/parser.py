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

# Turn YAML job definitions into job models

"""
Job definitions are YAML files holding a list of ``job`` and ``defaults``
entries::

  - defaults:
      name: global
      jdk: jdk8
      node: linux

  - job:
      name: core-build
      project-type: maven
      maven:
        goals: clean deploy
      deploy:
        url: https://repo.example.org/snapshots
        id: snapshots

A job uses the ``global`` defaults unless it names another set with
``defaults``; its own values override the defaults ones.
"""

import copy
import fnmatch
import io
import logging
import os

from jenkins_markup.errors import AttributeConflictError
from jenkins_markup.errors import InvalidAttributeError
from jenkins_markup.errors import JenkinsMarkupException
from jenkins_markup.errors import MissingAttributeError
from jenkins_markup.errors import YAMLFormatError
import jenkins_markup.local_yaml as local_yaml
from jenkins_markup import model
from jenkins_markup.modules import parameters
from jenkins_markup.modules import tasks
from jenkins_markup.modules import triggers

__all__ = [
    "YamlParser"
]

logger = logging.getLogger(__name__)

# yaml key, Job attribute
JOB_ATTRIBUTES = [
    ('display-name', 'display_name'),
    ('description', 'description'),
    ('generation-source', 'generation_source'),
    ('jenkins-url', 'jenkins_url'),
    ('node', 'node'),
    ('disabled', 'disabled'),
    ('block-downstream', 'block_build_when_downstream_building'),
    ('block-upstream', 'block_build_when_upstream_building'),
    ('quiet-period', 'quiet_period'),
    ('retry-count', 'scm_checkout_retry_count'),
    ('jdk', 'jdk_name'),
    ('auth-token', 'auth_token'),
    ('github-url', 'github_url'),
    ('properties', 'properties'),
    ('scm', 'scm'),
    ('scm-type', 'scm_type'),
    ('publishers', 'publishers'),
    ('build-wrappers', 'build_wrappers'),
]

MAVEN_ATTRIBUTES = [
    ('root-pom', 'pom'),
    ('goals', 'maven_goals'),
    ('maven-name', 'maven_name'),
    ('maven-opts', 'maven_opts'),
    ('incremental-build', 'incremental_build'),
    ('private-repository', 'private_repository'),
    ('private-repository-per-executor', 'private_repository_per_executor'),
    ('build-on-snapshot', 'build_on_snapshot'),
    ('archiving-disabled', 'archiving_disabled'),
    ('reporters', 'reporters'),
    ('prebuilders', 'prebuilders'),
    ('postbuilders', 'postbuilders'),
    ('post-step-run-condition', 'run_post_steps_if_result'),
]

RETENTION_ATTRIBUTES = [
    ('days-to-keep', 'days_to_keep'),
    ('num-to-keep', 'num_to_keep'),
    ('artifact-days-to-keep', 'artifact_days_to_keep'),
    ('artifact-num-to-keep', 'artifact_num_to_keep'),
]


def matches(what, glob_patterns):
    """
    Checks if the given string, ``what``, matches any of the glob patterns in
    the iterable, ``glob_patterns``

    :arg str what: String that we want to test if it matches a pattern
    :arg iterable glob_patterns: glob patterns to match (list, tuple, set,
    etc.)
    """
    return any(fnmatch.fnmatch(what, glob_pattern)
               for glob_pattern in glob_patterns)


def _retention(value):
    if value is None:
        return None
    value = int(value)
    # -1 used to mean "keep forever"
    return None if value <= -1 else value


def _value_object(cls, data, section):
    """Build ``cls`` from the hyphenated keys of ``data[section]``."""
    values = data.get(section) or {}
    if not isinstance(values, dict):
        raise YAMLFormatError("'{0}' of job '{1}' must be a mapping".format(
            section, data['name']))
    kwargs = dict((key.replace('-', '_'), value)
                  for key, value in values.items())
    try:
        return cls(**kwargs)
    except TypeError as e:
        raise YAMLFormatError("Invalid '{0}' of job '{1}': {2}".format(
            section, data['name'], e))


class YamlParser(object):
    def __init__(self, markup_config=None):
        self.data = {}
        self.jobs = []
        self.markup_config = markup_config
        if markup_config is not None:
            self.allow_duplicates = \
                markup_config.yamlparser['allow_duplicates']
        else:
            self.allow_duplicates = False

    def load_files(self, fn):
        files_to_process = []
        for path in fn:
            if not hasattr(path, 'read') and os.path.isdir(path):
                files_to_process.extend([os.path.join(path, f)
                                         for f in sorted(os.listdir(path))
                                         if (f.endswith('.yml') or
                                             f.endswith('.yaml'))])
            else:
                files_to_process.append(path)

        # symlinks used to allow loading of sub-dirs can result in duplicate
        # definitions when loading all from top-level
        unique_files = []
        for f in files_to_process:
            if hasattr(f, 'read'):
                unique_files.append(f)
                continue
            rpf = os.path.realpath(f)
            if rpf not in unique_files:
                unique_files.append(rpf)
            else:
                logger.warning("File '%s' already added as '%s', ignoring "
                               "reference to avoid duplicating yaml "
                               "definitions." % (f, rpf))

        for in_file in unique_files:
            if hasattr(in_file, 'name'):
                fname = in_file.name
            else:
                fname = in_file
            logger.debug("Parsing YAML file {0}".format(fname))
            if hasattr(in_file, 'read'):
                self._parse_fp(in_file)
            else:
                self.parse(in_file)

    def _parse_fp(self, fp):
        data = local_yaml.load(fp)
        if data:
            if not isinstance(data, list):
                raise YAMLFormatError(
                    "The topmost collection in file '{fname}' must be a list,"
                    " not a {cls}".format(fname=getattr(fp, 'name', fp),
                                          cls=type(data)))
            for item in data:
                if not isinstance(item, dict) or len(item) != 1:
                    raise YAMLFormatError(
                        "Syntax error in '{0}': every entry must be a "
                        "single 'job' or 'defaults' mapping. Missing "
                        "indent?".format(getattr(fp, 'name', fp)))
                cls, dfn = next(iter(item.items()))
                if cls not in ('job', 'defaults'):
                    raise YAMLFormatError(
                        "Unknown entry type '{0}', expected 'job' or "
                        "'defaults'".format(cls))
                if not isinstance(dfn, dict) or 'name' not in dfn:
                    raise MissingAttributeError('name', cls)
                group = self.data.get(cls, {})
                if dfn['name'] in group:
                    self._handle_dups(
                        "Duplicate entry found in '{0}': '{1}' already "
                        "defined".format(getattr(fp, 'name', fp),
                                         dfn['name']))
                group[dfn['name']] = dfn
                self.data[cls] = group

    def parse(self, fn):
        with io.open(fn, 'r', encoding='utf-8') as fp:
            self._parse_fp(fp)

    def _handle_dups(self, message):

        if not self.allow_duplicates:
            logger.error(message)
            raise JenkinsMarkupException(message)
        else:
            logger.warning(message)

    def _applyDefaults(self, data):
        whichdefaults = data.get('defaults', 'global')
        defaults = copy.deepcopy(self.data.get('defaults',
                                 {}).get(whichdefaults, {}))
        if defaults == {} and whichdefaults != 'global':
            raise JenkinsMarkupException("Unknown defaults set: '{0}'"
                                         .format(whichdefaults))
        defaults.pop('name', None)

        newdata = {}
        newdata.update(defaults)
        newdata.update(data)
        return newdata

    def expand(self, jobs_glob=None):
        """Build the models of all (or of the matching) jobs."""
        for data in self.data.get('job', {}).values():
            if jobs_glob and not matches(data['name'], jobs_glob):
                logger.debug("Ignoring job {0}".format(data['name']))
                continue
            logger.debug("Expanding job '{0}'".format(data['name']))
            self.jobs.append(self.build_job(self._applyDefaults(data)))
        return self.jobs

    def _config_default(self, key):
        if self.markup_config is None:
            return None
        return self.markup_config.markup[key]

    def build_job(self, data):
        """Create the :class:`Job` described by the mapping ``data``."""
        job_type = data.get('project-type', model.FREESTYLE)
        if job_type not in model.JOB_TYPES:
            raise InvalidAttributeError('project-type', job_type,
                                        model.JOB_TYPES)
        job = model.Job(data['name'], job_type)

        for key, attribute in (('generation-source', 'generation_source'),
                               ('jenkins-url', 'jenkins_url')):
            default = self._config_default(key.replace('-', '_'))
            if default:
                setattr(job, attribute, default)

        for key, attribute in JOB_ATTRIBUTES:
            if key in data:
                setattr(job, attribute, data[key])
        if job.description is None:
            job.description = ''

        logrotate = data.get('logrotate') or {}
        for key, attribute in RETENTION_ATTRIBUTES:
            setattr(job, attribute, _retention(logrotate.get(key)))

        if 'repositories' in data:
            job.repositories = [
                model.Repository(repo.get('remote'),
                                 branch=repo.get('branch'),
                                 directory=repo.get('directory'),
                                 name=repo.get('name'),
                                 credentials_id=repo.get('credentials-id'))
                for repo in data['repositories']]
            if job.scm_type is None:
                job.scm_type = 'git'

        job.triggers = [triggers.Trigger(t.get('type', 'timer'),
                                         t.get('expression'),
                                         t.get('description'))
                        for t in data.get('triggers') or []]
        job.parameters = [parameters.make_parameter(p)
                          for p in data.get('parameters') or []]
        job.tasks = [tasks.make_task(t) for t in data.get('tasks') or []]

        job.mail = _value_object(model.Mail, data, 'mail')
        job.deploy = _value_object(model.Deploy, data, 'deploy')
        job.artifactory = _value_object(model.Artifactory, data,
                                        'artifactory')
        job.invoke = _value_object(model.Invoke, data, 'invoke')
        if isinstance(job.invoke.jobs, (list, tuple)):
            job.invoke.jobs = ', '.join(job.invoke.jobs)
        if job.invoke.condition not in model.TRIGGER_CONDITIONS:
            raise InvalidAttributeError('invoke.condition',
                                        job.invoke.condition,
                                        model.TRIGGER_CONDITIONS)

        maven = data.get('maven') or {}
        if maven and not job.is_maven:
            logger.warning("Job '%s' is not a Maven job, ignoring its "
                           "'maven' section", job.id)
        elif maven:
            self._build_maven(job, maven)

        return job

    def _build_maven(self, job, maven):
        for key, attribute in MAVEN_ATTRIBUTES:
            if key in maven:
                setattr(job, attribute, maven[key])
        if job.private_repository and job.private_repository_per_executor:
            raise AttributeConflictError(
                'private-repository', ['private-repository-per-executor'],
                'job %s' % job.id)
        job.prebuilders_tasks = [tasks.make_task(t) for t in
                                 maven.get('prebuilders-tasks') or []]
        job.postbuilders_tasks = [tasks.make_task(t) for t in
                                  maven.get('postbuilders-tasks') or []]
        job.groovys = [tasks.make_groovy(g)
                       for g in maven.get('groovys') or []]
