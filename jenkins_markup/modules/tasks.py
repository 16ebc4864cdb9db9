# Copyright 2012 Hewlett-Packard Development Company, L.P.
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


"""
Tasks are the build steps of a job. A freestyle job runs its ``tasks`` as
its ``<builders>``; a Maven job runs ``prebuilders-tasks`` and
``postbuilders-tasks`` around the Maven build, together with the
``groovys`` scripts flagged for each phase.

Each task is a single-key mapping naming the task type::

  tasks:
    - shell: 'make check'
    - maven:
        goals: clean install
        pom: module/pom.xml
    - groovy:
        command: println 'done'
"""

import logging

from jenkins_markup.errors import InvalidAttributeError
from jenkins_markup.errors import JenkinsMarkupException
import jenkins_markup.modules.base
import jenkins_markup.modules.helpers as helpers

logger = logging.getLogger(__name__)


class Task(jenkins_markup.modules.base.Base):
    """A build step configured by the YAML mapping ``data``."""

    #: The task's YAML key.
    name = None

    def __init__(self, data):
        self.data = data

    def __repr__(self):
        return '<%s %s>' % (type(self).__name__, self.name)


class Shell(Task):
    """yaml: shell
    Execute a shell command.

    :Parameter: the shell command to execute
    """
    name = 'shell'
    jenkins_class = 'hudson.tasks.Shell'

    def __init__(self, data):
        if not isinstance(data, dict):
            data = {'command': data}
        super(Shell, self).__init__(data)

    def add_markup(self, builder):
        with builder.element(self.jenkins_class):
            helpers.convert_mapping_to_xml(
                builder, self.data, [('command', 'command', None)])


class Batch(Shell):
    """yaml: batch
    Execute a batch command.

    :Parameter: the batch command to execute
    """
    name = 'batch'
    jenkins_class = 'hudson.tasks.BatchFile'


class Maven(Task):
    """yaml: maven
    Execute top-level Maven targets.

    :arg str goals: Goals to execute (required)
    :arg str pom: Location of pom.xml (optional)
    :arg str maven-name: Installation of maven which should be used
        (optional)
    :arg properties: Properties for maven, a mapping or a list of
        ``key=value`` lines (optional)
    :arg bool private-repository: Use private maven repository for this
        job (default false)
    :arg str java-opts: java options for maven (optional)
    """
    name = 'maven'
    jenkins_class = 'hudson.tasks.Maven'

    def __init__(self, data):
        if not isinstance(data, dict):
            data = {'goals': data}
        super(Maven, self).__init__(data)

    def add_markup(self, builder):
        with builder.element(self.jenkins_class):
            helpers.convert_mapping_to_xml(
                builder, self.data, [('goals', 'targets', None)])
            helpers.convert_mapping_to_xml(builder, self.data, [
                ('maven-name', 'mavenName', None),
                ('pom', 'pom', None),
            ], fail_required=False)
            builder.leaf('properties', helpers.properties_text(
                self.data.get('properties')))
            builder.leaf('usePrivateRepository',
                         bool(self.data.get('private-repository', False)))
            builder.optional('jvmOptions', self.data.get('java-opts'))


class Ant(Task):
    """yaml: ant
    Execute an ant target.

    :arg str targets: the space separated list of ANT targets.
    :arg str buildfile: the path to the ANT build file. (optional)
    :arg dict properties: Passed to ant script using -Dkey=value (optional)
    :arg str ant-name: the name of the ant installation,
        (default 'default')
    :arg str java-opts: java options for ant (optional)
    """
    name = 'ant'
    jenkins_class = 'hudson.tasks.Ant'

    def __init__(self, data):
        if not isinstance(data, dict):
            data = {'targets': data}
        super(Ant, self).__init__(data)

    def add_markup(self, builder):
        with builder.element(self.jenkins_class):
            helpers.convert_mapping_to_xml(builder, self.data, [
                ('targets', 'targets', ''),
                ('ant-name', 'antName', 'default'),
            ])
            helpers.convert_mapping_to_xml(builder, self.data, [
                ('buildfile', 'buildFile', None),
            ], fail_required=False)
            if 'properties' in self.data:
                builder.leaf('properties', helpers.properties_text(
                    self.data['properties']))
            builder.optional('antOpts', self.data.get('java-opts'))


def _add_script_source(builder, data):
    if 'command' in data and 'file' in data:
        raise JenkinsMarkupException("Use just one of 'command' or 'file'")

    if 'command' in data:
        with builder.element(
                'scriptSource',
                {'class': 'hudson.plugins.groovy.StringScriptSource'}):
            builder.leaf('command', data['command'])
    elif 'file' in data:
        with builder.element(
                'scriptSource',
                {'class': 'hudson.plugins.groovy.FileScriptSource'}):
            builder.leaf('scriptFile', data['file'])
    else:
        raise JenkinsMarkupException("A groovy command or file is required")


class Groovy(Task):
    """yaml: groovy
    Execute a groovy script or command.

    :arg str file: Groovy file to run. (Alternative: you can chose a command
        instead)
    :arg str command: Groovy command to run. (Alternative: you can chose a
        script file instead)
    :arg str version: Groovy version to use. (default '(Default)')
    :arg str parameters: Parameters for the Groovy executable. (default '')
    :arg str script-parameters: These parameters will be passed to the script.
        (default '')
    :arg str properties: Properties passed to the script. (default '')
    :arg str java-opts: Appended to JAVA_OPTS. (default '')
    :arg str class-path: Script classpath, one item per line. (default '')
    :arg bool pre: For ``groovys`` of Maven jobs, run the script before
        (``true``) or after (``false``) the Maven build. (default false)
    """
    name = 'groovy'
    jenkins_class = 'hudson.plugins.groovy.Groovy'

    def __init__(self, data):
        if not isinstance(data, dict):
            data = {'command': data}
        super(Groovy, self).__init__(data)

    @property
    def pre(self):
        return bool(self.data.get('pre', False))

    def add_markup(self, builder):
        with builder.element(self.jenkins_class):
            _add_script_source(builder, self.data)
            helpers.convert_mapping_to_xml(builder, self.data, [
                ('version', 'groovyName', '(Default)'),
                ('parameters', 'parameters', ''),
                ('script-parameters', 'scriptParameters', ''),
                ('properties', 'properties', ''),
                ('java-opts', 'javaOpts', ''),
                ('class-path', 'classPath', ''),
            ])


class SystemGroovy(Groovy):
    """yaml: system-groovy
    Execute a system groovy script or command.

    :arg str file: Groovy file to run.
    :arg str command: Groovy command to run.
    :arg str bindings: Variable bindings in the properties file format.
        (default '')
    :arg str class-path: Script classpath, one item per line. (default '')
    """
    name = 'system-groovy'
    jenkins_class = 'hudson.plugins.groovy.SystemGroovy'

    def add_markup(self, builder):
        with builder.element(self.jenkins_class):
            _add_script_source(builder, self.data)
            helpers.convert_mapping_to_xml(builder, self.data, [
                ('bindings', 'bindings', ''),
                ('class-path', 'classpath', ''),
            ])


TASK_TYPES = dict((task.name, task) for task in
                  (Shell, Batch, Maven, Ant, Groovy, SystemGroovy))


def make_task(entry):
    """Create a task from a single-key YAML mapping (or a bare name)."""
    if isinstance(entry, dict):
        if len(entry) != 1:
            raise JenkinsMarkupException(
                "A task must be a single-key mapping, got: %s" %
                ', '.join(sorted(entry)))
        name, data = next(iter(entry.items()))
    else:
        name, data = entry, {}
    if name not in TASK_TYPES:
        raise InvalidAttributeError('task', name, sorted(TASK_TYPES))
    if data is None:
        data = {}
    logger.debug("Creating %s task", name)
    return TASK_TYPES[name](data)


def make_groovy(data):
    """Create a scripted Maven build step from its YAML mapping."""
    if isinstance(data, dict) and len(data) == 1 and \
            next(iter(data)) in ('groovy', 'system-groovy'):
        return make_task(data)
    return Groovy(data)
