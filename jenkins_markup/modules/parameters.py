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
Parameters are rendered in the job's ``<properties>`` section. Every
parameter except ``jira`` is a ``hudson.model`` parameter definition nested
inside the ``ParametersDefinitionProperty`` holder; a ``jira`` parameter
names the JIRA site of the job and is rendered as a property of its own,
next to the holder.

:Parameter Attributes:
    * **type** (`str`): one of ``string``, ``boolean``, ``choice``,
      ``text``, ``password``, ``run``, ``file`` or ``jira``. (required)
    * **name** (`str`): the name of the parameter. (required)
    * **value** (`str`): the default value; for ``choice`` a comma
      separated list of choices, for ``run`` the project name and for
      ``jira`` the JIRA site URL.
    * **description** (`str`): a description of the parameter (optional)

Example::

  parameters:
    - type: string
      name: FOO
      value: bar
      description: "A parameter named FOO, defaults to 'bar'."
    - type: choice
      name: ENV
      value: dev, qa, prod
"""

from jenkins_markup.errors import InvalidAttributeError
import jenkins_markup.modules.base


class Parameter(jenkins_markup.modules.base.Base):
    required = ('name',)

    #: External tracker parameters are rendered outside of the
    #: parameter definitions holder.
    external_tracker = False

    #: Whether ``value`` is written as the ``defaultValue`` element.
    has_default = True

    def __init__(self, name, value=None, description=None):
        self.name = name
        self.value = value
        self.description = description

    def __repr__(self):
        return '<%s %s>' % (type(self).__name__, self.name)

    def add_markup(self, builder):
        self.check_required()
        with builder.element(self.jenkins_class):
            builder.leaf('name', self.name)
            builder.leaf('description', self.description or '')
            if self.has_default:
                builder.leaf('defaultValue', self.default_value())
            self.add_details(builder)

    def default_value(self):
        return self.value

    def add_details(self, builder):
        pass


class StringParameter(Parameter):
    jenkins_class = 'hudson.model.StringParameterDefinition'


class BooleanParameter(Parameter):
    jenkins_class = 'hudson.model.BooleanParameterDefinition'

    def default_value(self):
        if isinstance(self.value, bool):
            return self.value
        return str(self.value).strip().lower() in ('true', 'yes', '1')


class TextParameter(Parameter):
    jenkins_class = 'hudson.model.TextParameterDefinition'


class PasswordParameter(Parameter):
    jenkins_class = 'hudson.model.PasswordParameterDefinition'


class FileParameter(Parameter):
    jenkins_class = 'hudson.model.FileParameterDefinition'
    has_default = False


class ChoiceParameter(Parameter):
    jenkins_class = 'hudson.model.ChoiceParameterDefinition'
    required = ('name', 'value')
    has_default = False

    @property
    def choices(self):
        if isinstance(self.value, (list, tuple)):
            return [str(choice) for choice in self.value]
        return [choice.strip() for choice in str(self.value).split(',')
                if choice.strip()]

    def add_details(self, builder):
        with builder.element('choices',
                             {'class': 'java.util.Arrays$ArrayList'}):
            with builder.element('a', {'class': 'string-array'}):
                for choice in self.choices:
                    builder.leaf('string', choice)


class RunParameter(Parameter):
    jenkins_class = 'hudson.model.RunParameterDefinition'
    required = ('name', 'value')
    has_default = False

    def add_details(self, builder):
        builder.leaf('projectName', self.value)


class JiraParameter(Parameter):
    jenkins_class = 'hudson.plugins.jira.JiraProjectProperty'
    required = ('value',)
    external_tracker = True

    def add_markup(self, builder):
        self.check_required()
        with builder.element(self.jenkins_class):
            builder.leaf('siteName', self.value)


PARAMETER_TYPES = {
    'string': StringParameter,
    'boolean': BooleanParameter,
    'choice': ChoiceParameter,
    'text': TextParameter,
    'password': PasswordParameter,
    'run': RunParameter,
    'file': FileParameter,
    'jira': JiraParameter,
}


def make_parameter(data):
    """Create a parameter from its YAML definition."""
    ptype = data.get('type', 'string')
    if ptype not in PARAMETER_TYPES:
        raise InvalidAttributeError('type', ptype, sorted(PARAMETER_TYPES))
    return PARAMETER_TYPES[ptype](data.get('name'),
                                  value=data.get('value'),
                                  description=data.get('description'))
