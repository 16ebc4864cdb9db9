# Copyright 2026 The jenkins-config-markup Authors
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

from testtools import ExpectedException

from jenkins_markup import errors
from jenkins_markup.modules import parameters
from tests import base


class TestParameters(base.BaseTestCase):

    def test_string(self):
        parameter = parameters.make_parameter({
            'type': 'string', 'name': 'FOO', 'value': 'bar',
            'description': 'The foo'})
        self.assertEqual(
            '<root>\n'
            '  <hudson.model.StringParameterDefinition>\n'
            '    <name>FOO</name>\n'
            '    <description>The foo</description>\n'
            '    <defaultValue>bar</defaultValue>\n'
            '  </hudson.model.StringParameterDefinition>\n'
            '</root>\n',
            base.render(parameter))

    def test_boolean_default(self):
        for value, expected in ((True, 'true'), ('yes', 'true'),
                                ('false', 'false'), (None, 'false')):
            parameter = parameters.make_parameter({
                'type': 'boolean', 'name': 'FLAG', 'value': value})
            self.assertIn('<defaultValue>%s</defaultValue>' % expected,
                          base.render(parameter))

    def test_choice(self):
        parameter = parameters.make_parameter({
            'type': 'choice', 'name': 'ENV', 'value': 'dev, qa,prod'})
        self.assertEqual(
            '<root>\n'
            '  <hudson.model.ChoiceParameterDefinition>\n'
            '    <name>ENV</name>\n'
            '    <description />\n'
            '    <choices class="java.util.Arrays$ArrayList">\n'
            '      <a class="string-array">\n'
            '        <string>dev</string>\n'
            '        <string>qa</string>\n'
            '        <string>prod</string>\n'
            '      </a>\n'
            '    </choices>\n'
            '  </hudson.model.ChoiceParameterDefinition>\n'
            '</root>\n',
            base.render(parameter))

    def test_choice_list(self):
        parameter = parameters.ChoiceParameter('ENV', ['dev', 'qa'])
        self.assertEqual(['dev', 'qa'], parameter.choices)

    def test_run(self):
        parameter = parameters.make_parameter({
            'type': 'run', 'name': 'UPSTREAM', 'value': 'core-build'})
        text = base.render(parameter)
        self.assertIn('<projectName>core-build</projectName>', text)
        self.assertNotIn('defaultValue', text)

    def test_file_has_no_default(self):
        parameter = parameters.make_parameter({
            'type': 'file', 'name': 'archive.zip', 'value': 'ignored'})
        self.assertNotIn('defaultValue', base.render(parameter))

    def test_jira(self):
        parameter = parameters.make_parameter({
            'type': 'jira', 'value': 'https://jira.example.org'})
        self.assertTrue(parameter.external_tracker)
        self.assertEqual(
            '<root>\n'
            '  <hudson.plugins.jira.JiraProjectProperty>\n'
            '    <siteName>https://jira.example.org</siteName>\n'
            '  </hudson.plugins.jira.JiraProjectProperty>\n'
            '</root>\n',
            base.render(parameter))

    def test_missing_name(self):
        parameter = parameters.make_parameter({'type': 'text'})
        with ExpectedException(errors.MissingAttributeError,
                               "Missing name from an instance of "
                               "'TextParameter'"):
            base.render(parameter)

    def test_choice_without_choices(self):
        parameter = parameters.make_parameter({'type': 'choice',
                                               'name': 'ENV'})
        self.assertRaises(errors.MissingAttributeError, base.render,
                          parameter)

    def test_unknown_type(self):
        self.assertRaises(errors.InvalidAttributeError,
                          parameters.make_parameter,
                          {'type': 'label', 'name': 'NODE'})
