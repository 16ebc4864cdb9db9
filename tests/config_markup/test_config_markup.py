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

import xml.etree.ElementTree as XML

from testtools import ExpectedException
import testscenarios

from jenkins_markup import errors
from jenkins_markup import model
from jenkins_markup.modules.config_markup import ConfigMarkup
from jenkins_markup.modules import parameters
from jenkins_markup.modules import tasks
from jenkins_markup.modules.triggers import Trigger
from tests import base

TIMESTAMP = ' on Oct 18, 2026 at 10:00:00'


def generate(job, indent='    ', newline='\n'):
    return ConfigMarkup(job, TIMESTAMP, indent, newline).markup().to_string()


def parse(job):
    """Root element of the generated document."""
    return XML.fromstring(generate(job).encode('utf-8'))


def tags(element):
    return [child.tag for child in element]


class TestJobShapes(testscenarios.TestWithScenarios, base.BaseTestCase):

    scenarios = [
        ('freestyle', {'job_type': model.FREESTYLE,
                       'root_tag': 'project'}),
        ('maven', {'job_type': model.MAVEN,
                   'root_tag': 'maven2-moduleset'}),
    ]

    def test_root_element(self):
        root = parse(base.make_job(self.job_type))
        self.assertEqual(self.root_tag, root.tag)
        self.assertIn("Generating <%s> for job 'test-job'" % self.root_tag,
                      self.logger.output)

    def test_common_section_order(self):
        root = parse(base.make_job(self.job_type))
        common = [tag for tag in tags(root) if tag in (
            'actions', 'description', 'keepDependencies', 'properties',
            'assignedNode', 'canRoam', 'disabled',
            'blockBuildWhenDownstreamBuilding',
            'blockBuildWhenUpstreamBuilding', 'jdk', 'triggers',
            'concurrentBuild', 'publishers', 'buildWrappers')]
        self.assertEqual(
            ['actions', 'description', 'keepDependencies', 'properties',
             'assignedNode', 'canRoam', 'disabled',
             'blockBuildWhenDownstreamBuilding',
             'blockBuildWhenUpstreamBuilding', 'jdk', 'triggers',
             'concurrentBuild', 'publishers', 'buildWrappers'],
            common)

    def test_no_log_rotator_by_default(self):
        root = parse(base.make_job(self.job_type))
        self.assertIsNone(root.find('logRotator'))

    def test_log_rotator_emits_all_thresholds(self):
        for attribute in ('days_to_keep', 'num_to_keep',
                          'artifact_days_to_keep', 'artifact_num_to_keep'):
            job = base.make_job(self.job_type, **{attribute: 0})
            rotator = parse(job).find('logRotator')
            self.assertIsNotNone(rotator, attribute)
            values = [child.text for child in rotator]
            self.assertEqual(4, len(values))
            self.assertEqual(1, values.count('0'))
            self.assertEqual(3, values.count('-1'))

    def test_can_roam(self):
        for node, expected in ((None, 'true'), ('', 'true'),
                               ('linux', 'false')):
            root = parse(base.make_job(self.job_type, node=node))
            self.assertEqual(expected, root.findtext('canRoam'))
            self.assertEqual(node or None, root.findtext('assignedNode')
                             or None)

    def test_builders_shape(self):
        job = base.make_job(self.job_type,
                            tasks=[tasks.make_task({'shell': 'ls'})],
                            postbuilders_tasks=[
                                tasks.make_task({'shell': 'ls'})])
        root = parse(job)
        names = tags(root)
        if self.job_type == model.MAVEN:
            self.assertNotIn('builders', names)
            self.assertGreater(names.index('prebuilders'),
                               names.index('publishers'))
            self.assertGreater(names.index('postbuilders'),
                               names.index('prebuilders'))
            self.assertEqual('runPostStepsIfResult', names[-1])
        else:
            self.assertNotIn('prebuilders', names)
            self.assertNotIn('postbuilders', names)
            self.assertLess(names.index('builders'),
                            names.index('publishers'))
            self.assertEqual(['hudson.tasks.Shell'],
                             tags(root.find('builders')))

    def test_triggers(self):
        job = base.make_job(self.job_type, triggers=[
            Trigger('timer', '@midnight', 'nightly build'),
            Trigger('scm', 'H/5 * * * *'),
        ])
        triggers = parse(job).find('triggers')
        self.assertEqual('vector', triggers.get('class'))
        self.assertEqual(['hudson.triggers.TimerTrigger',
                          'hudson.triggers.SCMTrigger'], tags(triggers))
        specs = [trigger.findtext('spec') for trigger in triggers]
        self.assertEqual(['#nightly build\n@midnight', 'H/5 * * * *'], specs)

    def test_trigger_without_expression(self):
        for kind in ('timer', 'scm'):
            job = base.make_job(self.job_type,
                                triggers=[Trigger(kind, None)])
            self.assertRaises(errors.MissingAttributeError, generate, job)

    def test_github_trigger_without_expression(self):
        job = base.make_job(self.job_type, triggers=[
            Trigger('github', None),
            Trigger('github', '', 'push to master'),
        ])
        text = generate(job)
        self.assertIn('<com.cloudbees.jenkins.GitHubPushTrigger>\n'
                      '            <spec />\n', text)
        triggers = XML.fromstring(text.encode('utf-8')).find('triggers')
        self.assertEqual(['com.cloudbees.jenkins.GitHubPushTrigger'] * 2,
                         tags(triggers))
        self.assertEqual(['', '#push to master\n'],
                         [trigger.findtext('spec') for trigger in triggers])

    def test_mail(self):
        job = base.make_job(self.job_type)
        job.mail = model.Mail('dev@example.org', send_for_unstable=False,
                              send_to_individuals=True)
        root = parse(job)
        if self.job_type == model.MAVEN:
            mailer = root.find('reporters/hudson.maven.reporters.MavenMailer')
            self.assertIsNone(root.find('publishers/hudson.tasks.Mailer'))
        else:
            mailer = root.find('publishers/hudson.tasks.Mailer')
        self.assertEqual('dev@example.org', mailer.findtext('recipients'))
        self.assertEqual('true',
                         mailer.findtext('dontNotifyEveryUnstableBuild'))
        self.assertEqual('true', mailer.findtext('sendToIndividuals'))

    def test_redeploy_publishers_are_maven_only(self):
        job = base.make_job(self.job_type)
        job.deploy = model.Deploy('https://repo.example.org', 'snapshots')
        job.artifactory = model.Artifactory('artifactory')
        publishers = tags(parse(job).find('publishers'))
        expected = [] if self.job_type == model.FREESTYLE else [
            'hudson.maven.RedeployPublisher',
            'org.jfrog.hudson.ArtifactoryRedeployPublisher']
        self.assertEqual(expected, publishers)

    def test_preconditions(self):
        job = base.make_job(self.job_type)
        for args in ((None, TIMESTAMP, '  ', '\n'),
                     (job, '', '  ', '\n'),
                     (job, None, '  ', '\n'),
                     (job, TIMESTAMP, '', '\n'),
                     (job, TIMESTAMP, '  ', '')):
            self.assertRaises(errors.MarkupPreconditionError,
                              ConfigMarkup, *args)


class TestConfigMarkup(base.BaseTestCase):

    def test_description(self):
        job = base.make_job(description='Builds <everything> & more',
                            generation_source='jobs/core.yaml')
        text = generate(job, indent='  ')
        self.assertIn('  <description>\n<![CDATA[<center>', text)
        self.assertIn('Builds <everything> & more', text)
        self.assertIn('</table>\n]]>\n  </description>\n', text)
        self.assertIn('<!-- Generated automatically by '
                      '[jobs/core.yaml] on Oct 18, 2026 at 10:00:00 -->',
                      text)

    def test_windows_newlines(self):
        text = generate(base.make_job(), newline='\r\n')
        self.assertNotIn('\n', text.replace('\r\n', ''))

    def test_windows_newlines_in_description(self):
        job = base.make_job(description='First line\r\nsecond line\n',
                            node='linux')
        text = generate(job, indent='  ', newline='\r\n')
        self.assertNotIn('\r\r\n', text)
        self.assertIn('<table border="1" cellpadding="3">\r\n  <tr>\r\n',
                      text)
        self.assertIn('First line\r\nsecond line\r\n', text)

    def test_without_generation_source(self):
        text = generate(base.make_job())
        self.assertIn('<!-- Generated automatically on Oct 18, 2026 at '
                      '10:00:00 -->', text)
        self.assertNotIn('[]', text)
        self.assertNotIn('href=""', text)

    def test_markup_runs_once(self):
        config = ConfigMarkup(base.make_job(), TIMESTAMP, '  ', '\n')
        config.markup()
        self.assertRaises(errors.MarkupError, config.markup)

    def test_invalid_job_type(self):
        job = base.make_job('matrix')
        self.assertRaises(errors.InvalidAttributeError, ConfigMarkup, job,
                          TIMESTAMP, '  ', '\n')

    def test_maven_sections_on_freestyle_job(self):
        config = ConfigMarkup(base.make_job(), TIMESTAMP, '  ', '\n')
        with config.builder.element('project'):
            with ExpectedException(errors.JobTypeError,
                                   "Section 'maven' is only valid for "
                                   "maven jobs, not freestyle"):
                config.add_maven()
            self.assertRaises(errors.JobTypeError, config.add_maven_builders)

    def test_optional_flags(self):
        root = parse(base.make_job())
        for tag in ('quietPeriod', 'scmCheckoutRetryCount', 'authToken',
                    'displayName'):
            self.assertIsNone(root.find(tag), tag)
        self.assertIsNotNone(root.find('jdk'))

        root = parse(base.make_job(quiet_period=0,
                                   scm_checkout_retry_count=3,
                                   auth_token='secret',
                                   display_name='Core',
                                   disabled=True))
        self.assertEqual('0', root.findtext('quietPeriod'))
        self.assertEqual('3', root.findtext('scmCheckoutRetryCount'))
        self.assertEqual('secret', root.findtext('authToken'))
        self.assertEqual('Core', root.findtext('displayName'))
        self.assertEqual('true', root.findtext('disabled'))
        names = tags(root)
        self.assertEqual(names.index('description') + 1,
                         names.index('displayName'))
        self.assertEqual(names.index('jdk') + 1, names.index('authToken'))

    def test_raw_sections(self):
        job = base.make_job(
            properties='<hudson.model.Property />',
            scm='<scm class="hudson.scm.NullSCM" />',
            publishers='<hudson.tasks.Fingerprinter />',
            build_wrappers='<hudson.plugins.Timestamper />')
        job.mail = model.Mail('dev@example.org')
        root = parse(job)
        self.assertEqual(['hudson.model.Property'],
                         tags(root.find('properties')))
        self.assertEqual('hudson.scm.NullSCM', root.find('scm').get('class'))
        self.assertEqual(['hudson.tasks.Fingerprinter',
                          'hudson.tasks.Mailer'],
                         tags(root.find('publishers')))
        self.assertEqual(['hudson.plugins.Timestamper'],
                         tags(root.find('buildWrappers')))

    def test_scm_strategy_replaces_raw_scm(self):
        job = base.make_job(
            scm='<scm class="hudson.scm.NullSCM" />', scm_type='git',
            repositories=[model.Repository('https://git.example.org/a.git')])
        root = parse(job)
        self.assertEqual(1, len(root.findall('scm')))
        self.assertEqual('hudson.plugins.git.GitSCM',
                         root.find('scm').get('class'))

    def test_no_scm(self):
        self.assertIsNone(parse(base.make_job()).find('scm'))

    def test_parameters(self):
        job = base.make_job(github_url='https://github.com/example/core',
                            parameters=[
                                parameters.make_parameter(
                                    {'type': 'string', 'name': 'FOO'}),
                                parameters.make_parameter(
                                    {'type': 'jira',
                                     'value': 'https://jira.example.org'}),
                                parameters.make_parameter(
                                    {'type': 'boolean', 'name': 'BAR'}),
                            ])
        properties = parse(job).find('properties')
        self.assertEqual(
            ['hudson.model.ParametersDefinitionProperty',
             'hudson.plugins.jira.JiraProjectProperty',
             'com.coravy.hudson.plugins.github.GithubProjectProperty'],
            tags(properties))
        self.assertEqual(
            ['hudson.model.StringParameterDefinition',
             'hudson.model.BooleanParameterDefinition'],
            tags(properties.find('hudson.model.ParametersDefinitionProperty'
                                 '/parameterDefinitions')))

    def test_build_trigger_without_parameters(self):
        job = base.make_job()
        job.invoke = model.Invoke('core-tests', condition='UNSTABLE')
        config = parse(job).find(
            'publishers/hudson.plugins.parameterizedtrigger.BuildTrigger'
            '/configs/hudson.plugins.parameterizedtrigger.BuildTriggerConfig')
        self.assertEqual(['configs', 'projects', 'condition',
                          'triggerWithNoParameters'], tags(config))
        self.assertEqual('java.util.Collections$EmptyList',
                         config.find('configs').get('class'))
        self.assertEqual(0, len(config.find('configs')))
        self.assertEqual('UNSTABLE', config.findtext('condition'))

    def test_build_trigger_with_parameters(self):
        job = base.make_job()
        job.invoke = model.Invoke('core-tests', current_build_params=True,
                                  git_commit_param=True,
                                  params='  FOO=bar\n BAZ=qux ',
                                  properties_file_params='build.properties')
        config = parse(job).find(
            'publishers/hudson.plugins.parameterizedtrigger.BuildTrigger'
            '/configs/hudson.plugins.parameterizedtrigger.BuildTriggerConfig')
        passed = config.find('configs')
        self.assertIsNone(passed.get('class'))
        self.assertEqual(
            ['hudson.plugins.parameterizedtrigger.CurrentBuildParameters',
             'hudson.plugins.git.GitRevisionBuildParameters',
             'hudson.plugins.parameterizedtrigger.PredefinedBuildParameters',
             'hudson.plugins.parameterizedtrigger.FileBuildParameters'],
            tags(passed))
        self.assertEqual('FOO=bar\nBAZ=qux', passed.findtext(
            'hudson.plugins.parameterizedtrigger.PredefinedBuildParameters'
            '/properties'))

    def test_invalid_trigger_condition(self):
        job = base.make_job()
        job.invoke = model.Invoke('core-tests', condition='SOMETIMES')
        with ExpectedException(errors.InvalidAttributeError,
                               "'SOMETIMES' is an invalid value for "
                               "attribute ConfigMarkup.condition.*"):
            generate(job)


class TestMavenMarkup(base.BaseTestCase):

    def test_maven_settings(self):
        job = base.make_job(model.MAVEN, maven_goals='verify',
                            maven_name='maven3', maven_opts='-Xmx1g',
                            incremental_build=True, build_on_snapshot=True,
                            reporters='<hudson.maven.reporters.Fake />')
        root = parse(job)
        names = tags(root)
        maven = names[names.index('concurrentBuild') + 1:
                      names.index('publishers')]
        self.assertEqual(
            ['rootPOM', 'goals', 'mavenName', 'mavenOpts',
             'aggregatorStyleBuild', 'incrementalBuild',
             'ignoreUpstremChanges', 'archivingDisabled',
             'resolveDependencies', 'processPlugins',
             'mavenValidationLevel', 'runHeadless', 'reporters'], maven)
        self.assertEqual('verify', root.findtext('goals'))
        self.assertEqual('maven3', root.findtext('mavenName'))
        self.assertEqual('-Xmx1g', root.findtext('mavenOpts'))
        self.assertEqual('true', root.findtext('aggregatorStyleBuild'))
        self.assertEqual('true', root.findtext('incrementalBuild'))
        self.assertEqual('false', root.findtext('ignoreUpstremChanges'))
        self.assertEqual('0', root.findtext('mavenValidationLevel'))
        self.assertEqual(['hudson.maven.reporters.Fake'],
                         tags(root.find('reporters')))

    def test_local_repository(self):
        root = parse(base.make_job(model.MAVEN))
        self.assertIsNone(root.find('localRepository'))

        root = parse(base.make_job(model.MAVEN,
                                   private_repository_per_executor=True))
        self.assertEqual(
            'hudson.maven.local_repo.PerExecutorLocalRepositoryLocator',
            root.find('localRepository').get('class'))

    def test_missing_goals(self):
        job = base.make_job(model.MAVEN, maven_goals='')
        self.assertRaises(errors.MissingAttributeError, generate, job)

    def test_pre_and_post_builders(self):
        job = base.make_job(
            model.MAVEN,
            prebuilders='<hudson.tasks.Raw />',
            groovys=[tasks.make_groovy({'command': 'pre()', 'pre': True}),
                     tasks.make_groovy({'command': 'post()'})],
            prebuilders_tasks=[tasks.make_task({'shell': 'setup.sh'})],
            postbuilders_tasks=[tasks.make_task({'batch': 'report.cmd'})],
            run_post_steps_if_result='SUCCESS')
        root = parse(job)
        self.assertEqual(['hudson.tasks.Raw', 'hudson.plugins.groovy.Groovy',
                          'hudson.tasks.Shell'],
                         tags(root.find('prebuilders')))
        self.assertEqual(['hudson.plugins.groovy.Groovy',
                          'hudson.tasks.BatchFile'],
                         tags(root.find('postbuilders')))
        self.assertEqual(
            'post()', root.findtext('postbuilders/hudson.plugins.groovy.Groovy'
                                    '/scriptSource/command'))
        result = root.find('runPostStepsIfResult')
        self.assertEqual(['SUCCESS', '0', 'BLUE'],
                         [child.text for child in result])

    def test_invalid_post_step_result(self):
        job = base.make_job(model.MAVEN, run_post_steps_if_result='ABORTED')
        self.assertRaises(errors.InvalidAttributeError, generate, job)
