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


"""
The config markup module assembles the complete ``config.xml`` of a job.

A freestyle job becomes a ``<project>`` document, a Maven job a
``<maven2-moduleset>`` document. Both share the same scaffolding: the
sections below are always written in this order, optional sections being
left out when the job does not configure them.

#. actions, description, display name, log rotator
#. keepDependencies, properties, scm
#. quiet period, retry count, node, flags, JDK, auth token
#. triggers, concurrentBuild
#. Maven settings (Maven jobs) or builders (freestyle jobs)
#. publishers, build wrappers
#. pre and post builders (Maven jobs)

Example::

  builder = ConfigMarkup(job, ' on Oct 18, 2026', '    ', '\\n').markup()
  print(builder.to_string())
"""

import logging

from jenkins_markup.errors import InvalidAttributeError
from jenkins_markup.errors import JobTypeError
from jenkins_markup.errors import MarkupError
from jenkins_markup.errors import MarkupPreconditionError
from jenkins_markup.errors import MissingAttributeError
from jenkins_markup.markup import TreeBuilder
from jenkins_markup import model
from jenkins_markup.modules.description import DescriptionTableMarkup
from jenkins_markup.modules.description import render_banner
import jenkins_markup.modules.helpers as helpers
from jenkins_markup.modules import hudson_model
from jenkins_markup.modules.scm import load_scm

logger = logging.getLogger(__name__)

SEPARATOR = ' %s ' % ('~' * 65)

LOCAL_REPOSITORY_PER_JOB = \
    'hudson.maven.local_repo.PerJobLocalRepositoryLocator'
LOCAL_REPOSITORY_PER_EXECUTOR = \
    'hudson.maven.local_repo.PerExecutorLocalRepositoryLocator'

PARAMETERIZED_TRIGGER = 'hudson.plugins.parameterizedtrigger.'


class FreestyleShape(object):
    """Document shape of freestyle jobs."""

    root_tag = 'project'

    def add_build(self, config):
        with config.builder.element('builders'):
            for task in config.job.tasks:
                task.add_markup(config.builder)

    def add_after_publishers(self, config):
        pass


class MavenShape(object):
    """Document shape of Maven jobs."""

    root_tag = 'maven2-moduleset'

    def add_build(self, config):
        config.add_maven()

    def add_after_publishers(self, config):
        config.add_maven_builders()


SHAPES = {
    model.FREESTYLE: FreestyleShape(),
    model.MAVEN: MavenShape(),
}


class ConfigMarkup(object):
    """Generates the Jenkins config markup of one job.

    :arg Job job: the fully populated job
    :arg str timestamp: generation time, shown in the preamble and the
        description
    :arg str indent: indentation unit of the rendered document
    :arg str newline: line separator of the rendered document

    An instance generates exactly one document: call :meth:`markup` once
    and use the returned :class:`TreeBuilder`.
    """

    def __init__(self, job, timestamp, indent, newline):
        if job is None:
            raise MarkupPreconditionError("A job is required")
        for name, value in (('timestamp', timestamp), ('indent', indent),
                            ('newline', newline)):
            if not value:
                raise MarkupPreconditionError(
                    "A non-empty %s is required to generate job '%s'" %
                    (name, job.id))
        if job.job_type not in SHAPES:
            raise InvalidAttributeError('project-type', job.job_type,
                                        sorted(SHAPES))

        self.job = job
        self.timestamp = timestamp
        self.indent = indent
        self.newline = newline
        self.is_maven = job.is_maven
        self.shape = SHAPES[job.job_type]
        self.builder = TreeBuilder(indent, newline)

    def markup(self):
        """Generate the document and return its builder."""
        if self.builder.root is not None:
            raise MarkupError("Markup of job '%s' was already generated" %
                              self.job.id)
        self.add_markup()
        return self.builder

    def add_markup(self):
        job = self.job
        builder = self.builder
        logger.debug("Generating <%s> for job '%s'", self.shape.root_tag,
                     job.id)

        builder.declaration('1.0', 'UTF-8')
        builder.comment(SEPARATOR)
        source = job.generation_source
        builder.comment(' Generated automatically%s%s ' % (
            ' by [%s]' % source if source else '', self.timestamp))
        builder.comment(SEPARATOR)

        with builder.element(self.shape.root_tag):
            builder.leaf('actions')
            self.add_description()
            if job.display_name:
                builder.leaf('displayName', job.display_name)
            if job.has_log_rotator:
                self.add_log_rotator()
            builder.leaf('keepDependencies', False)
            self.add_properties()
            self.add_scm()
            builder.optional('quietPeriod', job.quiet_period)
            builder.optional('scmCheckoutRetryCount',
                             job.scm_checkout_retry_count)
            builder.leaf('assignedNode', job.node or '')
            builder.leaf('canRoam', not job.node)
            builder.leaf('disabled', bool(job.disabled))
            builder.leaf('blockBuildWhenDownstreamBuilding',
                         bool(job.block_build_when_downstream_building))
            builder.leaf('blockBuildWhenUpstreamBuilding',
                         bool(job.block_build_when_upstream_building))
            builder.leaf('jdk', job.jdk_name)
            builder.optional('authToken', job.auth_token)
            self.add_triggers()
            builder.leaf('concurrentBuild', False)
            self.shape.add_build(self)
            self.add_publishers()
            with builder.element('buildWrappers'):
                builder.raw(job.build_wrappers)
            # Maven pre and post builders follow the publishers
            self.shape.add_after_publishers(self)

    def add_description(self):
        """Adds the ``<description>`` section.

        The description is a CDATA section. The text after it ends with the
        indent so the closing tag lines up with the opening one.
        """
        table = DescriptionTableMarkup(self.job, self.indent,
                                       self.newline).markup
        body = render_banner(self.job, self.timestamp, table, self.newline)
        with self.builder.element('description'):
            self.builder.text(self.newline)
            self.builder.text(body, escaped=False)
            self.builder.text(self.newline + self.indent)

    def add_log_rotator(self):
        job = self.job
        with self.builder.element('logRotator'):
            for name, value in zip(('daysToKeep', 'numToKeep',
                                    'artifactDaysToKeep',
                                    'artifactNumToKeep'), job.retention):
                self.builder.leaf(name, -1 if value is None else value)

    def add_properties(self):
        job = self.job
        builder = self.builder
        with builder.element('properties'):
            builder.raw(job.properties)
            if job.parameters:
                with builder.element(
                        'hudson.model.ParametersDefinitionProperty'):
                    with builder.element('parameterDefinitions'):
                        for parameter in job.parameters:
                            if not parameter.external_tracker:
                                parameter.add_markup(builder)
                # external tracker parameters are properties of their own
                for parameter in job.parameters:
                    if parameter.external_tracker:
                        parameter.add_markup(builder)
            if job.github_url:
                with builder.element('com.coravy.hudson.plugins.github.'
                                     'GithubProjectProperty'):
                    builder.leaf('projectUrl', job.github_url)

    def add_scm(self):
        job = self.job
        if job.scm_type:
            scm = load_scm(job.scm_type)
            scm.add_markup(self.builder, job, job.repositories)
        else:
            self.builder.raw(job.scm)

    @staticmethod
    def trigger_spec(trigger):
        expression = trigger.expression or ''
        if not expression and trigger.requires_expression:
            raise MissingAttributeError('expression', 'trigger %s' %
                                        trigger.type)
        if trigger.description:
            return '#%s\n%s' % (trigger.description, expression)
        return expression

    def add_triggers(self):
        builder = self.builder
        with builder.element('triggers', {'class': 'vector'}):
            for trigger in self.job.triggers:
                with builder.element(trigger.trigger_class):
                    builder.leaf('spec', self.trigger_spec(trigger))

    def _check_maven(self, section):
        if not self.is_maven:
            raise JobTypeError(section, model.MAVEN, self.job.job_type)

    def add_maven(self):
        """Adds the Maven build settings of a Maven job."""
        self._check_maven('maven')
        job = self.job
        builder = self.builder

        for attribute in ('pom', 'maven_goals'):
            if not getattr(job, attribute):
                raise MissingAttributeError(attribute, 'job %s' % job.id)

        builder.leaf('rootPOM', job.pom)
        builder.leaf('goals', job.maven_goals)
        builder.leaf('mavenName', job.maven_name)
        builder.leaf('mavenOpts', job.maven_opts or '')
        builder.leaf('aggregatorStyleBuild', True)
        builder.leaf('incrementalBuild', bool(job.incremental_build))

        if job.private_repository:
            builder.leaf('localRepository',
                         attrib={'class': LOCAL_REPOSITORY_PER_JOB})
        elif job.private_repository_per_executor:
            builder.leaf('localRepository',
                         attrib={'class': LOCAL_REPOSITORY_PER_EXECUTOR})

        builder.leaf('ignoreUpstremChanges', not job.build_on_snapshot)
        builder.leaf('archivingDisabled', bool(job.archiving_disabled))
        builder.leaf('resolveDependencies', False)
        builder.leaf('processPlugins', False)
        builder.leaf('mavenValidationLevel', 0)
        builder.leaf('runHeadless', False)

        with builder.element('reporters'):
            builder.raw(job.reporters)
            if job.mail.recipients:
                self._add_mailer('hudson.maven.reporters.MavenMailer')

    def _add_mailer(self, tag):
        mail = self.job.mail
        with self.builder.element(tag):
            self.builder.leaf('recipients', mail.recipients)
            self.builder.leaf('dontNotifyEveryUnstableBuild',
                              not mail.send_for_unstable)
            self.builder.leaf('sendToIndividuals',
                              bool(mail.send_to_individuals))

    def add_maven_builders(self):
        """Adds ``<prebuilders>`` and ``<postbuilders>`` of a Maven job."""
        self._check_maven('prebuilders')
        job = self.job
        builder = self.builder

        with builder.element('prebuilders'):
            builder.raw(job.prebuilders)
            for groovy in job.groovys:
                if groovy.pre:
                    groovy.add_markup(builder)
            for task in job.prebuilders_tasks:
                task.add_markup(builder)

        with builder.element('postbuilders'):
            builder.raw(job.postbuilders)
            for groovy in job.groovys:
                if not groovy.pre:
                    groovy.add_markup(builder)
            for task in job.postbuilders_tasks:
                task.add_markup(builder)

        result = job.run_post_steps_if_result
        if result not in hudson_model.POST_STEP_THRESHOLDS:
            raise InvalidAttributeError(
                'run-post-steps-if-result', result,
                sorted(hudson_model.POST_STEP_THRESHOLDS))
        threshold = hudson_model.POST_STEP_THRESHOLDS[result]
        with builder.element('runPostStepsIfResult'):
            builder.leaf('name', threshold['name'])
            builder.leaf('ordinal', threshold['ordinal'])
            builder.leaf('color', threshold['color'])

    def add_publishers(self):
        job = self.job
        builder = self.builder

        with builder.element('publishers'):
            builder.raw(job.publishers)

            if not self.is_maven and job.mail.recipients:
                self._add_mailer('hudson.tasks.Mailer')

            if self.is_maven and job.deploy.url:
                self.add_redeploy_publisher()

            if self.is_maven and job.artifactory.name:
                self.add_artifactory_publisher()

            if job.invoke.jobs:
                self.add_build_trigger()

    def add_redeploy_publisher(self):
        deploy = self.job.deploy
        builder = self.builder
        with builder.element('hudson.maven.RedeployPublisher'):
            builder.leaf('id', deploy.id)
            builder.leaf('url', deploy.url)
            builder.leaf('uniqueVersion', bool(deploy.unique_version))
            builder.leaf('evenIfUnstable', bool(deploy.even_if_unstable))

    def add_artifactory_publisher(self):
        artifactory = self.job.artifactory
        builder = self.builder
        with builder.element('org.jfrog.hudson.ArtifactoryRedeployPublisher'):
            with builder.element('details'):
                builder.leaf('artifactoryName', artifactory.name)
                builder.leaf('repositoryKey', artifactory.repository)
                builder.leaf('snapshotsRepositoryKey',
                             artifactory.snapshots_repository)
            builder.leaf('deployArtifacts',
                         bool(artifactory.deploy_artifacts))
            builder.leaf('username', artifactory.user)
            builder.leaf('scrambledPassword', artifactory.scrambled_password)
            builder.leaf('includeEnvVars', bool(artifactory.include_env_vars))
            builder.leaf('skipBuildInfoDeploy',
                         bool(artifactory.skip_build_info_deploy))
            builder.leaf('evenIfUnstable', bool(artifactory.even_if_unstable))
            builder.leaf('runChecks', bool(artifactory.run_checks))
            builder.leaf('violationRecipients',
                         artifactory.violation_recipients)

    def add_build_trigger(self):
        invoke = self.job.invoke
        builder = self.builder
        if invoke.condition not in model.TRIGGER_CONDITIONS:
            raise InvalidAttributeError('condition', invoke.condition,
                                        model.TRIGGER_CONDITIONS)

        with builder.element(PARAMETERIZED_TRIGGER + 'BuildTrigger'):
            with builder.element('configs'):
                with builder.element(
                        PARAMETERIZED_TRIGGER + 'BuildTriggerConfig'):
                    if not invoke.passes_parameters:
                        builder.leaf('configs', attrib={
                            'class': 'java.util.Collections$EmptyList'})
                    else:
                        with builder.element('configs'):
                            self._add_trigger_parameters()
                    builder.leaf('projects', invoke.jobs)
                    builder.leaf('condition', invoke.condition)
                    builder.leaf('triggerWithNoParameters',
                                 bool(invoke.trigger_without_parameters))

    def _add_trigger_parameters(self):
        invoke = self.job.invoke
        builder = self.builder
        if invoke.current_build_params:
            builder.leaf(PARAMETERIZED_TRIGGER + 'CurrentBuildParameters')
        if invoke.subversion_revision_param:
            builder.leaf(PARAMETERIZED_TRIGGER +
                         'SubversionRevisionBuildParameters')
        if invoke.git_commit_param:
            builder.leaf('hudson.plugins.git.GitRevisionBuildParameters')
        if invoke.params:
            with builder.element(PARAMETERIZED_TRIGGER +
                                 'PredefinedBuildParameters'):
                builder.leaf('properties',
                             helpers.properties_text(invoke.params))
        if invoke.properties_file_params:
            with builder.element(PARAMETERIZED_TRIGGER +
                                 'FileBuildParameters'):
                builder.leaf('propertiesFile', invoke.properties_file_params)

