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

"""In-memory description of a Jenkins job.

A :class:`Job` is fully populated (usually by
:class:`jenkins_markup.parser.YamlParser`) before any markup is generated
and is never modified by the markup modules.
"""

FREESTYLE = 'freestyle'
MAVEN = 'maven'
JOB_TYPES = (FREESTYLE, MAVEN)

TRIGGER_CONDITIONS = ('SUCCESS', 'UNSTABLE', 'UNSTABLE_OR_BETTER',
                      'UNSTABLE_OR_WORSE', 'FAILED', 'ALWAYS')


class Repository(object):
    """A source repository checked out by the job's SCM strategy."""

    def __init__(self, remote, branch=None, directory=None, name=None,
                 credentials_id=None):
        self.remote = remote
        self.branch = branch
        self.directory = directory
        self.name = name
        self.credentials_id = credentials_id


class Mail(object):

    def __init__(self, recipients=None, send_for_unstable=True,
                 send_to_individuals=False):
        self.recipients = recipients
        self.send_for_unstable = send_for_unstable
        self.send_to_individuals = send_to_individuals


class Deploy(object):
    """Maven artifacts redeployment settings."""

    def __init__(self, url=None, id=None, unique_version=True,
                 even_if_unstable=False):
        self.url = url
        self.id = id
        self.unique_version = unique_version
        self.even_if_unstable = even_if_unstable


class Artifactory(object):
    """Artifactory redeployment settings."""

    def __init__(self, name=None, repository='libs-releases-local',
                 snapshots_repository='libs-snapshots-local',
                 deploy_artifacts=True, user=None, scrambled_password=None,
                 include_env_vars=False, skip_build_info_deploy=False,
                 even_if_unstable=False, run_checks=False,
                 violation_recipients=None):
        self.name = name
        self.repository = repository
        self.snapshots_repository = snapshots_repository
        self.deploy_artifacts = deploy_artifacts
        self.user = user
        self.scrambled_password = scrambled_password
        self.include_env_vars = include_env_vars
        self.skip_build_info_deploy = skip_build_info_deploy
        self.even_if_unstable = even_if_unstable
        self.run_checks = run_checks
        self.violation_recipients = violation_recipients


class Invoke(object):
    """Downstream jobs started by the parameterized trigger publisher.

    ``jobs`` is the comma separated list of downstream job names; the
    remaining flags select which parameters are passed along.
    """

    def __init__(self, jobs=None, current_build_params=False,
                 subversion_revision_param=False, git_commit_param=False,
                 params=None, properties_file_params=None,
                 condition='SUCCESS', trigger_without_parameters=False):
        self.jobs = jobs
        self.current_build_params = current_build_params
        self.subversion_revision_param = subversion_revision_param
        self.git_commit_param = git_commit_param
        self.params = params
        self.properties_file_params = properties_file_params
        self.condition = condition
        self.trigger_without_parameters = trigger_without_parameters

    @property
    def passes_parameters(self):
        return bool(self.current_build_params or
                    self.subversion_revision_param or
                    self.git_commit_param or
                    self.params or
                    self.properties_file_params)


class Job(object):
    """The full configuration of one Jenkins job.

    Retention thresholds (``days_to_keep``, ``num_to_keep``,
    ``artifact_days_to_keep`` and ``artifact_num_to_keep``) are ``None``
    when unset. Raw markup attributes (``properties``, ``scm``,
    ``publishers``, ``build_wrappers``, ``reporters``, ``prebuilders`` and
    ``postbuilders``) hold pre-rendered XML fragments injected as is.
    """

    def __init__(self, id, job_type=FREESTYLE):
        self.id = id
        self.job_type = job_type

        self.display_name = None
        self.description = ''
        self.generation_source = None
        self.jenkins_url = 'http://localhost:8080'

        self.days_to_keep = None
        self.num_to_keep = None
        self.artifact_days_to_keep = None
        self.artifact_num_to_keep = None

        self.node = None
        self.disabled = False
        self.block_build_when_downstream_building = False
        self.block_build_when_upstream_building = False
        self.quiet_period = None
        self.scm_checkout_retry_count = None
        self.jdk_name = None
        self.auth_token = None
        self.github_url = None

        self.properties = None
        self.scm = None
        self.publishers = None
        self.build_wrappers = None
        self.reporters = None
        self.prebuilders = None
        self.postbuilders = None

        self.scm_type = None
        self.repositories = []
        self.triggers = []
        self.parameters = []
        self.tasks = []
        self.prebuilders_tasks = []
        self.postbuilders_tasks = []
        self.groovys = []

        self.mail = Mail()
        self.deploy = Deploy()
        self.artifactory = Artifactory()
        self.invoke = Invoke()

        # Maven jobs only
        self.pom = 'pom.xml'
        self.maven_goals = '-B -e clean install'
        self.maven_name = None
        self.maven_opts = None
        self.incremental_build = False
        self.private_repository = False
        self.private_repository_per_executor = False
        self.build_on_snapshot = False
        self.archiving_disabled = False
        self.run_post_steps_if_result = 'FAILURE'

    def __repr__(self):
        return '<Job %s (%s)>' % (self.id, self.job_type)

    @property
    def is_maven(self):
        return self.job_type == MAVEN

    @property
    def retention(self):
        return (self.days_to_keep, self.num_to_keep,
                self.artifact_days_to_keep, self.artifact_num_to_keep)

    @property
    def has_log_rotator(self):
        return any(value is not None for value in self.retention)

    @property
    def configure_url(self):
        return '%s/job/%s/configure' % (self.jenkins_url.rstrip('/'), self.id)
