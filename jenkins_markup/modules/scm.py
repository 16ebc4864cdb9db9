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
The SCM section of a job is rendered by an SCM strategy chosen with the
job's ``scm-type`` attribute. Strategies are registered under the
``jenkins_markup.scm`` entry point namespace, so other distributions can
provide their own.

:Job Parameters:
    * **scm-type** (`str`): ``git``, ``svn`` or ``none``. When omitted and
      ``repositories`` are given, ``git`` is used.
    * **repositories** (`list`): repositories to check out, each with

        * **remote** (`str`): the repository URL. (required)
        * **branch** (`str`): branch to build (git only, default ``**``)
        * **directory** (`str`): checkout directory relative to the
          workspace (optional)
        * **name** (`str`): git remote name (default ``origin``)
        * **credentials-id** (`str`): Jenkins credentials (optional)

    * **scm** (`str`): raw SCM markup, used when no ``scm-type`` is set.

Example::

  scm-type: git
  repositories:
    - remote: https://github.com/example/project.git
      branch: master
"""

import logging

from stevedore import driver
from stevedore.exception import NoMatches

from jenkins_markup.errors import InvalidAttributeError
from jenkins_markup.errors import MissingAttributeError

SCM_NAMESPACE = 'jenkins_markup.scm'

logger = logging.getLogger(__name__)


def load_scm(name):
    """Return an instance of the SCM strategy registered as ``name``."""
    try:
        manager = driver.DriverManager(namespace=SCM_NAMESPACE, name=name,
                                       invoke_on_load=True)
    except NoMatches:
        raise InvalidAttributeError('scm-type', name, SCM_TYPES)
    logger.debug("Using SCM strategy %s for '%s'",
                 type(manager.driver).__name__, name)
    return manager.driver


class SCM(object):
    """Base class of SCM strategies."""

    scm_class = None

    def add_markup(self, builder, job, repositories):
        """Write the job's ``<scm>`` element into ``builder``.

        :arg TreeBuilder builder: the builder of the document being generated
        :arg Job job: the job being rendered
        :arg list repositories: the job's :class:`Repository` objects
        """
        raise NotImplementedError()

    def check_repositories(self, repositories):
        if not repositories:
            raise MissingAttributeError('repositories', type(self).__name__)
        for repository in repositories:
            if not repository.remote:
                raise MissingAttributeError('remote', type(self).__name__)


class Git(SCM):
    scm_class = 'hudson.plugins.git.GitSCM'

    def add_markup(self, builder, job, repositories):
        self.check_repositories(repositories)
        with builder.element('scm', {'class': self.scm_class}):
            builder.leaf('configVersion', 2)
            with builder.element('userRemoteConfigs'):
                for index, repository in enumerate(repositories):
                    name = repository.name or (
                        'origin' if index == 0 else 'origin%d' % index)
                    with builder.element(
                            'hudson.plugins.git.UserRemoteConfig'):
                        builder.leaf('name', name)
                        builder.leaf('refspec',
                                     '+refs/heads/*:refs/remotes/%s/*' % name)
                        builder.leaf('url', repository.remote)
                        builder.optional('credentialsId',
                                         repository.credentials_id)
            with builder.element('branches'):
                for repository in repositories:
                    with builder.element('hudson.plugins.git.BranchSpec'):
                        builder.leaf('name', repository.branch or '**')
            builder.leaf('doGenerateSubmoduleConfigurations', False)
            builder.leaf('submoduleCfg', attrib={'class': 'list'})
            with builder.element('extensions'):
                directory = repositories[0].directory
                if directory:
                    with builder.element('hudson.plugins.git.extensions.'
                                         'impl.RelativeTargetDirectory'):
                        builder.leaf('relativeTargetDir', directory)


class Svn(SCM):
    scm_class = 'hudson.scm.SubversionSCM'

    def add_markup(self, builder, job, repositories):
        self.check_repositories(repositories)
        with builder.element('scm', {'class': self.scm_class}):
            with builder.element('locations'):
                for repository in repositories:
                    with builder.element(
                            'hudson.scm.SubversionSCM_-ModuleLocation'):
                        builder.leaf('remote', repository.remote)
                        builder.optional('credentialsId',
                                         repository.credentials_id)
                        builder.leaf('local', repository.directory or '.')
                        builder.leaf('depthOption', 'infinity')
                        builder.leaf('ignoreExternalsOption', False)
            builder.leaf('excludedRegions', '')
            builder.leaf('includedRegions', '')
            builder.leaf('excludedUsers', '')
            builder.leaf('excludedRevprop', '')
            builder.leaf('excludedCommitMessages', '')
            builder.leaf('workspaceUpdater',
                         attrib={'class':
                                 'hudson.scm.subversion.UpdateUpdater'})


class NoSCM(SCM):
    scm_class = 'hudson.scm.NullSCM'

    def add_markup(self, builder, job, repositories):
        if repositories:
            logger.warning("Job '%s' has repositories but uses no SCM, "
                           "ignoring them", job.id)
        builder.leaf('scm', attrib={'class': self.scm_class})


SCM_TYPES = ['git', 'none', 'svn']
