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
Triggers define what causes a Jenkins job to start building.

:Trigger Parameters:
    * **type** (`str`): ``timer`` (build periodically), ``scm`` (poll SCM)
      or ``github`` (build on GitHub push).
    * **expression** (`str`): cron-like schedule, required for ``timer``
      and ``scm``. A ``github`` trigger usually has none.
    * **description** (`str`): optional description, written as a ``#``
      comment line in front of the schedule.

Example::

  triggers:
    - type: timer
      expression: '0 3 * * *'
      description: nightly build
    - type: scm
      expression: '*/15 * * * *'
"""

from jenkins_markup.errors import InvalidAttributeError

TRIGGER_CLASSES = {
    'timer': 'hudson.triggers.TimerTrigger',
    'scm': 'hudson.triggers.SCMTrigger',
    'github': 'com.cloudbees.jenkins.GitHubPushTrigger',
}

# kinds whose spec is a schedule
SCHEDULED = ('timer', 'scm')


class Trigger(object):

    def __init__(self, type, expression, description=None):
        if type not in TRIGGER_CLASSES:
            raise InvalidAttributeError('type', type,
                                        sorted(TRIGGER_CLASSES))
        self.type = type
        self.expression = expression
        self.description = description

    @property
    def trigger_class(self):
        return TRIGGER_CLASSES[self.type]

    @property
    def requires_expression(self):
        return self.type in SCHEDULED

    def __repr__(self):
        return '<Trigger %s "%s">' % (self.type, self.expression)
