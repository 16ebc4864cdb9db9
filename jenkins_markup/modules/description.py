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

# HTML shown as the description of a generated job.

import jinja2

from jenkins_markup.markup import TreeBuilder

BANNER_TEMPLATE = u"""\
<center>
    <h4>
        Job definition is generated {% if source %}from <a href="{{ source }}">{{ source }}</a>
        {% endif %}by &quot;jenkins-config-markup&quot;{{ timestamp }}.
        <br/>
        If you <a href="{{ configure_url }}">configure</a> this project manually -
        it will probably be {% if source %}<a href="{{ source }}">overwritten</a>{% else %}overwritten{% endif %}!
    </h4>
</center>
{{ description }}
<p/>
{{ table }}
"""


def render_banner(job, timestamp, table, newline='\n'):
    # the table is already rendered with ``newline``
    template = jinja2.Template(BANNER_TEMPLATE,
                               undefined=jinja2.StrictUndefined,
                               newline_sequence=newline,
                               keep_trailing_newline=True)
    description = (job.description or '').replace('\r\n', '\n')
    return template.render(source=job.generation_source or '',
                           timestamp=timestamp or '',
                           configure_url=job.configure_url,
                           description=description.replace('\n', newline),
                           table=table)


class DescriptionTableMarkup(object):
    """HTML table summarising a job, embedded in its description."""

    def __init__(self, job, indent='  ', newline='\n'):
        self.job = job
        self.indent = indent
        self.newline = newline

    def rows(self):
        job = self.job
        rows = [('Job type', job.job_type)]
        if job.display_name:
            rows.append(('Display name', job.display_name))
        rows.append(('Node', job.node or 'any'))
        if job.jdk_name:
            rows.append(('JDK', job.jdk_name))
        if job.is_maven:
            rows.append(('Maven goals', '%s (%s)' % (job.maven_goals,
                                                     job.pom)))
        if job.repositories:
            rows.append(('Repositories', ', '.join(
                '%s (%s)' % (repository.remote, repository.branch)
                if repository.branch else repository.remote
                for repository in job.repositories)))
        if job.triggers:
            rows.append(('Triggers', ', '.join(
                '%s: %s' % (trigger.type, trigger.expression)
                if trigger.expression else trigger.type
                for trigger in job.triggers)))
        if job.parameters:
            rows.append(('Parameters', ', '.join(
                parameter.name or type(parameter).__name__
                for parameter in job.parameters)))
        if job.invoke.jobs:
            rows.append(('Invokes', job.invoke.jobs))
        if job.quiet_period is not None:
            rows.append(('Quiet period', job.quiet_period))
        return rows

    @property
    def markup(self):
        builder = TreeBuilder(self.indent, self.newline)
        with builder.element('table', {'border': '1', 'cellpadding': '3'}):
            for title, value in self.rows():
                with builder.element('tr'):
                    builder.leaf('td', title)
                    builder.leaf('td', value)
        return builder.to_string().rstrip(self.newline)
