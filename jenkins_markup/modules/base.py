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

# Base class for a jenkins_markup sub-emitter

from jenkins_markup.errors import MissingAttributeError


class Base(object):
    """
    A base class for the components that render one bounded subtree of a
    job's configuration (a build step, a parameter definition, ...).

    Components never own a builder: the builder of the document being
    generated is passed to every :meth:`add_markup` call.
    """

    #: The Jenkins class name of the element the component renders.
    jenkins_class = None

    #: Attributes which must be set before the component can render.
    required = ()

    def check_required(self):
        for attribute in self.required:
            if getattr(self, attribute, None) in (None, ''):
                raise MissingAttributeError(attribute,
                                            type(self).__name__)

    def add_markup(self, builder):
        """Write this component's subtree into ``builder``.

        :arg TreeBuilder builder: the builder of the document being
            generated; the subtree is added to its current element
        """

        raise NotImplementedError()
