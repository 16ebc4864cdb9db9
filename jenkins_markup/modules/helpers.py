# Copyright 2015 Thanh Ha
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

from jenkins_markup.errors import InvalidAttributeError
from jenkins_markup.errors import MissingAttributeError


def convert_mapping_to_xml(builder, data, mapping, fail_required=True):
    """Convert mapping to XML

    Every ``(optname, xmlname, default)`` entry of ``mapping`` adds an
    ``xmlname`` element to the builder's current element, holding the value
    of ``data[optname]`` or ``default``.

    fail_required affects the last parameter of the mapping field when it's
    parameter is set to 'None'. When fail_required is True then a 'None' value
    represents a required configuration so will raise a MissingAttributeError
    if the user does not provide the configuration.

    If fail_required is False parameter is treated as optional. Logic will skip
    configuring the XML tag for the parameter.

    valid_options provides a way to check if the value the user input is from a
    list of available options. When the user pass a value that is not supported
    from the list, it raise an InvalidAttributeError.
    """
    for elem in mapping:
        (optname, xmlname, val) = elem[:3]
        val = data.get(optname, val)

        valid_options = []
        if len(elem) == 4:
            valid_options = elem[3]

        if val is None and fail_required is True:
            raise MissingAttributeError(optname)

        if val is None and fail_required is False:
            continue

        if valid_options and val not in valid_options:
            raise InvalidAttributeError(optname, val, valid_options)

        builder.leaf(xmlname, val)


def properties_text(properties):
    """Java properties text from a mapping, a list of lines or a string."""
    if not properties:
        return ''
    if isinstance(properties, dict):
        return '\n'.join('%s=%s' % (key, value)
                         for key, value in sorted(properties.items()))
    if isinstance(properties, (list, tuple)):
        return '\n'.join(str(line) for line in properties)
    return '\n'.join(line.strip() for line in str(properties).splitlines())
