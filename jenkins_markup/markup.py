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

# Markup primitives shared by every emitter.

import contextlib
import logging
from xml.sax.saxutils import escape
import xml.etree.ElementTree as XML

from jenkins_markup.errors import MarkupError

__all__ = [
    "CData",
    "TreeBuilder",
]

logger = logging.getLogger(__name__)


def CData(text=None):
    """CDATA section factory.

    Works like ``xml.etree.ElementTree.Comment``: the returned element uses
    the factory itself as its tag, and its text is written verbatim inside a
    ``<![CDATA[...]]>`` section by :func:`serialize`.
    """
    element = XML.Element(CData)
    element.text = text
    return element


def to_text(value):
    """Jenkins-style text for a scalar value (booleans are lower case)."""
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def remove_ignorable_whitespace(node):
    """Remove insignificant whitespace from XML nodes

    It should only remove whitespace in between elements and sub elements.
    This should be safe for Jenkins due to how it's XML serialization works
    but may not be valid for other XML documents.
    """
    # strip tail whitespace if it's not significant
    if node.tail and node.tail.strip() == "":
        node.tail = None

    for child in node:
        # only strip whitespace from the text node if there are subelement
        # nodes as this means we are removing leading whitespace before such
        # sub elements. Otherwise risk removing whitespace from an element
        # that only contains whitespace
        if node.text and node.text.strip() == "":
            node.text = None
        remove_ignorable_whitespace(child)


def _attributes(element):
    return ''.join(' %s=%s' % (key, _quote(value))
                   for key, value in element.attrib.items())


def _quote(value):
    return '"%s"' % escape(value, {'"': '&quot;'})


def _cdata(text):
    # a literal ']]>' would terminate the section early
    return '<![CDATA[%s]]>' % (text or '').replace(']]>', ']]]]><![CDATA[>')


def _is_mixed(element):
    if element.text and element.text.strip():
        return True
    for child in element:
        if child.tag is CData or (child.tail and child.tail.strip()):
            return True
    return False


def _write_inline(write, element):
    """Write an element and its content without adding any whitespace."""
    if element.tag is CData:
        write(_cdata(element.text))
    elif element.tag is XML.Comment:
        write('<!--%s-->' % element.text)
    elif len(element) == 0 and not element.text:
        write('<%s%s />' % (element.tag, _attributes(element)))
    else:
        write('<%s%s>' % (element.tag, _attributes(element)))
        write(escape(element.text or ''))
        for child in element:
            _write_inline(write, child)
            write(escape(child.tail or ''))
        write('</%s>' % element.tag)


def _write_element(write, element, indent, newline, level):
    prefix = indent * level
    children = list(element)

    if element.tag is CData:
        write('%s%s%s' % (prefix, _cdata(element.text), newline))
    elif element.tag is XML.Comment:
        write('%s<!--%s-->%s' % (prefix, element.text, newline))
    elif _is_mixed(element):
        # mixed content is significant, so it is written as is
        write(prefix)
        _write_inline(write, element)
        write(newline)
    elif children:
        write('%s<%s%s>%s' % (prefix, element.tag, _attributes(element),
                               newline))
        for child in children:
            _write_element(write, child, indent, newline, level + 1)
        write('%s</%s>%s' % (prefix, element.tag, newline))
    elif element.text:
        write('%s<%s%s>%s</%s>%s' % (prefix, element.tag,
                                      _attributes(element),
                                      escape(element.text), element.tag,
                                      newline))
    else:
        write('%s<%s%s />%s' % (prefix, element.tag, _attributes(element),
                                 newline))


def serialize(element, indent='  ', newline='\n', level=0):
    """Render ``element`` as indented markup text."""
    parts = []
    _write_element(parts.append, element, indent, newline, level)
    return ''.join(parts)


class TreeBuilder(object):
    """Append-only builder for a single markup document.

    Elements are opened and closed in strictly nested order. Everything
    written goes into the innermost open element; comments written before
    the root element is opened become part of the document preamble.

    :arg str indent: indentation unit used when the document is rendered
    :arg str newline: line separator used when the document is rendered
    """

    def __init__(self, indent='  ', newline='\n'):
        self.indent = indent
        self.newline = newline
        self.root = None
        self.xml_declaration = None
        self.preamble = []
        self._stack = []

    @property
    def current(self):
        if not self._stack:
            raise MarkupError("No element is open")
        return self._stack[-1]

    @property
    def finished(self):
        return self.root is not None and not self._stack

    def declaration(self, version='1.0', encoding='UTF-8'):
        if self.root is not None:
            raise MarkupError("The XML declaration must precede the root "
                              "element")
        self.xml_declaration = (version, encoding)

    def comment(self, content):
        if self.root is None:
            self.preamble.append(XML.Comment(content))
        else:
            self.current.append(XML.Comment(content))

    def begin(self, name, attrib=None):
        """Open element ``name`` and return it as the scope handle."""
        if self._stack:
            element = XML.SubElement(self._stack[-1], name, attrib or {})
        elif self.root is None:
            element = self.root = XML.Element(name, attrib or {})
        else:
            raise MarkupError("Document already has a root element '%s'" %
                              self.root.tag)
        self._stack.append(element)
        return element

    def end(self, element):
        if not self._stack or self._stack[-1] is not element:
            raise MarkupError("Element '%s' is not the innermost open "
                              "element" % element.tag)
        self._stack.pop()

    def _unwind(self, element):
        while self._stack:
            if self._stack.pop() is element:
                break

    @contextlib.contextmanager
    def element(self, name, attrib=None):
        """Open ``name`` for the duration of a ``with`` block.

        The element is closed when the block exits, including when the
        block raises.
        """
        element = self.begin(name, attrib)
        try:
            yield element
        except Exception:
            self._unwind(element)
            raise
        self.end(element)

    def leaf(self, name, value=None, attrib=None):
        """Add a childless element holding ``value`` as its text."""
        element = XML.SubElement(self.current, name, attrib or {})
        element.text = to_text(value)
        return element

    def optional(self, name, value):
        if value is not None:
            return self.leaf(name, value)

    def text(self, content, escaped=True):
        """Add text to the current element.

        Escaped text is subject to the usual markup escaping on output,
        unescaped text is kept verbatim in a CDATA section.
        """
        if not content:
            return
        parent = self.current
        if not escaped:
            parent.append(CData(content))
        elif len(parent):
            last = parent[-1]
            last.tail = (last.tail or '') + content
        else:
            parent.text = (parent.text or '') + content

    def raw(self, content):
        """Inject a pre-rendered markup fragment into the current element.

        The fragment may hold any number of sibling elements; an empty
        fragment adds nothing.
        """
        if not content or not content.strip():
            return
        parent = self.current
        try:
            wrapper = XML.fromstring('<raw>%s</raw>' % content)
        except XML.ParseError as e:
            raise MarkupError("Invalid markup fragment inside '%s': %s" %
                              (parent.tag, e))
        remove_ignorable_whitespace(wrapper)
        if wrapper.text and wrapper.text.strip():
            self.text(wrapper.text)
        for child in wrapper:
            parent.append(child)
        logger.debug("Injected %d element(s) into '%s'", len(wrapper),
                     parent.tag)

    def to_string(self):
        if not self.finished:
            raise MarkupError("Document is not finished")
        parts = []
        if self.xml_declaration:
            parts.append('<?xml version="%s" encoding="%s"?>%s' % (
                self.xml_declaration + (self.newline,)))
        for node in self.preamble:
            parts.append(serialize(node, self.indent, self.newline))
        parts.append(serialize(self.root, self.indent, self.newline))
        return ''.join(parts)
