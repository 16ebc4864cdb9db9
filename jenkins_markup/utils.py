#!/usr/bin/env python
# Copyright (C) 2015 Hewlett-Packard Development Company, L.P.
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

# functions that don't fit in well elsewhere

import codecs
import fnmatch
import locale
import os.path


def wrap_stream(stream, encoding='utf-8'):
    """Return a binary stream accepting ``encoding`` encoded bytes."""
    try:
        stream_enc = stream.encoding
    except AttributeError:
        stream_enc = locale.getpreferredencoding()

    if hasattr(stream, 'buffer'):
        stream = stream.buffer

    if str(stream_enc).lower() == str(encoding).lower():
        return stream

    return codecs.EncodedFile(stream, encoding, stream_enc)


def _excluded(path, root, patterns, absolute, relative):
    name = os.path.basename(path)
    full = os.path.join(root, name)
    return (any(fnmatch.fnmatch(name, pattern) for pattern in patterns) or
            any(fnmatch.fnmatch(os.path.abspath(full), pattern)
                for pattern in absolute) or
            any(fnmatch.fnmatch(os.path.relpath(full), pattern)
                for pattern in relative))


def recurse_path(root, excludes=None):
    """List ``root`` and, depth first, all of its sub directories.

    ``excludes`` holds glob patterns: a bare name pattern is matched against
    directory names, a pattern with a path separator against the absolute
    or relative path of the directory.
    """
    if excludes is None:
        excludes = []

    basepath = os.path.realpath(root)
    pathlist = [basepath]

    patterns = [e for e in excludes if os.path.sep not in e]
    absolute = [e for e in excludes if os.path.isabs(e)]
    relative = [e for e in excludes if os.path.sep in e and
                not os.path.isabs(e)]
    for dirpath, dirs, _ in os.walk(basepath, topdown=True):
        # visit directories in a predictable order
        dirs.sort()
        dirs[:] = [d for d in dirs
                   if not _excluded(d, dirpath, patterns, absolute, relative)]
        pathlist.extend(os.path.join(dirpath, d) for d in dirs)

    return pathlist
