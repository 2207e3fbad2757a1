"""Split query templates into literal and placeholder tokens.

(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['PLACEHOLDERS', 'PLACEHOLDER_RE', 'split_template',
           'count_placeholders', 'parse_template']

import re

from typing import List, Sequence  # pylint: disable=unused-import

from .exception import ArityMismatchError

# ?n identifier, ?s string, ?i integer, ?a IN list, ?u SET list, ?p parsed
PLACEHOLDERS = ('?n', '?s', '?i', '?a', '?u', '?p')
PLACEHOLDER_RE = re.compile(r'(\?[nsiuap])')


def split_template(template):
    # type: (str) -> List[str]
    """Return [literal, placeholder, literal, ..., literal] for TEMPLATE.

    Odd indexes always hold placeholders; literals may be empty strings.
    """
    return PLACEHOLDER_RE.split(template)


def count_placeholders(parts):
    # type: (Sequence[str]) -> int
    return len(parts) // 2


def parse_template(template, args):
    # type: (str, Sequence[object]) -> List[str]
    """Split TEMPLATE and check that ARGS supplies every placeholder.

    :raises ArityMismatchError: If the counts differ.
    """
    parts = split_template(template)
    want = count_placeholders(parts)
    if want != len(args):
        raise ArityMismatchError(len(args), want, template)
    return parts
