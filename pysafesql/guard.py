"""Helpers for sanitizing user input before it reaches a template.

(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['whitelist', 'filter_fields']

from typing import Any, Dict, Iterable, Mapping, Optional  # pylint: disable=unused-import


def whitelist(value, allowed, default=None):
    # type: (Any, Iterable[Any], Optional[Any]) -> Any
    """Return VALUE if it's one of ALLOWED, else DEFAULT.

    Use this for identifiers that come from users and end up in ?n where
    quoting alone isn't enough, such as an ORDER BY column:

        order = whitelist(request_order, ['name', 'price'], 'name')
        db.get_all("SELECT * FROM goods ORDER BY ?n", order)

    The element of ALLOWED is returned, not VALUE itself.
    """
    for candidate in allowed:
        if candidate == value:
            return candidate
    return default


def filter_fields(data, allowed):
    # type: (Mapping[str, Any], Iterable[str]) -> Dict[str, Any]
    """Return the entries of DATA whose keys are in ALLOWED.

    Guards ?u against mass assignment from request payloads.
    """
    allowed = set(allowed)
    return dict((key, value) for key, value in data.items() if key in allowed)
