"""Typed-placeholder queries for MySQL.

(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__version__ = '1.0.0'

from .connection import *  # pylint: disable=wildcard-import
from .database import *    # pylint: disable=wildcard-import
from .exception import *   # pylint: disable=wildcard-import, redefined-builtin
from .result_set import *  # pylint: disable=wildcard-import
from .stats import *       # pylint: disable=wildcard-import
from .guard import *       # pylint: disable=wildcard-import
