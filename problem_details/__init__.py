"""RFC7807 Problem Details model with a validating builder and JSON mapping.

For details on the Problem format, see: https://tools.ietf.org/html/rfc7807
"""

import logging

from .errors import ParseError, ProblemError, ProblemException, ValidationError
from .problem import (BLANK_TYPE, MEDIA_TYPE, RESERVED_MEMBERS, Problem,
                      ProblemBuilder, from_dict, from_json, from_status,
                      new_builder)

__title__ = 'problem-details'
__version__ = '0.1.0'
__description__ = 'Immutable RFC7807 Problem model with a validating builder and JSON mapping'
__author__ = 'Problem Details Maintainers'
__license__ = 'GNU General Public License v3.0'

__all__ = [
    'BLANK_TYPE',
    'MEDIA_TYPE',
    'RESERVED_MEMBERS',
    'ParseError',
    'Problem',
    'ProblemBuilder',
    'ProblemError',
    'ProblemException',
    'ValidationError',
    'from_dict',
    'from_json',
    'from_status',
    'new_builder',
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
