"""Errors raised while building, parsing, and raising RFC7807 Problems."""

from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from .problem import Problem


class ProblemError(Exception):
    """Base class for errors raised by the problem_details package."""


class ValidationError(ProblemError, ValueError):
    """A Problem could not be built because one of its members is invalid.

    Raised by the builder (and the Problem constructor) before any value
    exists, so a Problem which has been created is always valid.

    Args:
        field: The name of the offending member. For extension members this
            is the extension name.
        reason: A short description of what is wrong with the member.
    """

    def __init__(self, field: str, reason: str) -> None:
        self.field: str = field
        self.reason: str = reason
        super(ValidationError, self).__init__(f"invalid problem member '{field}': {reason}")


class ParseError(ProblemError, ValueError):
    """A document could not be read as an RFC7807 Problem.

    Args:
        message: A summary of the failure.
        errors: Per-member failures, each a dictionary with `loc`, `msg`
            and `type` keys.
        lineno: The line of the JSON syntax error, if the input was not JSON.
        colno: The column of the JSON syntax error, if the input was not JSON.
    """

    def __init__(
            self,
            message: str,
            errors: Optional[List[Dict[str, Any]]] = None,
            lineno: Optional[int] = None,
            colno: Optional[int] = None,
    ) -> None:
        self.errors: List[Dict[str, Any]] = errors or []
        self.lineno: Optional[int] = lineno
        self.colno: Optional[int] = colno
        super(ParseError, self).__init__(message)


class ProblemException(Exception):
    """An exception which carries a Problem.

    Application code raises this to abort an operation with a fully described
    problem; whatever layer catches it can render `exc.problem` as the error
    response body.

    If no message is given, one is derived from the Problem's title, detail
    and status, e.g. "Not Found: user 42 does not exist (code: 404)".
    """

    def __init__(self, problem: 'Problem', message: Optional[str] = None) -> None:
        self.problem: 'Problem' = problem
        if message is None:
            message = _describe(problem)
        super(ProblemException, self).__init__(*([message] if message else []))


def _describe(problem: 'Problem') -> str:
    msg = ''
    if problem.title is not None:
        msg += problem.title
    if problem.detail is not None:
        if msg:
            msg += ': '
        msg += problem.detail
    if problem.status is not None:
        if msg:
            msg += ' '
        msg += f'(code: {problem.status})'
    return msg
