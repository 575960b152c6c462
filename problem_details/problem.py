"""The RFC7807 Problem value type, its builder, and its JSON mapping.

For details on the Problem format, see: https://tools.ietf.org/html/rfc7807
"""

import copy
import http
import json
import logging
import math
from typing import Any, Dict, Hashable, Mapping, Optional, Union

import pydantic

from . import schema, status as status_codes
from .errors import ParseError, ValidationError

logger = logging.getLogger(__name__)

BLANK_TYPE = 'about:blank'
MEDIA_TYPE = 'application/problem+json'
RESERVED_MEMBERS = frozenset(('type', 'title', 'status', 'detail', 'instance'))


class Problem:
    """An RFC 7807 Problem.

    This models a "problem" as defined in RFC 7807 (https://tools.ietf.org/html/rfc7807).
    A Problem is an immutable value: once created, none of its members can be
    changed. To derive a Problem from another one, use `to_builder()`, override
    what needs to change, and build a new value.

    Problems are usually created with a ProblemBuilder (see `new_builder()`),
    but the constructor performs the same validation, so a Problem which
    exists is always valid.

    Args:
        type: URI reference identifying the problem type. Defaults to "about:blank".
        title: Short, human-readable summary of the problem type.
        status: The HTTP status code (100-599).
        detail: Human-readable explanation specific to this occurrence.
        instance: URI reference identifying this occurrence.
        extensions: Additional problem-specific members. Values must be
            JSON-compatible.

    Raises:
        ValidationError: One of the members is invalid.
    """

    __slots__ = ('type', 'title', 'status', 'detail', 'instance', '_extensions', '_hash')

    def __init__(
            self,
            type: Optional[str] = None,
            title: Optional[str] = None,
            status: Optional[int] = None,
            detail: Optional[str] = None,
            instance: Optional[str] = None,
            extensions: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if type is None:
            type = BLANK_TYPE
        elif not isinstance(type, str):
            raise ValidationError('type', f'expected a string, got {_kind(type)}')
        elif not type:
            raise ValidationError('type', 'must not be empty')

        _check_text('title', title)
        _check_text('detail', detail)
        _check_text('instance', instance)

        if status is not None:
            if not status_codes.is_valid(status):
                raise ValidationError(
                    'status',
                    f'expected an integer from {status_codes.MIN_STATUS} to '
                    f'{status_codes.MAX_STATUS}, got {status!r}',
                )
            # Drop IntEnum (e.g. http.HTTPStatus) identity, keep the number.
            status = int(status)

        ext = {}
        for name, value in (extensions or {}).items():
            if not isinstance(name, str) or not name:
                raise ValidationError(str(name), 'extension names must be non-empty strings')
            if name in RESERVED_MEMBERS:
                raise ValidationError(name, 'reserved member name cannot be used as an extension')
            ext[name] = _normalize(name, value)

        object.__setattr__(self, 'type', type)
        object.__setattr__(self, 'title', title)
        object.__setattr__(self, 'status', status)
        object.__setattr__(self, 'detail', detail)
        object.__setattr__(self, 'instance', instance)
        object.__setattr__(self, '_extensions', ext)
        object.__setattr__(self, '_hash', None)

    @property
    def extensions(self) -> Dict[str, Any]:
        """The extension members, in the order they were added.

        A copy is returned on every access, so changing it has no effect on
        the Problem.
        """
        return copy.deepcopy(self._extensions)

    def has_extension(self, name: str) -> bool:
        return name in self._extensions

    def get_extension(self, name: str, default: Any = None) -> Any:
        """Get the value of a single extension member, or `default` if it is not set."""
        if name not in self._extensions:
            return default
        return copy.deepcopy(self._extensions[name])

    def to_builder(self) -> 'ProblemBuilder':
        """Get a builder seeded with all members of this Problem.

        This is the way to "modify" a Problem, e.g. to add an `instance`
        once the request ID is known:

            problem = not_found.to_builder().instance(f'/requests/{req_id}').build()

        Returns:
            A new ProblemBuilder. Changes made to it do not affect this Problem.
        """
        return ProblemBuilder(self)

    def to_dict(self) -> Dict[str, Any]:
        """Get a dictionary representation of the Problem.

        The RFC7807 members come first, in the order type, title, status,
        detail, instance, and only if they are set. Extension members follow
        at the top level, in the order they were added.

        Returns:
            A dictionary representation of the Problem. This can be serialized
            out to JSON and used as a response body.
        """
        d: Dict[str, Any] = {'type': self.type}
        if self.title is not None:
            d['title'] = self.title
        if self.status is not None:
            d['status'] = self.status
        if self.detail is not None:
            d['detail'] = self.detail
        if self.instance is not None:
            d['instance'] = self.instance

        d.update(self.extensions)
        return d

    def to_json(self, debug: bool = False) -> str:
        """Render the Problem as a JSON document.

        Args:
            debug: Pretty-print the JSON, making it easier for humans to read
                while debugging. Otherwise the output is compact.

        Returns:
            The JSON document representing the Problem.
        """
        if debug:
            return json.dumps(
                self.to_dict(),
                ensure_ascii=False,
                allow_nan=False,
                indent=2,
            )
        else:
            return json.dumps(
                self.to_dict(),
                ensure_ascii=False,
                allow_nan=False,
                indent=None,
                separators=(',', ':'),
            )

    def to_bytes(self, debug: bool = False) -> bytes:
        """Render the Problem as UTF-8 encoded JSON bytes.

        Args:
            debug: Pretty-print the JSON (see `to_json`).

        Returns:
            The JSON-serialized bytes representing the Problem.
        """
        return self.to_json(debug=debug).encode('utf-8')

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"cannot set '{name}': Problem is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"cannot delete '{name}': Problem is immutable")

    def __reduce__(self):
        return (
            self.__class__,
            (self.type, self.title, self.status, self.detail, self.instance, self._extensions),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Problem):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        if self._hash is None:
            object.__setattr__(self, '_hash', hash(self._key()))
        return self._hash

    def __str__(self) -> str:
        return str(f'Problem:<{self.to_dict()}>')

    def __repr__(self) -> str:
        return str(self)

    def _key(self) -> tuple:
        return (self.type, self.title, self.status, self.detail, self.instance, _freeze(self._extensions))


class ProblemBuilder:
    """A builder which accumulates members and creates a Problem.

    Setters return the builder so that calls can be chained. Nothing is
    validated until `build()` is called, and the order of the calls does not
    matter. Passing None to a member setter unsets the member.

    A builder is meant to be filled in by a single thread and then built.
    It can be built more than once; every build creates an independent value.

    Args:
        problem: An existing Problem to seed the builder with.
    """

    def __init__(self, problem: Optional[Problem] = None) -> None:
        self._type: Optional[str] = None
        self._title: Optional[str] = None
        self._status: Optional[int] = None
        self._detail: Optional[str] = None
        self._instance: Optional[str] = None
        self._extensions: Dict[str, Any] = {}

        if problem is not None:
            self._type = problem.type
            self._title = problem.title
            self._status = problem.status
            self._detail = problem.detail
            self._instance = problem.instance
            self._extensions = problem.extensions

    def type(self, uri: Optional[str]) -> 'ProblemBuilder':
        self._type = uri
        return self

    def title(self, title: Optional[str]) -> 'ProblemBuilder':
        self._title = title
        return self

    def status(self, status: Optional[Union[int, http.HTTPStatus]]) -> 'ProblemBuilder':
        self._status = status
        return self

    def detail(self, detail: Optional[str]) -> 'ProblemBuilder':
        self._detail = detail
        return self

    def instance(self, uri: Optional[str]) -> 'ProblemBuilder':
        self._instance = uri
        return self

    def extension(self, name: str, value: Any) -> 'ProblemBuilder':
        """Set an extension member, replacing any previous value for the name."""
        self._extensions[name] = value
        return self

    def extensions(self, members: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> 'ProblemBuilder':
        """Set several extension members at once.

        Args:
            members: A mapping of extension names to values.
            kwargs: Extension members given as keyword arguments. These are
                applied after `members`.
        """
        if members:
            self._extensions.update(members)
        self._extensions.update(kwargs)
        return self

    def remove_extension(self, name: str) -> 'ProblemBuilder':
        self._extensions.pop(name, None)
        return self

    def build(self) -> Problem:
        """Create the Problem.

        Raises:
            ValidationError: A member is invalid, e.g. the status is outside
                of 100-599, the type is an empty string, or an extension uses
                a reserved member name.
        """
        return Problem(
            type=self._type,
            title=self._title,
            status=self._status,
            detail=self._detail,
            instance=self._instance,
            extensions=self._extensions,
        )


def new_builder() -> ProblemBuilder:
    """Get a new, empty ProblemBuilder."""
    return ProblemBuilder()


def from_status(
        status: Union[int, http.HTTPStatus],
        detail: Optional[str] = None,
        instance: Optional[str] = None,
) -> Problem:
    """Create a new Problem for an HTTP status code.

    The title is the standard reason phrase of the status code, if it has one.
    Problems like this are typically created once and shared, e.g.

        NOT_FOUND = from_status(404)

    Args:
        status: The HTTP status code.
        detail: Human-readable explanation specific to this occurrence.
        instance: URI reference identifying this occurrence.

    Returns:
        A new Problem with the "about:blank" type.

    Raises:
        ValidationError: The status code is outside of 100-599.
    """
    title = status_codes.reason_phrase(status) if status_codes.is_valid(status) else None
    return (
        new_builder()
        .title(title)
        .status(status)
        .detail(detail)
        .instance(instance)
        .build()
    )


def from_dict(data: Mapping[str, Any]) -> Problem:
    """Create a new Problem instance from a dictionary.

    The RFC7807 members of the dictionary are mapped to the Problem's members
    and all other members are kept as extensions. A missing (or null) `type`
    defaults to "about:blank", just as it does when building a Problem.

    Args:
        data: The dictionary to convert into a Problem, e.g. a decoded
            application/problem+json document.

    Returns:
        A new Problem instance populated from the dictionary fields.

    Raises:
        ParseError: The data is not a JSON object, a known member has the
            wrong type, the data is nested too deeply, or it does not
            describe a valid Problem.
    """
    if not isinstance(data, Mapping):
        logger.debug('rejecting problem document: not an object (%s)', _kind(data))
        raise ParseError(f'problem document must be a JSON object, got {_kind(data)}')

    for key in data:
        if not isinstance(key, str):
            raise ParseError(f'problem document member names must be strings, got {key!r}')

    try:
        doc = schema.Problem.model_validate(dict(data))
    except RecursionError as e:
        raise _too_deep() from e
    except pydantic.ValidationError as e:
        errors = [
            {'loc': list(err['loc']), 'msg': err['msg'], 'type': err['type']}
            for err in e.errors()
        ]
        logger.debug('rejecting problem document: %s', errors)
        raise ParseError(_summarize(errors), errors=errors) from e

    try:
        return Problem(
            type=doc.type,
            title=doc.title,
            status=doc.status,
            detail=doc.detail,
            instance=doc.instance,
            extensions=doc.model_extra,
        )
    except RecursionError as e:
        raise _too_deep() from e
    except ValidationError as e:
        logger.debug('rejecting problem document: %s', e)
        raise ParseError(
            str(e),
            errors=[{'loc': [e.field], 'msg': e.reason, 'type': 'value_error'}],
        ) from e


def from_json(data: Union[str, bytes, bytearray]) -> Problem:
    """Create a new Problem instance from a JSON document.

    Args:
        data: The application/problem+json document.

    Returns:
        A new Problem instance populated from the document.

    Raises:
        ParseError: The input is not text, is not valid JSON (including JSON
            nested too deeply to decode), or does not describe a valid
            Problem (see `from_dict`).
    """
    if not isinstance(data, (str, bytes, bytearray)):
        logger.debug('rejecting problem document: not text (%s)', _kind(data))
        raise ParseError(f'problem document must be str, bytes or bytearray, got {_kind(data)}')

    try:
        decoded = json.loads(data)
    except json.JSONDecodeError as e:
        logger.debug('rejecting problem document: invalid JSON: %s', e)
        raise ParseError(f'invalid JSON: {e.msg}', lineno=e.lineno, colno=e.colno) from e
    except UnicodeDecodeError as e:
        raise ParseError(f'invalid JSON: {e}') from e
    except RecursionError as e:
        raise _too_deep() from e

    return from_dict(decoded)


def _check_text(field: str, value: Any) -> None:
    if value is not None and not isinstance(value, str):
        raise ValidationError(field, f'expected a string, got {_kind(value)}')


def _normalize(name: str, value: Any) -> Any:
    """Copy an extension value into plain JSON types (dict, list, str, ...)."""
    if value is None:
        return value
    # Plain types only; json.dumps renders subclasses (IntEnum, ...) as their base.
    if isinstance(value, bool):
        return bool(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, str):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError(name, f'{value!r} is not representable in JSON')
        return float(value)
    if isinstance(value, Mapping):
        d = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise ValidationError(name, f'object keys must be strings, got {k!r}')
            d[k] = _normalize(name, v)
        return d
    if isinstance(value, (list, tuple)):
        return [_normalize(name, v) for v in value]
    raise ValidationError(name, f'{_kind(value)} is not a JSON-compatible value')


def _freeze(value: Any) -> Hashable:
    """Get a hashable key which is equal only for values with the same JSON rendering.

    Numbers are tagged with their type, so true, 1 and 1.0 stay distinct,
    and floats are keyed on their repr, so 0.0 and -0.0 do too.
    """
    if isinstance(value, dict):
        return frozenset((k, _freeze(v)) for k, v in value.items())
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, float):
        return (float, repr(value))
    if isinstance(value, (bool, int)):
        return (type(value), value)
    return value


def _too_deep() -> ParseError:
    logger.debug('rejecting problem document: nested too deeply')
    return ParseError('problem document is nested too deeply')


def _kind(value: Any) -> str:
    return type(value).__name__


def _summarize(errors: list) -> str:
    parts = []
    for err in errors:
        loc = '.'.join(str(p) for p in err['loc'])
        parts.append(f'{loc}: {err["msg"]}' if loc else err['msg'])
    return 'invalid problem document: ' + '; '.join(parts)
