import pytest

from problem_details import errors, problem


class TestValidationError:

    def test_init(self):
        err = errors.ValidationError('status', 'out of range')

        assert err.field == 'status'
        assert err.reason == 'out of range'
        assert str(err) == "invalid problem member 'status': out of range"

    def test_hierarchy(self):
        err = errors.ValidationError('type', 'must not be empty')

        assert isinstance(err, errors.ProblemError)
        assert isinstance(err, ValueError)


class TestParseError:

    def test_init(self):
        err = errors.ParseError('bad document')

        assert str(err) == 'bad document'
        assert err.errors == []
        assert err.lineno is None
        assert err.colno is None

    def test_init_context(self):
        err = errors.ParseError(
            'bad document',
            errors=[{'loc': ['status'], 'msg': 'not an int', 'type': 'int_type'}],
            lineno=2,
            colno=5,
        )

        assert err.errors == [{'loc': ['status'], 'msg': 'not an int', 'type': 'int_type'}]
        assert err.lineno == 2
        assert err.colno == 5
        assert isinstance(err, errors.ProblemError)


class TestProblemException:

    @pytest.mark.parametrize('p,expected', [
        (problem.Problem(title='Not Found', detail='user 42 does not exist', status=404),
         'Not Found: user 42 does not exist (code: 404)'),
        (problem.Problem(title='Not Found', status=404), 'Not Found (code: 404)'),
        (problem.Problem(detail='user 42 does not exist'), 'user 42 does not exist'),
        (problem.Problem(title='Not Found', detail='missing'), 'Not Found: missing'),
        (problem.Problem(status=500), '(code: 500)'),
    ])
    def test_message(self, p, expected):
        exc = errors.ProblemException(p)

        assert str(exc) == expected
        assert exc.problem is p

    def test_message_empty(self):
        exc = errors.ProblemException(problem.Problem(type='urn:problem:unknown'))

        assert str(exc) == ''
        assert exc.args == ()

    def test_explicit_message(self):
        exc = errors.ProblemException(problem.from_status(404), 'lookup failed')
        assert str(exc) == 'lookup failed'

    def test_raise_with_cause(self):
        p = problem.from_status(503)

        with pytest.raises(errors.ProblemException) as e:
            try:
                raise ConnectionError('upstream unavailable')
            except ConnectionError as cause:
                raise errors.ProblemException(p) from cause

        assert e.value.problem == p
        assert isinstance(e.value.__cause__, ConnectionError)
        assert str(e.value) == 'Service Unavailable (code: 503)'
