"""
A basic example showcasing problem_details

Run from the repository root with:
    $ python examples/basic.py
"""

from problem_details import ProblemException, from_status, new_builder

# Problems are immutable, so common ones can be created once and shared.
NOT_FOUND = from_status(404)


class OutOfCredit(ProblemException):
    """An example of how to raise a Problem from application code."""

    def __init__(self, balance: int, cost: int) -> None:
        super(OutOfCredit, self).__init__(
            new_builder()
            .type('https://example.com/probs/out-of-credit')
            .title('You do not have enough credit.')
            .status(403)
            .detail(f'Your current balance is {balance}, but that costs {cost}.')
            .extension('balance', balance)
            .build()
        )


def purchase(balance: int, cost: int) -> None:
    if cost > balance:
        raise OutOfCredit(balance, cost)


try:
    purchase(30, 50)
except ProblemException as e:
    print(e.problem.to_json())

print(NOT_FOUND.to_builder().instance('/items/42').build().to_json())


# Output:
#
# $ python examples/basic.py
# {"type":"https://example.com/probs/out-of-credit","title":"You do not have enough credit.","status":403,"detail":"Your current balance is 30, but that costs 50.","balance":30}
# {"type":"about:blank","title":"Not Found","status":404,"instance":"/items/42"}
