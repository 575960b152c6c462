"""
An example showcasing problem_details with debug (pretty-printed) output,
and reading a Problem back from JSON.

Run from the repository root with:
    $ python examples/debug.py
"""

from problem_details import ParseError, from_json

problem = from_json('{"title":"Not Found","status":404,"customField":"x"}')
print(problem.to_json(debug=True))

try:
    from_json('{"title":"Not Found","status":"404"}')
except ParseError as e:
    print(e)


# Output:
#
# $ python examples/debug.py
# {
#   "type": "about:blank",
#   "title": "Not Found",
#   "status": 404,
#   "customField": "x"
# }
# invalid problem document: status: Input should be a valid integer
