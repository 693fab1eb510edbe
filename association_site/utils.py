"""
Request Utilities

Helpers shared by the JSON blueprints.
"""

from flask import request


def json_body():
    """The request's JSON object, or an empty dict for anything else.

    Arrays, scalars and unparsable bodies all come back as {}, so the
    route's own required-field checks answer them with a 400.
    """
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}
