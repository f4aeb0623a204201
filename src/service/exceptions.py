"""
Errors raised by the session service.
"""


class InvalidGameError(Exception):
    """The request does not fit the state of the targeted game."""


class InvalidParamError(Exception):
    """The request refers to something that does not exist."""
