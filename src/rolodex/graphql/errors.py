"""
GraphQL error types surfaced to API clients
"""

from graphql import GraphQLError


class UserInputError(GraphQLError):
    """Rejected input; carries every violation found, not just the first."""

    def __init__(self, message: str, errors: list[str]):
        super().__init__(message, extensions={"code": "BAD_USER_INPUT", "errors": list(errors)})
        self.errors = list(errors)


class AuthenticationRequiredError(GraphQLError):
    """The operation needs a signed-in caller."""

    def __init__(self, message: str = "You must be signed in"):
        super().__init__(message, extensions={"code": "UNAUTHENTICATED"})
