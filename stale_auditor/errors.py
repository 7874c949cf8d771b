"""Exception hierarchy for issue auditing."""


class StaleAuditorError(Exception):
    """Base class for all auditor errors."""


class RequestError(StaleAuditorError):
    """A request to GitHub did not produce usable data."""


class IssueNotFoundError(RequestError):
    """The queried issue does not exist."""

    def __init__(self, issue_number: int):
        self.issue_number = issue_number
        super().__init__(f"Issue #{issue_number} not found.")


class GraphQLError(RequestError):
    """The GraphQL endpoint answered with structured errors."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(f"GraphQL Error: {message}")


class TransportError(RequestError):
    """HTTP or network failure talking to GitHub."""


class MaintainerFetchError(StaleAuditorError):
    """Maintainers could not be verified; no issue can be classified."""
