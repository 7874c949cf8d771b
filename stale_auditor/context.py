"""Per-run state shared by every issue processed in one audit."""

from dataclasses import dataclass, field


@dataclass
class ApiCallCounter:
    """Increment-only count of outbound GitHub requests."""

    count: int = 0

    def increment(self) -> None:
        self.count += 1


@dataclass
class AuditRunContext:
    """State created at the start of a run and discarded at its end.

    Holds the maintainer cache and the API-call counter. Both are safe to
    share between tasks on one event loop: the cache is written as an
    immutable tuple (a racing duplicate fetch overwrites it with the same
    value) and the counter only ever increments.
    """

    api_calls: ApiCallCounter = field(default_factory=ApiCallCounter)
    maintainers: tuple[str, ...] | None = None

    @property
    def has_maintainers(self) -> bool:
        return self.maintainers is not None

    def cache_maintainers(self, logins: list[str]) -> tuple[str, ...]:
        self.maintainers = tuple(logins)
        return self.maintainers
