from typing import Protocol, TypeVar

T_co = TypeVar("T_co", covariant=True)


class Collector(Protocol[T_co]):
    """A protocol for classes that collect information from a repository."""

    async def collect(self) -> T_co:
        """Collects information and returns it."""
        ...
