from typing import Protocol, runtime_checkable


@runtime_checkable
class Storage(Protocol):
    """Template storage used by the updater.

    Implementations signal failures through return values, never by raising:
    the updater turns them into its own errors.
    """

    def load(self, name: str) -> str | None:
        """Return the template contents, or None when it does not exist."""
        ...

    def save(self, name: str, content: str) -> bool:
        """Write the template contents; return False on failure."""
        ...

    def rename(self, old_name: str, new_name: str) -> bool:
        """Rename a template; return False on failure."""
        ...
