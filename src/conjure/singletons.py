"""Cache of singleton instances, keyed by alias."""

from typing import Any


class SingletonCache:
    """At most one instance per alias, created on the first successful load."""

    def __init__(self):
        self._instances: dict[str, Any] = {}

    def __contains__(self, alias: str) -> bool:
        return alias in self._instances

    def __getitem__(self, alias: str) -> Any:
        return self._instances[alias]

    def __len__(self) -> int:
        return len(self._instances)

    def store(self, alias: str, instance: Any) -> None:
        self._instances[alias] = instance

    def discard(self, alias: str) -> None:
        self._instances.pop(alias, None)

    def clear(self) -> None:
        self._instances.clear()
