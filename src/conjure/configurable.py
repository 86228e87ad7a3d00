"""The opt-in capability for receiving a property map after construction."""

from typing import Any, Mapping, Optional

__all__ = ["Configurable"]


class Configurable:
    """Base class for objects the container can configure with a property map.

    Configuration is two-phase: properties are assigned first, then :meth:`init`
    runs. Subclasses that define their own constructor should accept a trailing
    ``config`` parameter defaulting to None and pass it on to this one; the
    container fills that parameter with the merged property overrides.

    Example:
        >>> class Mailer(Configurable):
        ...     host = "localhost"
        ...
        ...     def __init__(self, transport: Transport, config: Optional[dict] = None):
        ...         self.transport = transport
        ...         super().__init__(config)
    """

    def __init__(self, config: Optional[Mapping[str, Any]] = None):
        self.configure(config or {})

    def configure(self, properties: Mapping[str, Any]) -> None:
        """Apply ``properties`` and run the initialisation hook."""
        self.set_properties(properties)
        self.init()

    def set_properties(self, properties: Mapping[str, Any]) -> None:
        # setattr goes through property setters where a class defines them
        for name, value in properties.items():
            setattr(self, name, value)

    def init(self) -> None:
        """Hook invoked after every property assignment."""
        pass
