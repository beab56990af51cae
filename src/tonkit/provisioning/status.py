"""Installation status notifications.

Resolvers report progress through a ``StatusSink``. Delivery is fire-and-forget:
a sink never influences the outcome of a resolution.
"""

from abc import ABC, abstractmethod
from enum import Enum

from tonkit.patterns import Obj


class InstallationStatus(str, Enum):
    """Progress states reported while provisioning a tool."""

    CHECKING_FOR_UPDATE = "checking_for_update"
    DOWNLOADING = "downloading"


class StatusSink(ABC):
    """One-way channel receiving provisioning status updates."""

    @abstractmethod
    def set_status(self, tool_id: str, status: InstallationStatus) -> None:
        """Record ``status`` for ``tool_id``."""


class LoggingStatusSink(Obj, StatusSink):
    """Sink that writes status updates to the tonkit log."""

    def set_status(self, tool_id: str, status: InstallationStatus) -> None:
        self.ctx.info("%s: %s", tool_id, status.value)


class RecordingStatusSink(StatusSink):
    """Sink that keeps every update in order, for hosts that poll."""

    def __init__(self) -> None:
        self.events: list[tuple[str, InstallationStatus]] = []

    def set_status(self, tool_id: str, status: InstallationStatus) -> None:
        self.events.append((tool_id, status))

    def statuses_for(self, tool_id: str) -> list[InstallationStatus]:
        return [status for tid, status in self.events if tid == tool_id]
