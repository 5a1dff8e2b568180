"""Online/offline state shared by the menu read path."""

import logging

logger = logging.getLogger(__name__)


class ConnectivityMonitor:
    """Holds the current connectivity flag reported by the host platform."""

    def __init__(self, initially_online: bool = True) -> None:
        self._online = initially_online

    @property
    def is_online(self) -> bool:
        return self._online

    @property
    def is_offline(self) -> bool:
        return not self._online

    def set_online(self, online: bool) -> None:
        """Update the connectivity flag, logging transitions.

        Args:
            online: Whether the network is reachable
        """
        if online != self._online:
            logger.info(f"Network status changed: {'online' if online else 'offline'}")
        self._online = online
