"""Window-control permission check."""

from __future__ import annotations

import logging

from os_controller.base_controller import NativeBackend

PERMISSION_WARNING = "Accessibility permissions required"


class PermissionGuard:
    """Asks the backend whether windows may be moved and resized.

    Every call goes to the backend; nothing is cached. A failing query is
    reported as "not granted".
    """

    def __init__(self, backend: NativeBackend) -> None:
        self.backend = backend
        self.logger = logging.getLogger("framefit.permission")

    def check_permission(self) -> bool:
        try:
            return bool(self.backend.check_permission())
        except Exception as exc:
            self.logger.warning("Failed to check permissions: %s", exc)
            return False
