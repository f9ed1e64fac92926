"""BaseService — foundation for all sixdegrees services.

Every service receives a :class:`Workspace` at construction time. The
workspace provides the catalog, adjacency provider, and path cache.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sixdegrees.config.settings import SixSettings
    from sixdegrees.infrastructure.workspace import Workspace


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class PathService(BaseService):
            def find_shortest_path(self, from_id: int, to_id: int) -> ServiceResult:
                cached = self._workspace.cache.lookup(from_id, to_id)
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    @property
    def _settings(self) -> SixSettings:
        return self._workspace.settings
