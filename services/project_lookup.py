# FILE: services/project_lookup.py
"""
Project lookup collaborator.

Read-only, case-insensitive name search that returns at most one project.
"""

from typing import Any, Optional, Protocol

from core.intent import ProjectRef


class ProjectLookup(Protocol):
    async def find_project_by_name(self, name: str) -> Optional[ProjectRef]:
        ...


class PrismaProjectLookup:
    """
    Looks projects up in the `projects` table through a connected Prisma client.
    Substring match first, exact match as the second alternative.
    """

    def __init__(self, db: Any):
        self.db = db

    async def find_project_by_name(self, name: str) -> Optional[ProjectRef]:
        project = await self.db.project.find_first(
            where={
                "OR": [
                    {"title": {"contains": name, "mode": "insensitive"}},
                    {"title": {"equals": name, "mode": "insensitive"}},
                ]
            }
        )
        if project is None:
            return None
        return ProjectRef(id=str(project.id), title=project.title)
