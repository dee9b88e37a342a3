# sfrest/api/resources.py
# Created: 2026-10-17

"""
Resource accessors handed out by a Connection.

Each accessor is scoped to one area of the API and keeps a reference to the
Connection that created it. Endpoint-specific calls live in the sub-clients
built on top of these types.
"""

from typing import TYPE_CHECKING, Dict, Type

if TYPE_CHECKING:
    from .connection import Connection

class ResourceAccessor:
    """Base type for every resource accessor"""

    name: str = ""

    def __init__(self, conn: "Connection"):
        self.conn = conn

    def __repr__(self) -> str:
        return f"{type(self).__name__}(conn={self.conn!r})"

class Audit(ResourceAccessor):
    """Audit log records"""
    name = "audit"

class Backup(ResourceAccessor):
    """Site backups"""
    name = "backup"

class Domains(ResourceAccessor):
    """Domains attached to sites"""
    name = "domains"

class Group(ResourceAccessor):
    """Site groups"""
    name = "group"

class Role(ResourceAccessor):
    """User roles"""
    name = "role"

class Site(ResourceAccessor):
    """Sites"""
    name = "site"

class Stage(ResourceAccessor):
    """Staging of sites between environments"""
    name = "stage"

class Task(ResourceAccessor):
    """Background tasks"""
    name = "task"

class Theme(ResourceAccessor):
    """Theme repository"""
    name = "theme"

class Update(ResourceAccessor):
    """Code and database updates"""
    name = "update"

class User(ResourceAccessor):
    """API users"""
    name = "user"

class Variable(ResourceAccessor):
    """Factory variables"""
    name = "variable"

# Accessor name is the lowercased type name.
RESOURCES: Dict[str, Type[ResourceAccessor]] = {
    klass.name: klass
    for klass in (
        Audit,
        Backup,
        Domains,
        Group,
        Role,
        Site,
        Stage,
        Task,
        Theme,
        Update,
        User,
        Variable,
    )
}

RESOURCE_NAMES = tuple(RESOURCES)
