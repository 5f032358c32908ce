"""
Capability table for role-based access control

Routes ask for a capability, never for a role directly.
"""
from typing import Dict, FrozenSet

from jobboard.models import Role

SEEKER = frozenset({Role.JOBSEEKER})
EMPLOYER = frozenset({Role.EMPLOYER})
ADMIN = frozenset({Role.ADMIN})
EVERYONE = frozenset(Role)

CAPABILITIES: Dict[str, FrozenSet[Role]] = {
    # Profile
    "profile:read": EVERYONE,
    "profile:write": EVERYONE,
    "profile:resume:upload": SEEKER,
    "profile:logo:upload": EMPLOYER,
    "users:profile:read": EVERYONE,
    "users:seeker-profile:read": EMPLOYER | ADMIN,
    "resumes:read-any": EMPLOYER | ADMIN,
    # Jobs
    "jobs:create": EMPLOYER,
    "jobs:delete": EMPLOYER,
    "jobs:report": EVERYONE,
    "employer:jobs:read": EMPLOYER,
    "employer:verification:request": EMPLOYER,
    # Applications
    "applications:create": SEEKER,
    "applications:read-own": EVERYONE,
    "applications:read-for-job": EMPLOYER,
    "applications:update-status": EMPLOYER,
    # Notifications
    "notifications:read": EVERYONE,
    # Administration
    "admin:jobs:review": ADMIN,
    "admin:employers:verify": ADMIN,
    "admin:stats:read": ADMIN,
    "admin:users:manage": ADMIN,
    "admin:reports:review": ADMIN,
}


def roles_for(capability: str) -> FrozenSet[Role]:
    """Roles granted a capability; unknown capabilities grant nothing"""
    return CAPABILITIES.get(capability, frozenset())


def has_capability(role: Role, capability: str) -> bool:
    return role in roles_for(capability)
