from typing import Dict

from actracker.core.types import HostPlatform


def get_user_counts(host: HostPlatform) -> Dict[str, int]:
    """User totals, overall and per role."""
    counts = host.count_users()

    user_count = {"total": counts.total_users}
    for role, count in (counts.avail_roles or {}).items():
        user_count[role] = count

    return user_count
