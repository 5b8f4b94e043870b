"""Role checks for admin workflows."""

from campusmeal.domain.models import Session


class PermissionDenied(RuntimeError):
    """Raised when a non-admin session calls an admin workflow."""


def require_admin(session: Session) -> None:
    if not session.user.is_admin:
        raise PermissionDenied(f"User {session.user.id} with role '{session.user.role}' is not an administrator")
