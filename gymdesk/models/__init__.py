"""Models package — import all models so metadata.create_all sees them."""

from gymdesk.models.gym import Gym
from gymdesk.models.role import Role
from gymdesk.models.permission import Permission, RolePermissionXref
from gymdesk.models.lookup import LookupType, Lookup
from gymdesk.models.user import User
from gymdesk.models.trainer import Trainer
from gymdesk.models.member_note import MemberNote
from gymdesk.models.notification import Notification
from gymdesk.models.attendance import AttendanceRecord
from gymdesk.models.support_ticket import SupportTicket
from gymdesk.models.audit_log import AuditLog

__all__ = [
    "Gym", "Role", "Permission", "RolePermissionXref",
    "LookupType", "Lookup", "User",
    "Trainer", "MemberNote", "Notification", "AttendanceRecord",
    "SupportTicket", "AuditLog",
]
