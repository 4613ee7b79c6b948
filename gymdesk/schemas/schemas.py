"""Pydantic schemas for API request/response serialization."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict
from datetime import date, datetime

from gymdesk.core.constants import LevelEnum


# ---- Common ----
class MessageResponse(BaseModel):
    message: str


# ---- Auth ----
class LoginRequest(BaseModel):
    email: str = Field(..., min_length=4)
    password: str = Field(..., min_length=4)

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: Optional[Dict[str, object]] = None


# ---- User ----
class UserOut(BaseModel):
    id: int
    email: str
    full_name: str
    role: Optional[str] = None
    gym_id: Optional[int] = None
    status: str
    created_at: Optional[datetime] = None


class UserCreateRequest(BaseModel):
    email: str = Field(..., min_length=4)
    password: str = Field(..., min_length=8)
    full_name: str = Field(..., min_length=1)
    role: str = Field(..., min_length=2)


# ---- Gym ----
class GymCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=2, max_length=255, pattern=r"^[a-z0-9][a-z0-9-]*$")
    email: Optional[str] = None

class GymOut(BaseModel):
    id: int
    name: str
    slug: str
    email: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ---- Role ----
class RoleCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=50, pattern=r"^[A-Za-z][A-Za-z0-9_]*$")
    label: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    level: LevelEnum
    sort_order: int = 0
    is_system: bool = False

class RoleUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=50, pattern=r"^[A-Za-z][A-Za-z0-9_]*$")
    label: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    sort_order: Optional[int] = None

class RoleOut(BaseModel):
    id: int
    name: str
    code: str
    label: str
    description: Optional[str] = None
    level: LevelEnum
    sort_order: int
    is_system: bool
    is_archived: bool
    archived_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ---- Permission ----
class PermissionCreate(BaseModel):
    code: str = Field(..., min_length=2, max_length=100)
    name: str = Field(..., min_length=1)
    module: str = Field(..., min_length=1)
    description: Optional[str] = None
    level: LevelEnum = LevelEnum.gym

class PermissionUpdate(BaseModel):
    name: Optional[str] = None
    module: Optional[str] = None
    description: Optional[str] = None
    level: Optional[LevelEnum] = None
    is_active: Optional[bool] = None

class PermissionOut(BaseModel):
    id: int
    code: str
    name: str
    module: str
    description: Optional[str] = None
    level: LevelEnum
    is_active: bool

    model_config = ConfigDict(from_attributes=True)

class RolePermissionsAssign(BaseModel):
    permission_codes: List[str]


# ---- Lookup ----
class LookupTypeCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None

class LookupTypeUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

class LookupCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1)
    value: Optional[str] = None
    display_order: int = 0

class LookupUpdate(BaseModel):
    name: Optional[str] = None
    value: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None

class LookupOut(BaseModel):
    id: int
    lookup_type_id: int
    code: str
    name: str
    value: Optional[str] = None
    display_order: int
    is_active: bool

    model_config = ConfigDict(from_attributes=True)

class LookupTypeOut(BaseModel):
    id: int
    code: str
    name: str
    description: Optional[str] = None
    is_active: bool
    lookups: List[LookupOut] = []

    model_config = ConfigDict(from_attributes=True)


# ---- Trainer ----
class TrainerCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    specialization: Optional[str] = None
    experience_years: Optional[int] = Field(None, ge=0)
    user_id: Optional[int] = None

class TrainerUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    specialization: Optional[str] = None
    experience_years: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None

class TrainerOut(BaseModel):
    id: int
    gym_id: int
    user_id: Optional[int] = None
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    specialization: Optional[str] = None
    experience_years: Optional[int] = None
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ---- Member notes ----
class NoteCreate(BaseModel):
    member_id: int
    content: str = Field(..., min_length=1)
    category: str = "general"
    is_pinned: bool = False

class NoteUpdate(BaseModel):
    content: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    is_pinned: Optional[bool] = None

class NoteOut(BaseModel):
    id: int
    gym_id: int
    member_id: int
    author_id: int
    category: str
    content: str
    is_pinned: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ---- Notification ----
class NotificationCreate(BaseModel):
    user_id: int
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    type: str = "general"

class NotificationOut(BaseModel):
    id: int
    gym_id: int
    user_id: int
    type: str
    title: str
    message: str
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ---- Attendance ----
class MarkAttendanceRequest(BaseModel):
    user_id: int
    check_in_method: str = "manual"

class AttendanceOut(BaseModel):
    id: int
    gym_id: int
    user_id: int
    marked_by: Optional[int] = None
    date: date
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    check_in_method: str

    model_config = ConfigDict(from_attributes=True)


# ---- Support ----
class TicketCreate(BaseModel):
    subject: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category: str = "general"
    priority: str = "medium"

class TicketUpdate(BaseModel):
    status: Optional[str] = None
    priority: Optional[str] = None
    assigned_to: Optional[int] = None

class TicketOut(BaseModel):
    id: int
    gym_id: int
    user_id: int
    subject: str
    description: str
    category: str
    priority: str
    status: str
    assigned_to: Optional[int] = None
    resolved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ---- Reports ----
class ReportSummary(BaseModel):
    gym_id: Optional[int] = None
    scope: str
    total_members: int
    total_trainers: int
    attendance_today: int
    open_tickets: int


# ---- Audit ----
class AuditLogOut(BaseModel):
    id: int
    actor_id: Optional[int] = None
    actor_email: Optional[str] = None
    actor_role: Optional[str] = None
    action: str
    resource_type: str
    resource_id: Optional[str] = None
    old_value_json: Optional[str] = None
    new_value_json: Optional[str] = None
    request_id: Optional[str] = None
    ip_address: Optional[str] = None
    gym_id: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
