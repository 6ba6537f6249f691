"""Request schemas for Account API"""

from pydantic import BaseModel


class SetAdminRoleRequestSchema(BaseModel):
    is_admin: bool = True
