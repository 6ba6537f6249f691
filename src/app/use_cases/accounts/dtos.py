"""Data Transfer Objects for Account administration"""

from pydantic import BaseModel


class SetAdminRoleCommandDTO(BaseModel):
    is_admin: bool = True


class AccountRoleResponseDTO(BaseModel):
    account_id: str
    is_admin: bool
