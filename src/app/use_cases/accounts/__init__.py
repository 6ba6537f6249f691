"""Account administration use cases"""
from .grant_admin import GrantAdmin
from .dtos import AccountRoleResponseDTO, SetAdminRoleCommandDTO

__all__ = [
    "GrantAdmin",
    "AccountRoleResponseDTO",
    "SetAdminRoleCommandDTO",
]
