"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from geomonitor.models.user import User
from geomonitor.models.branch import Branch
from geomonitor.models.account import Account
from geomonitor.models.region import Region
from geomonitor.models.geoconfig import Geoconfig
from geomonitor.models.request import ProcessingRequest
from geomonitor.models.audit_log import AuditLog

__all__ = [
    "User",
    "Branch",
    "Account",
    "Region",
    "Geoconfig",
    "ProcessingRequest",
    "AuditLog",
]
