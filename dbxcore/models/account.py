"""
dbxcore - Account Models

Pydantic models for the reply of account/info.
"""

from pydantic import BaseModel, ConfigDict


class QuotaInfo(BaseModel):
    """Quota usage in bytes"""
    model_config = ConfigDict(frozen=True)

    shared: int = 0
    quota: int = 0
    normal: int = 0


class Account(BaseModel):
    """Information about the authenticated user account"""
    model_config = ConfigDict(frozen=True)

    referral_link: str = ""
    display_name: str = ""
    uid: int = 0
    country: str = ""
    quota_info: QuotaInfo = QuotaInfo()
