from typing import Optional

from pydantic import BaseModel


# ======================
# TOKEN SCHEMAS
# ======================

class TokenData(BaseModel):
    """Claims carried by the bearer token issued by the auth service"""
    user_id: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
