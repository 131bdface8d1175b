from typing import Optional
from pydantic import BaseModel


class Token(BaseModel):
    access_token: str
    token_type: str
    role: Optional[str] = None  # None until an admin assigns a back-office role
