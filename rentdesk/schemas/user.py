from typing import Optional

from pydantic import BaseModel


class UserSummary(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    role: str = "customer"  # customer | admin
