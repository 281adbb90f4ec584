from typing import Optional

from pydantic import BaseModel


class SetupStatusResponse(BaseModel):
    is_setup: bool
    medications_exists: bool
    logs_exists: bool
    needs_setup: bool


class SetupInitResponse(BaseModel):
    is_setup: bool
    already_setup: bool
    message: Optional[str] = None
