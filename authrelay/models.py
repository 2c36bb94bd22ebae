from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Any, Optional


class UserRecord(BaseModel):
    name: str
    email: str
    # older user files store the hash under "password"
    password_hash: str = Field(validation_alias=AliasChoices("password_hash", "password"))


class ActionReq(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # field types are checked per action
    action: Optional[str] = None
    email: Any = None
    password: Any = None
    name: Any = None
    token: Any = None
    message: Any = None


class ActionResp(BaseModel):
    success: bool
    message: Optional[str] = None
    token: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    answer: Optional[str] = None

    def to_body(self) -> dict:
        return self.model_dump(exclude_none=True)
