from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ForwardResult(BaseModel):
    """Reply envelope of the WeCom robot webhook. Extra fields are kept."""

    errcode: int
    errmsg: Optional[str] = ""

    model_config = ConfigDict(extra="allow", frozen=True)


class ErrorDetail(BaseModel):
    code: str
    details: Optional[str] = None


class ApiResponse(BaseModel):
    success: bool
    message: str
    data: Optional[dict[str, Any]] = Field(None, description="Remote reply on success")
    error: Optional[ErrorDetail] = None
