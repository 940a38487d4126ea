from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorEnvelope(BaseModel):
    error: dict


class ToolListResponse(BaseModel):
    tools: list[dict]


class GenerateResponse(BaseModel):
    output: dict
    remainingUses: int | str | None = Field(None, description='count left today, "unlimited", or null when anonymous')
    saved: bool


class PostSignupRequest(BaseModel):
    userId: str | None = None
    email: str | None = None


class PostSignupResponse(BaseModel):
    success: bool
    created: bool


class UpdatePlanRequest(BaseModel):
    plan: str | None = None


class UpdatePlanResponse(BaseModel):
    success: bool
    plan: str


class ProfileInfo(BaseModel):
    userId: str
    email: str | None = None
    plan: str
    createdAt: str | None = None


class UsageInfo(BaseModel):
    date: str
    used: int
    limit: int | str
    remainingUses: int | str


class MeResponse(BaseModel):
    profile: ProfileInfo
    usage: UsageInfo


class ToolRunItem(BaseModel):
    id: str
    toolSlug: str
    input: dict
    output: dict
    createdAt: str | None = None


class HistoryResponse(BaseModel):
    runs: list[ToolRunItem]
