from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from companion.keywords import EMOTION_LABELS


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: List[ChatTurn] = Field(default_factory=list)
    user_message: str = Field(..., alias="userMessage")
    locale: Optional[str] = None
    user_id: Optional[str] = Field(None, alias="userId")


class ErrorResponse(BaseModel):
    error: str


class DetectEmotionRequest(BaseModel):
    user_message: str = Field(..., min_length=1)
    locale: Optional[str] = None


class DetectEmotionResponse(BaseModel):
    emotion: str
    crisis: bool
    polarity: float


class LogMoodRequest(BaseModel):
    emoji: str = Field(..., min_length=1)
    emotion: str
    intensity: int = Field(..., ge=1, le=10)
    journal_note: Optional[str] = None
    user_id: Optional[str] = None

    @field_validator("emotion")
    @classmethod
    def _known_emotion(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in EMOTION_LABELS:
            raise ValueError("emotion must be one of " + ", ".join(EMOTION_LABELS))
        return value


class LogMoodResponse(BaseModel):
    status: str
    timestamp: str


class MoodEntryItem(BaseModel):
    timestamp: str
    emoji: str
    emotion: str
    intensity: int
    journal_note: Optional[str] = None
    user_id: Optional[str] = None


class MoodHistoryResponse(BaseModel):
    items: List[MoodEntryItem]


class Helpline(BaseModel):
    country: str
    name: str
    number: str
    available: str


class HelplinesResponse(BaseModel):
    items: List[Helpline]


class HealthResponse(BaseModel):
    status: str
    upstream_configured: bool
