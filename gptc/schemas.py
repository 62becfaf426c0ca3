from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class ChatMessage(BaseModel):
    role: str
    content: str


# --- generate-content wire format ---


class GeminiPart(BaseModel):
    text: str = ""


class GeminiContent(BaseModel):
    parts: List[GeminiPart] = Field(default_factory=list)
    role: Optional[str] = None


class GeminiRequest(BaseModel):
    contents: List[GeminiContent]


class GeminiSafetyRating(BaseModel):
    category: str = ""
    probability: str = ""


class GeminiCandidate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: Optional[GeminiContent] = None
    finish_reason: str = Field(default="", alias="finishReason")
    safety_ratings: List[GeminiSafetyRating] = Field(
        default_factory=list, alias="safetyRatings"
    )


class GeminiPromptFeedback(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    block_reason: str = Field(default="", alias="blockReason")
    safety_ratings: List[GeminiSafetyRating] = Field(
        default_factory=list, alias="safetyRatings"
    )


class GeminiResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    candidates: List[GeminiCandidate] = Field(default_factory=list)
    prompt_feedback: Optional[GeminiPromptFeedback] = Field(
        default=None, alias="promptFeedback"
    )

    @field_validator("candidates", mode="before")
    @classmethod
    def _null_candidates(cls, value):
        return [] if value is None else value


class GeminiErrorDetail(BaseModel):
    code: int = 0
    message: str = ""
    status: str = ""


class GeminiErrorResponse(BaseModel):
    error: GeminiErrorDetail
