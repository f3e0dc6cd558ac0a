"""Pydantic validation models for all user-facing data entry points."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


class CheckInInput(BaseModel):
    checkin_date: date = Field(default_factory=date.today)
    readiness: int = Field(ge=1, le=10)
    feel: Literal["poor", "ok", "good"]
    energy: Literal["low", "moderate", "high"]
    sleep: Literal["poor", "ok", "good"]
    pain: Literal["none", "minor", "yes"] = "none"
    pain_location: str = Field(default="", max_length=200)

    @field_validator("pain_location")
    @classmethod
    def strip_location(cls, v):
        return v.strip()


class SessionCompleteInput(BaseModel):
    session_name: str = Field(min_length=1, max_length=120)
    perceived_exertion: Optional[int] = Field(default=None, ge=1, le=10)
    completed: bool = True


class BenchmarkEntryInput(BaseModel):
    one_rm: Optional[float] = Field(default=None, ge=0, le=1000)
    estimated_one_rm: Optional[float] = Field(default=None, ge=0, le=1000)


class BenchmarkUpdateInput(BaseModel):
    exercise_benchmarks: dict[str, BenchmarkEntryInput] = Field(default_factory=dict)
    aerobic_benchmarks: dict[str, Optional[float]] = Field(default_factory=dict)
    power_benchmarks: dict[str, Optional[float]] = Field(default_factory=dict)

    @field_validator("exercise_benchmarks", "aerobic_benchmarks", "power_benchmarks")
    @classmethod
    def valid_keys(cls, v):
        for key in v:
            if not key or len(key) > 60 or not key.replace("_", "").isalnum():
                raise ValueError(f"invalid benchmark key: {key!r}")
        return v


class SelectAnswer(BaseModel):
    kind: Literal["select"] = "select"
    question_id: str = Field(min_length=1, max_length=60)
    option: str = Field(min_length=1, max_length=120)


class TextAnswer(BaseModel):
    kind: Literal["text"] = "text"
    question_id: str = Field(min_length=1, max_length=60)
    text: str = Field(default="", max_length=500)


IntakeAnswer = Annotated[Union[SelectAnswer, TextAnswer], Field(discriminator="kind")]


class IntakeSubmission(BaseModel):
    answers: list[IntakeAnswer] = Field(min_length=1, max_length=50)


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(min_length=1, max_length=4000)


class ChatInput(BaseModel):
    messages: list[ChatTurn] = Field(min_length=1, max_length=40)
