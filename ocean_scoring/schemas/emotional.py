"""Emotional regulation spectrum models."""

from __future__ import annotations

from pydantic import BaseModel


class EmotionScore(BaseModel):
    key: str
    name: str
    category: str  # positive / negative / complex
    score: int
    description: str


class EmotionalBalance(BaseModel):
    positive: int
    negative: int
    complex: int
    ratio: float


class EmotionalSpectrum(BaseModel):
    scores: dict[str, dict[str, EmotionScore]]
    dominant_emotions: list[EmotionScore]
    balance: EmotionalBalance
    dominant_valence: str  # positive / negative / balanced
    range: int
    complexity: int


class EmotionalHighlight(BaseModel):
    emotion: str
    score: int
    note: str


class EmotionalIntelligence(BaseModel):
    awareness: int
    understanding: int
    expression: int


class EmotionalRegulationProfile(BaseModel):
    spectrum: EmotionalSpectrum
    profile_type: str
    description: str
    regulation_style: str
    regulation_techniques: list[str]
    strengths: list[EmotionalHighlight]
    challenges: list[EmotionalHighlight]
    emotional_intelligence: EmotionalIntelligence
