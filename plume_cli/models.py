"""Data model shared by the engine, the storage layer and the presentation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class AnalysisType(str, Enum):
    QUICK = "quick"
    ADVANCED = "advanced"


class SuspicionLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Indicator:
    """One named, weighted, bounded sub-score."""
    name: str
    score: float
    description: str
    weight: float

    def __post_init__(self):
        if not self.name:
            raise ValueError("Indicator name must not be empty")
        if not (0.0 <= self.score <= 100.0):
            raise ValueError(f"Indicator score out of range: {self.name}={self.score}")
        if not math.isfinite(self.weight) or self.weight < 0:
            raise ValueError(f"Indicator weight must be a finite non-negative number: {self.weight}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "score": self.score,
            "description": self.description,
            "weight": self.weight,
        }


@dataclass(frozen=True)
class Section:
    """A located, classified span of the original text."""
    text: str
    start_position: int
    end_position: int
    suspicion_level: SuspicionLevel
    ai_probability: int
    reasoning: str

    def __post_init__(self):
        if not (0 <= self.start_position < self.end_position):
            raise ValueError(
                f"Invalid section span [{self.start_position}, {self.end_position})"
            )
        if self.end_position - self.start_position != len(self.text):
            raise ValueError("Section text length does not match its span")
        if not (0 <= self.ai_probability <= 100):
            raise ValueError(f"Section probability out of range: {self.ai_probability}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "startPosition": self.start_position,
            "endPosition": self.end_position,
            "suspicionLevel": self.suspicion_level.value,
            "aiProbability": self.ai_probability,
            "reasoning": self.reasoning,
        }


@dataclass(frozen=True)
class AgentAttribution:
    """Which rule named the suspected agent, and on what evidence."""
    label: str
    indicator_name: str
    threshold: float
    score: float

    @property
    def explanation(self) -> str:
        return f"{self.indicator_name} = {self.score:.0f} (> {self.threshold:.0f})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "indicatorName": self.indicator_name,
            "threshold": self.threshold,
            "score": self.score,
        }


@dataclass(frozen=True)
class AnalysisResult:
    ai_probability: float
    indicators: Tuple[Indicator, ...]
    sections: Tuple[Section, ...]
    original_text: str
    analysis_type: AnalysisType
    attribution: Optional[AgentAttribution] = None
    id: Optional[str] = None

    def __post_init__(self):
        if not (0.0 <= self.ai_probability <= 100.0):
            raise ValueError(f"Probability out of range: {self.ai_probability}")
        names = [i.name for i in self.indicators]
        if len(set(names)) != len(names):
            raise ValueError("Indicator names must be unique within an analysis")
        for s in self.sections:
            if self.original_text[s.start_position:s.end_position] != s.text:
                raise ValueError(f"Section does not match original text at {s.start_position}")

    @property
    def suspected_agent(self) -> Optional[str]:
        return self.attribution.label if self.attribution else None

    def indicator(self, name: str) -> Optional[Indicator]:
        return next((i for i in self.indicators if i.name == name), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "aiProbability": self.ai_probability,
            "suspectedAgent": self.suspected_agent,
            "attribution": self.attribution.to_dict() if self.attribution else None,
            "indicators": [i.to_dict() for i in self.indicators],
            "sections": [s.to_dict() for s in self.sections],
            "originalText": self.original_text,
            "analysisType": self.analysis_type.value,
        }


@dataclass(frozen=True)
class UploadedFile:
    filename: str
    mime_type: str
    size: int
    extracted_text: str = field(repr=False, default="")


@dataclass(frozen=True)
class FileAnalysis:
    result: AnalysisResult
    file: UploadedFile

    def to_dict(self) -> Dict[str, Any]:
        body = self.result.to_dict()
        body.update({
            "fileName": self.file.filename,
            "fileSize": self.file.size,
            "extractedTextLength": len(self.file.extracted_text),
        })
        return body
