# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Data models for the BilimMatch matching and resume toolkit.
"""

import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional

from bilim_match.text_utils import normalize_text, to_string_list

logger = logging.getLogger(__name__)


class Tone(str, Enum):
    """Stylistic register applied to generated narrative text."""
    NEUTRAL = "neutral"
    POLITE = "polite"
    BOLD = "bold"

    @classmethod
    def parse(cls, value: Any) -> "Tone":
        """Unknown or empty values default to NEUTRAL."""
        if isinstance(value, cls):
            return value
        text = normalize_text(value).lower()
        for tone in cls:
            if tone.value == text:
                return tone
        if text:
            logger.warning(f"Unknown tone '{value}', using '{cls.NEUTRAL.value}'")
        return cls.NEUTRAL


class Language(str, Enum):
    """Supported output locales: Russian (primary) and Kazakh (secondary)."""
    RU = "ru"
    KK = "kk"

    @classmethod
    def parse(cls, value: Any) -> "Language":
        """Unknown or empty values default to RU."""
        if isinstance(value, cls):
            return value
        text = normalize_text(value).lower()
        for lang in cls:
            if lang.value == text:
                return lang
        if text:
            logger.warning(f"Unknown language '{value}', using '{cls.RU.value}'")
        return cls.RU


class ResumeFlow(str, Enum):
    """Which call path produced a draft; selects the summary length threshold."""
    ONLINE = "online"
    STRUCTURED = "structured"


def _normalize_fields(instance: Any) -> None:
    """Coerces None and stray values in plain text and string-list fields."""
    for f in fields(instance):
        value = getattr(instance, f.name)
        if f.type is str:
            setattr(instance, f.name, normalize_text(value))
        elif f.type == List[str]:
            setattr(instance, f.name, to_string_list(value))


@dataclass
class CandidateProfile:
    """Structured and free-text description of a job seeker from onboarding."""
    name: str = ""
    email: str = ""
    phone: str = ""
    city: str = ""
    skills: List[str] = field(default_factory=list)
    interests: List[str] = field(default_factory=list)
    experience: str = ""
    education: str = ""
    current_role: str = ""
    desired_role: str = ""
    about: str = ""
    languages: List[str] = field(default_factory=list)
    projects: str = ""

    def __post_init__(self):
        if isinstance(self.projects, (list, tuple)):
            self.projects = ",".join(to_string_list(self.projects))
        _normalize_fields(self)

    @classmethod
    def from_dict(cls, raw: Any) -> "CandidateProfile":
        """Builds a profile from parsed JSON (camelCase keys). Never raises."""
        if not isinstance(raw, dict):
            return cls()

        return cls(
            name=normalize_text(raw.get("name")),
            email=normalize_text(raw.get("email")),
            phone=normalize_text(raw.get("phone")),
            city=normalize_text(raw.get("city")),
            skills=to_string_list(raw.get("skills")),
            interests=to_string_list(raw.get("interests")),
            experience=normalize_text(raw.get("experience")),
            education=normalize_text(raw.get("education")),
            current_role=normalize_text(raw.get("currentRole", raw.get("current_role"))),
            desired_role=normalize_text(raw.get("desiredRole", raw.get("desired_role"))),
            about=normalize_text(raw.get("about")),
            languages=to_string_list(raw.get("languages")),
            projects=raw.get("projects"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "city": self.city,
            "skills": list(self.skills),
            "interests": list(self.interests),
            "experience": self.experience,
            "education": self.education,
            "currentRole": self.current_role,
            "desiredRole": self.desired_role,
            "about": self.about,
            "languages": list(self.languages),
            "projects": self.projects,
        }


@dataclass
class JobPosting:
    """A job listing from the static fixture. Treated as read-only."""
    id: str
    title: str = ""
    company: str = ""
    category: str = ""
    skills: List[str] = field(default_factory=list)
    requirements: List[str] = field(default_factory=list)
    description: str = ""
    location: str = ""
    salary: str = ""
    experience: str = ""
    format: str = ""

    def __post_init__(self):
        _normalize_fields(self)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "JobPosting":
        return cls(
            id=normalize_text(raw.get("id")),
            title=normalize_text(raw.get("title")),
            company=normalize_text(raw.get("company")),
            category=normalize_text(raw.get("category")),
            skills=to_string_list(raw.get("skills")),
            requirements=to_string_list(raw.get("requirements")),
            description=normalize_text(raw.get("description")),
            location=normalize_text(raw.get("location")),
            salary=normalize_text(raw.get("salary")),
            experience=normalize_text(raw.get("experience")),
            format=normalize_text(raw.get("format", raw.get("type"))),
        )


@dataclass
class MatchResult:
    """Percentage fit between the candidate and one job."""
    job_id: str
    match_percent: int
    explanation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jobId": self.job_id,
            "matchPercent": self.match_percent,
            "explanation": self.explanation,
        }


@dataclass
class TargetJobContext:
    """The posting a resume is being tailored towards."""
    title: str
    company: str
    requirements: List[str] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    description: Optional[str] = None

    def __post_init__(self):
        _normalize_fields(self)
        self.description = normalize_text(self.description) or None

    @classmethod
    def from_job(cls, job: JobPosting) -> "TargetJobContext":
        return cls(
            title=job.title,
            company=job.company,
            requirements=list(job.requirements),
            skills=list(job.skills),
            description=job.description or None,
        )

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["TargetJobContext"]:
        """Builds a target from parsed JSON. Anything but an object yields None."""
        if not isinstance(raw, dict):
            return None
        return cls(
            title=normalize_text(raw.get("title")),
            company=normalize_text(raw.get("company")),
            requirements=to_string_list(raw.get("requirements")),
            skills=to_string_list(raw.get("skills")),
            description=normalize_text(raw.get("description")) or None,
        )


@dataclass
class StructuredResume:
    """
    Complete resume as produced by the synthesizer or merged from a model draft.
    List fields are deduplicated; summary, experience and education are never empty.
    """
    full_name: str
    title: str
    city: str
    email: str
    phone: str
    summary: str
    skills: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    achievements: List[str] = field(default_factory=list)
    tools: List[str] = field(default_factory=list)
    experience: str = ""
    education: str = ""
    languages: List[str] = field(default_factory=list)
    projects: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fullName": self.full_name,
            "title": self.title,
            "city": self.city,
            "email": self.email,
            "phone": self.phone,
            "summary": self.summary,
            "skills": list(self.skills),
            "strengths": list(self.strengths),
            "achievements": list(self.achievements),
            "tools": list(self.tools),
            "experience": self.experience,
            "education": self.education,
            "languages": list(self.languages),
            "projects": list(self.projects),
        }


@dataclass
class InterviewMessage:
    """One turn of a mock interview."""
    role: str  # 'user' (candidate) or 'assistant' (interviewer)
    content: str
    timestamp: int = 0

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "InterviewMessage":
        timestamp = raw.get("timestamp", 0)
        return cls(
            role=normalize_text(raw.get("role")) or "user",
            content=normalize_text(raw.get("content")),
            timestamp=timestamp if isinstance(timestamp, int) else 0,
        )


@dataclass
class InterviewAnalytics:
    """Post-interview feedback shown to the candidate."""
    confidence_score: int
    anxiety_level: str
    response_quality: int
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    overall_feedback: str = ""
    detailed_analysis: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "confidenceScore": self.confidence_score,
            "anxietyLevel": self.anxiety_level,
            "responseQuality": self.response_quality,
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "overallFeedback": self.overall_feedback,
            "detailedAnalysis": self.detailed_analysis,
        }
