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
Mock-interview helpers: transcript formatting, analytics coercion and the
deterministic turns used when the model is unavailable.
"""

import logging
from typing import Any, List, Optional, Sequence

from bilim_match import locales
from bilim_match.models import InterviewAnalytics, InterviewMessage, Language
from bilim_match.scorer import round_half_up
from bilim_match.text_utils import normalize_text, to_string_list

logger = logging.getLogger(__name__)

MAX_QUESTIONS = 5
FALLBACK_CONFIDENCE = 72
FALLBACK_RESPONSE_QUALITY = 68


def _as_message(item: Any) -> Optional[InterviewMessage]:
    if isinstance(item, InterviewMessage):
        return item
    if isinstance(item, dict):
        return InterviewMessage.from_dict(item)
    return None


def _messages(history: Sequence[Any]) -> List[InterviewMessage]:
    return [m for m in (_as_message(item) for item in history or []) if m is not None]


def opening_turn(language: Language) -> str:
    return locales.INTERVIEW_OPENING[Language.parse(language)]


def follow_up_turn(language: Language) -> str:
    return locales.INTERVIEW_FOLLOW_UP[Language.parse(language)]


def closing_turn(language: Language) -> str:
    return locales.INTERVIEW_CLOSING[Language.parse(language)]


def count_questions(history: Sequence[Any]) -> int:
    """Interviewer turns so far."""
    return sum(1 for m in _messages(history) if m.role == "assistant")


def fallback_turn(history: Sequence[Any], is_first: bool, language: Language) -> str:
    """Opening line, a follow-up, or the closing line once enough questions were asked."""
    if is_first:
        return opening_turn(language)
    if count_questions(history) >= MAX_QUESTIONS:
        return closing_turn(language)
    return follow_up_turn(language)


def format_history(history: Sequence[Any], language: Language = Language.RU) -> str:
    candidate_label, interviewer_label = locales.INTERVIEW_SPEAKERS[Language.parse(language)]
    lines = []
    for message in _messages(history):
        label = candidate_label if message.role == "user" else interviewer_label
        lines.append(f"{label}: {message.content}")
    return "\n".join(lines)


def _clamp_score(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    return max(0, min(100, round_half_up(value)))


def parse_analytics(raw: Any) -> Optional[InterviewAnalytics]:
    """
    Coerces a model JSON object into InterviewAnalytics.

    Both scores must be numeric (numeric strings accepted) and are clamped to
    0..100. Returns None when the object is unusable.
    """
    if not isinstance(raw, dict):
        return None

    confidence = _clamp_score(raw.get("confidenceScore"))
    quality = _clamp_score(raw.get("responseQuality"))
    if confidence is None or quality is None:
        logger.warning("Interview analytics missing numeric scores")
        return None

    return InterviewAnalytics(
        confidence_score=confidence,
        anxiety_level=normalize_text(raw.get("anxietyLevel")),
        response_quality=quality,
        strengths=to_string_list(raw.get("strengths")),
        weaknesses=to_string_list(raw.get("weaknesses")),
        overall_feedback=normalize_text(raw.get("overallFeedback")),
        detailed_analysis=normalize_text(raw.get("detailedAnalysis")),
    )


def fallback_analytics(language: Language) -> InterviewAnalytics:
    template = locales.FALLBACK_ANALYTICS[Language.parse(language)]
    return InterviewAnalytics(
        confidence_score=FALLBACK_CONFIDENCE,
        anxiety_level=template["anxiety_level"],
        response_quality=FALLBACK_RESPONSE_QUALITY,
        strengths=list(template["strengths"]),
        weaknesses=list(template["weaknesses"]),
        overall_feedback=template["overall_feedback"],
        detailed_analysis=template["detailed_analysis"],
    )
