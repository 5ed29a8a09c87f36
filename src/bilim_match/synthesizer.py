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
Deterministic structured-resume synthesis.

`synthesize_resume` always produces a complete resume from the profile and
onboarding answers. When a language-model draft is supplied, each of its
fields replaces the synthesized one only if it is usable.
"""

import logging
from dataclasses import asdict
from typing import Any, List, Optional

from bilim_match import locales
from bilim_match.config import summary_threshold
from bilim_match.inference import (
    infer_education,
    infer_languages,
    infer_projects,
    infer_skills,
    infer_strengths,
    infer_tools,
)
from bilim_match.models import (
    CandidateProfile,
    Language,
    ResumeFlow,
    StructuredResume,
    TargetJobContext,
    Tone,
)
from bilim_match.narrative import build_achievements, build_experience, build_summary
from bilim_match.tailoring import (
    tailor_achievements_to_job,
    tailor_skills_to_job,
    tailor_summary_to_job,
    tailor_tools_to_job,
)
from bilim_match.text_utils import merge_unique, normalize_text, to_string_list

logger = logging.getLogger(__name__)

# (attribute, draft key)
_TEXT_FIELDS = (
    ("full_name", "fullName"),
    ("title", "title"),
    ("city", "city"),
    ("email", "email"),
    ("phone", "phone"),
    ("experience", "experience"),
    ("education", "education"),
)

# (attribute, draft key, cap)
_LIST_FIELDS = (
    ("skills", "skills", 8),
    ("strengths", "strengths", 4),
    ("achievements", "achievements", 5),
    ("tools", "tools", 6),
    ("languages", "languages", None),
    ("projects", "projects", None),
)


def synthesize_resume(
    profile: Optional[CandidateProfile],
    answers: Any,
    tone: Tone,
    language: Language,
    target_job: Optional[TargetJobContext] = None,
    draft: Any = None,
    flow: ResumeFlow = ResumeFlow.ONLINE,
) -> StructuredResume:
    """
    Builds the full resume offline, then overlays the usable parts of `draft`.

    Args:
        profile: Candidate profile; None is treated as an empty profile.
        answers: Onboarding answers (list of {"question", "answer"} dicts).
        tone: Narrative register.
        language: Output locale.
        target_job: Optional posting to tailor skills, tools, summary and achievements to.
        draft: Parsed model JSON in the StructuredResume wire shape, possibly partial.
        flow: Call path; decides the minimum accepted draft summary length.
    """
    profile = profile or CandidateProfile()
    tone = Tone.parse(tone)
    language = Language.parse(language)

    # 1. Skills drive most of the other fields, so they are settled first
    skills = tailor_skills_to_job(infer_skills(profile, answers, language), target_job)

    # 2. Derived lists
    languages = infer_languages(profile, answers, language)
    strengths = infer_strengths(skills, language)
    tools = tailor_tools_to_job(infer_tools(skills, answers, language), target_job)

    # 3. Narrative
    achievements = tailor_achievements_to_job(build_achievements(profile, language, tone), target_job, language)
    summary = tailor_summary_to_job(build_summary(profile, tone, language, skills), target_job, language)

    resume = StructuredResume(
        full_name=normalize_text(profile.name) or locales.DEFAULT_NAME[language],
        title=(
            normalize_text(profile.desired_role)
            or normalize_text(profile.current_role)
            or locales.DEFAULT_TITLE[language]
        ),
        city=normalize_text(profile.city),
        email=normalize_text(profile.email),
        phone=normalize_text(profile.phone),
        summary=summary,
        skills=skills,
        strengths=strengths,
        achievements=achievements,
        tools=tools,
        experience=build_experience(profile, language, skills),
        education=infer_education(profile, answers, language),
        languages=languages,
        projects=infer_projects(profile, answers, language),
    )

    if draft is None:
        return resume
    return merge_draft(draft, resume, flow)


def _coerce_text(value: Any) -> Optional[str]:
    """A usable string from a draft field, or None to fall back."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float)):
        return str(value).strip() or None
    return None


def _coerce_list(value: Any, cap: Optional[int]) -> Optional[List[str]]:
    """A deduplicated, capped string list from a draft field, or None to fall back."""
    if not isinstance(value, (list, tuple)):
        return None
    items = merge_unique(to_string_list(value), limit=cap)
    return items or None


def merge_draft(draft: Any, fallback: StructuredResume, flow: ResumeFlow = ResumeFlow.ONLINE) -> StructuredResume:
    """
    Field-by-field merge of a model draft over a synthesized resume.

    A draft field wins when it is present, non-empty and of a usable type; list
    fields must be non-empty arrays. The summary must also meet the flow's
    minimum length. Everything else keeps the synthesized value.
    """
    if not isinstance(draft, dict):
        logger.warning(f"Ignoring resume draft of type {type(draft).__name__}")
        return fallback

    merged = asdict(fallback)
    taken = []

    for attr, key in _TEXT_FIELDS:
        value = _coerce_text(draft.get(key))
        if value is not None:
            merged[attr] = value
            taken.append(key)

    for attr, key, cap in _LIST_FIELDS:
        values = _coerce_list(draft.get(key), cap)
        if values is not None:
            merged[attr] = values
            taken.append(key)

    summary = _coerce_text(draft.get("summary"))
    threshold = summary_threshold(flow)
    if summary is not None and len(summary) >= threshold:
        merged["summary"] = summary
        taken.append("summary")
    elif summary is not None:
        logger.info(f"Draft summary rejected ({len(summary)} < {threshold} chars); using synthesized summary.")

    logger.debug(f"Resume draft fields used: {', '.join(taken) or 'none'}")
    return StructuredResume(**merged)
