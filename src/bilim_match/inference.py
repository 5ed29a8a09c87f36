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
Infers resume fields from the candidate profile and onboarding answers.

Each helper prefers the explicit profile value, then scans the onboarding
answers for vocabulary hits, then falls back to a localized default. All of
them return a non-empty result.
"""

import re
from typing import Any, List, Sequence

from bilim_match import locales
from bilim_match.models import CandidateProfile, Language
from bilim_match.text_utils import answer_text, extract_answers, merge_unique, normalize_text

MAX_INFERRED_TOOLS = 5
MAX_STRENGTHS = 4

SKILL_TOOL_PATTERN = re.compile(r"excel|crm|notion|trello|1c|1с|canva|figma|google", re.IGNORECASE)
EDUCATION_PATTERN = re.compile(
    r"образ|универ|колледж|бакалавр|магистр|оқу|университет|білім|degree|university|college",
    re.IGNORECASE,
)
PROJECT_PATTERN = re.compile(r"проект|жоба|project", re.IGNORECASE)
PROJECT_SPLIT_PATTERN = re.compile(r"[,\n]")


def _vocabulary_hits(pool: Sequence[str], text: str) -> List[str]:
    return [item for item in pool if item.lower() in text]


def infer_skills(profile: CandidateProfile, answers: Any, language: Language) -> List[str]:
    """Profile skills, else vocabulary skills mentioned in answers, else the first three."""
    direct = merge_unique(profile.skills)
    if direct:
        return direct

    vocabulary = locales.SKILL_VOCABULARY[language]
    inferred = _vocabulary_hits(vocabulary, answer_text(answers))
    return inferred or list(vocabulary[:3])


def infer_languages(profile: CandidateProfile, answers: Any, language: Language) -> List[str]:
    direct = merge_unique(profile.languages)
    if direct:
        return direct

    inferred = _vocabulary_hits(locales.LANGUAGE_VOCABULARY[language], answer_text(answers))
    return inferred or [locales.LANGUAGE_PLACEHOLDER[language]]


def infer_tools(skills: Sequence[str], answers: Any, language: Language) -> List[str]:
    """
    Tools named among the skills plus known tools mentioned in the answers,
    capped at five; a generic office toolset otherwise.
    """
    from_skills = [skill for skill in skills if SKILL_TOOL_PATTERN.search(skill)]
    from_answers = _vocabulary_hits(locales.TOOL_POOL, answer_text(answers))
    combined = merge_unique(from_skills + from_answers, limit=MAX_INFERRED_TOOLS)
    return combined or list(locales.DEFAULT_TOOLS[language])


def infer_strengths(skills: Sequence[str], language: Language) -> List[str]:
    """Top two skills followed by the soft strengths, at most four."""
    return merge_unique(list(skills[:2]) + locales.SOFT_STRENGTHS[language], limit=MAX_STRENGTHS)


def infer_education(profile: CandidateProfile, answers: Any, language: Language) -> str:
    direct = normalize_text(profile.education)
    if direct:
        return direct

    for answer in extract_answers(answers):
        if EDUCATION_PATTERN.search(answer):
            return answer

    return locales.EDUCATION_PLACEHOLDER[language]


def infer_projects(profile: CandidateProfile, answers: Any, language: Language) -> List[str]:
    """
    Explicit projects become one item each with an involvement note. Without
    them, the first answer mentioning a project is quoted; otherwise a
    generic team-initiative line is used.
    """
    direct = merge_unique(PROJECT_SPLIT_PATTERN.split(normalize_text(profile.projects)))
    if direct:
        template = locales.PROJECT_INVOLVEMENT[language]
        return merge_unique(template.format(project=project) for project in direct)

    for answer in extract_answers(answers):
        if PROJECT_PATTERN.search(answer):
            return [locales.PROJECT_ANSWER_LABEL[language].format(answer=answer)]

    return [locales.PROJECT_PLACEHOLDER[language]]
