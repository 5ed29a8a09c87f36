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
Builds the narrative resume sections (summary, experience, achievements)
from the tone x language template tables.
"""

from typing import List, Sequence

from bilim_match import locales
from bilim_match.config import ABOUT_MIN_CHARS
from bilim_match.models import CandidateProfile, Language, Tone
from bilim_match.text_utils import normalize_text


def _core_skills(skills: Sequence[str]) -> str:
    return ", ".join(skills[:3])


def build_summary(profile: CandidateProfile, tone: Tone, language: Language, skills: Sequence[str]) -> str:
    """
    The candidate's own "about" text wins when it is substantial; otherwise the
    summary is filled from the tone template.
    """
    custom_about = normalize_text(profile.about)
    if len(custom_about) >= ABOUT_MIN_CHARS:
        return custom_about

    role = (
        normalize_text(profile.desired_role)
        or normalize_text(profile.current_role)
        or locales.DEFAULT_ROLE[language]
    )
    experience = normalize_text(profile.experience)
    template = locales.SUMMARY_TEMPLATES[(language, tone)]

    if experience:
        clause = template.with_experience.format(experience=experience)
    else:
        clause = template.without_experience

    return template.body.format(role=role, experience_clause=clause, skills=_core_skills(skills))


def build_experience(profile: CandidateProfile, language: Language, skills: Sequence[str]) -> str:
    """Role statement, daily practice and collaboration, as one paragraph."""
    role = normalize_text(profile.current_role) or normalize_text(profile.desired_role)
    experience = normalize_text(profile.experience)
    template = locales.EXPERIENCE_TEMPLATES[language]

    if role and experience:
        opening = template.role_with_experience.format(role=role, experience=experience)
    elif role:
        opening = template.role_only.format(role=role)
    elif experience:
        opening = template.experience_only.format(experience=experience)
    else:
        opening = template.no_signal

    return " ".join([
        opening,
        template.daily_practice.format(skills=_core_skills(skills)),
        template.collaboration,
    ])


def build_achievements(profile: CandidateProfile, language: Language, tone: Tone) -> List[str]:
    role = (
        normalize_text(profile.current_role)
        or normalize_text(profile.desired_role)
        or locales.DEFAULT_ROLE[language]
    )
    return [line.format(role=role) for line in locales.ACHIEVEMENT_TEMPLATES[(language, tone)]]
