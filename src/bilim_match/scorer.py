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
Offline candidate-to-job match scoring.

Used whenever the language model cannot rank the jobs. The score blends skill
coverage with small bonuses for the desired role and interests, and is clamped
to [35, 95].
"""

import logging
import math
from typing import List, Sequence

from bilim_match import locales
from bilim_match.models import CandidateProfile, JobPosting, Language, MatchResult
from bilim_match.text_utils import normalize_text, to_string_list

logger = logging.getLogger(__name__)

SKILL_WEIGHT = 0.7
TITLE_BONUS = 0.2
INTEREST_BONUS = 0.1
MIN_PERCENT = 35
MAX_PERCENT = 95


def _lowered(values: Sequence[str]) -> List[str]:
    return [v.lower() for v in to_string_list(values)]


def count_skill_matches(candidate_skills: Sequence[str], job_skills: Sequence[str]) -> int:
    """
    Number of job skills covered by the candidate. Matching is a substring test
    in either direction, so "React" covers "React.js" and "MS Excel" covers "Excel".
    Both lists are expected lowercased.
    """
    return sum(
        1 for skill in job_skills
        if any(owned in skill or skill in owned for owned in candidate_skills)
    )


def round_half_up(value: float) -> int:
    """Rounds .5 upwards; the built-in round() rounds halves to even."""
    return int(math.floor(value + 0.5))


def score_job(profile: CandidateProfile, job: JobPosting, language: Language = Language.RU) -> MatchResult:
    """Scores a single job against the profile."""
    profile_skills = _lowered(profile.skills)
    interests = _lowered(profile.interests)
    desired_role = normalize_text(profile.desired_role).lower()

    job_skills = _lowered(job.skills)
    job_title = normalize_text(job.title).lower()
    job_category = normalize_text(job.category).lower()

    matched = count_skill_matches(profile_skills, job_skills)
    skill_ratio = matched / max(1, len(job_skills))
    title_bonus = TITLE_BONUS if desired_role and desired_role in job_title else 0.0
    interest_bonus = INTEREST_BONUS if any(
        interest in job_category or interest in job_title for interest in interests
    ) else 0.0

    raw_score = skill_ratio * SKILL_WEIGHT + title_bonus + interest_bonus
    percent = max(MIN_PERCENT, min(MAX_PERCENT, round_half_up(raw_score * 100)))

    if matched > 0:
        explanation = locales.SKILL_MATCH_EXPLANATION[language].format(
            matched=matched, total=len(job_skills) or 1
        )
    else:
        explanation = locales.GENERIC_MATCH_EXPLANATION[language]

    return MatchResult(job_id=str(job.id), match_percent=percent, explanation=explanation)


def score_jobs(profile: CandidateProfile, jobs: Sequence[JobPosting],
               language: Language = Language.RU) -> List[MatchResult]:
    """
    Returns one MatchResult per job, in input order. Duplicate job ids are
    kept as separate results.
    """
    results = [score_job(profile, job, language) for job in jobs]
    logger.debug(f"Scored {len(results)} jobs offline")
    return results
