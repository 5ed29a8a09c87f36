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
Biases already-built resume fields towards a target job posting.
Without a target job every adjuster returns its input unchanged.
"""

import re
from typing import List, Optional

from bilim_match import locales
from bilim_match.models import Language, TargetJobContext
from bilim_match.text_utils import merge_unique

MAX_TAILORED_SKILLS = 8
MAX_TAILORED_TOOLS = 6
MAX_TAILORED_ACHIEVEMENTS = 5

REQUIREMENT_TOOL_PATTERN = re.compile(
    r"excel|crm|1c|sap|jira|postman|git|typescript|react|python|sql|power bi|figma",
    re.IGNORECASE,
)


def tailor_skills_to_job(skills: List[str], target_job: Optional[TargetJobContext]) -> List[str]:
    """Job skills take the leading positions."""
    if target_job is None:
        return skills
    return merge_unique(list(target_job.skills) + list(skills), limit=MAX_TAILORED_SKILLS)


def tailor_tools_to_job(tools: List[str], target_job: Optional[TargetJobContext]) -> List[str]:
    if target_job is None:
        return tools
    required_tools = [item for item in target_job.requirements if REQUIREMENT_TOOL_PATTERN.search(item)]
    return merge_unique(list(tools) + required_tools, limit=MAX_TAILORED_TOOLS)


def tailor_summary_to_job(summary: str, target_job: Optional[TargetJobContext], language: Language) -> str:
    if target_job is None:
        return summary
    focus = ", ".join(merge_unique(list(target_job.skills) + list(target_job.requirements), limit=3))
    return locales.TAILORED_SUMMARY[language].format(
        summary=summary,
        title=target_job.title,
        company=target_job.company,
        focus=focus,
    )


def tailor_achievements_to_job(achievements: List[str], target_job: Optional[TargetJobContext],
                               language: Language) -> List[str]:
    """Leads with a line citing the first two job requirements."""
    if target_job is None:
        return achievements
    requirements = "; ".join(target_job.requirements[:2])
    targeted = locales.TAILORED_ACHIEVEMENT[language].format(requirements=requirements)
    return merge_unique([targeted] + list(achievements), limit=MAX_TAILORED_ACHIEVEMENTS)
