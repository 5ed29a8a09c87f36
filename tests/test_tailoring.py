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

import unittest

from bilim_match.models import Language, TargetJobContext
from bilim_match.tailoring import (
    tailor_achievements_to_job,
    tailor_skills_to_job,
    tailor_summary_to_job,
    tailor_tools_to_job,
)

RU = Language.RU


class TestWithoutTargetJob(unittest.TestCase):
    def test_inputs_returned_unchanged(self):
        skills = ["A", "B"]
        tools = ["Excel"]
        achievements = ["Did X"]
        self.assertIs(tailor_skills_to_job(skills, None), skills)
        self.assertIs(tailor_tools_to_job(tools, None), tools)
        self.assertIs(tailor_achievements_to_job(achievements, None, RU), achievements)
        self.assertEqual(tailor_summary_to_job("Summary.", None, RU), "Summary.")


class TestWithTargetJob(unittest.TestCase):
    def setUp(self):
        self.job = TargetJobContext(
            title="BI Analyst",
            company="Kaspi",
            requirements=["2+ years reporting", "Power BI"],
            skills=["SQL", "Excel"],
        )

    def test_job_skills_lead(self):
        result = tailor_skills_to_job(["Python", "Excel", "Communication"], self.job)
        self.assertEqual(result, ["SQL", "Excel", "Python", "Communication"])

    def test_skills_capped_at_eight(self):
        result = tailor_skills_to_job([f"Skill {i}" for i in range(10)], self.job)
        self.assertEqual(len(result), 8)
        self.assertEqual(result[:2], ["SQL", "Excel"])

    def test_tool_requirements_appended(self):
        result = tailor_tools_to_job(["Excel", "CRM"], self.job)
        self.assertEqual(result, ["Excel", "CRM", "Power BI"])

    def test_tools_capped_at_six(self):
        result = tailor_tools_to_job(["A", "B", "C", "D", "E", "F"], self.job)
        self.assertEqual(result, ["A", "B", "C", "D", "E", "F"])

    def test_summary_mentions_role_and_focus(self):
        result = tailor_summary_to_job("Опытный аналитик.", self.job, RU)
        self.assertTrue(result.startswith("Опытный аналитик. "))
        self.assertIn("BI Analyst (Kaspi)", result)
        self.assertIn("SQL, Excel, 2+ years reporting", result)

    def test_achievements_cite_requirements(self):
        result = tailor_achievements_to_job(["A", "B", "C", "D", "E"], self.job, RU)
        self.assertEqual(len(result), 5)
        self.assertIn("2+ years reporting; Power BI", result[0])
        self.assertEqual(result[1:], ["A", "B", "C", "D"])

    def test_kazakh_achievement(self):
        result = tailor_achievements_to_job([], self.job, Language.KK)
        self.assertIn("(2+ years reporting; Power BI)", result[0])


if __name__ == '__main__':
    unittest.main()
