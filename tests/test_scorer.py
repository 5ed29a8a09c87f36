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

from bilim_match import locales
from bilim_match.models import CandidateProfile, JobPosting, Language
from bilim_match.scorer import count_skill_matches, round_half_up, score_job, score_jobs, MAX_PERCENT, MIN_PERCENT


class TestScoreJobs(unittest.TestCase):
    def setUp(self):
        self.profile = CandidateProfile(skills=["Python", "SQL"])
        self.job = JobPosting(id="1", title="Data Analyst", category="IT", skills=["python", "sql", "excel"])

    def test_empty_job_list(self):
        self.assertEqual(score_jobs(self.profile, []), [])

    def test_partial_skill_match(self):
        result = score_job(self.profile, self.job)
        # 2 of 3 skills: 0.667 * 0.7 = 0.467
        self.assertEqual(result.job_id, "1")
        self.assertEqual(result.match_percent, 47)
        self.assertEqual(result.explanation, "Совпадение по ключевым навыкам: 2 из 3.")

    def test_title_bonus(self):
        profile = CandidateProfile(skills=["Python", "SQL", "Excel"], desired_role="Analyst")
        result = score_job(profile, self.job)
        # 1.0 * 0.7 + 0.2
        self.assertEqual(result.match_percent, 90)

    def test_clamped_to_maximum(self):
        profile = CandidateProfile(skills=["Python", "SQL", "Excel"], desired_role="analyst", interests=["it"])
        self.assertEqual(score_job(profile, self.job).match_percent, MAX_PERCENT)

    def test_empty_profile_gets_floor_score(self):
        result = score_job(CandidateProfile(), self.job)
        self.assertEqual(result.match_percent, MIN_PERCENT)
        self.assertEqual(result.explanation, locales.GENERIC_MATCH_EXPLANATION[Language.RU])

    def test_job_without_skills(self):
        job = JobPosting(id="2", title="Courier")
        result = score_job(self.profile, job)
        self.assertEqual(result.match_percent, MIN_PERCENT)
        self.assertEqual(result.explanation, locales.GENERIC_MATCH_EXPLANATION[Language.RU])

    def test_interest_bonus_from_category(self):
        profile = CandidateProfile(skills=["Python", "SQL", "Excel"], interests=["IT"])
        # 0.7 + 0.1
        self.assertEqual(score_job(profile, self.job).match_percent, 80)

    def test_kazakh_explanation(self):
        result = score_job(self.profile, self.job, Language.KK)
        self.assertEqual(result.explanation, "Негізгі дағдылар бойынша сәйкестік: 3 дағдының 2.")

    def test_scores_always_in_range(self):
        profiles = [
            CandidateProfile(),
            CandidateProfile(skills=["a", "b", "c"], desired_role="a", interests=["a"]),
            CandidateProfile(skills=["Python"]),
        ]
        jobs = [
            JobPosting(id="1"),
            JobPosting(id="2", title="a", category="a", skills=["a"]),
            self.job,
        ]
        for profile in profiles:
            for result in score_jobs(profile, jobs):
                self.assertGreaterEqual(result.match_percent, MIN_PERCENT)
                self.assertLessEqual(result.match_percent, MAX_PERCENT)

    def test_more_matching_skills_never_lowers_score(self):
        job = JobPosting(id="1", title="Dev", skills=["python", "sql", "docker", "git"])
        owned = []
        previous = 0
        for skill in ["Python", "SQL", "Docker", "Git"]:
            owned.append(skill)
            percent = score_job(CandidateProfile(skills=list(owned)), job).match_percent
            self.assertGreaterEqual(percent, previous)
            previous = percent

    def test_results_follow_input_order_with_duplicates(self):
        jobs = [JobPosting(id="b"), JobPosting(id="a"), JobPosting(id="b")]
        results = score_jobs(self.profile, jobs)
        self.assertEqual([r.job_id for r in results], ["b", "a", "b"])

    def test_none_list_fields_are_treated_as_empty(self):
        profile = CandidateProfile(skills=None, interests=None, desired_role=None)
        results = score_jobs(profile, [JobPosting(id="1", title=None, skills=None, requirements=None)])
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].match_percent, MIN_PERCENT)
        self.assertEqual(results[0].explanation, locales.GENERIC_MATCH_EXPLANATION[Language.RU])

    def test_round_half_up(self):
        self.assertEqual(round_half_up(46.5), 47)
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(2.49), 2)

    def test_deterministic(self):
        first = [r.to_dict() for r in score_jobs(self.profile, [self.job])]
        second = [r.to_dict() for r in score_jobs(self.profile, [self.job])]
        self.assertEqual(first, second)


class TestCountSkillMatches(unittest.TestCase):
    def test_substring_either_direction(self):
        # "react" is inside "react.js"; "excel" is inside "ms excel"
        self.assertEqual(count_skill_matches(["react", "ms excel"], ["react.js", "excel"]), 2)

    def test_no_overlap(self):
        self.assertEqual(count_skill_matches(["python"], ["java", "go"]), 0)

    def test_counts_job_skills_not_candidate_skills(self):
        self.assertEqual(count_skill_matches(["sql", "postgresql"], ["sql"]), 1)


if __name__ == '__main__':
    unittest.main()
