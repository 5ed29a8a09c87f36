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

import json
import unittest
from unittest.mock import patch, MagicMock
import os
import sys

# Pre-mock modules to avoid ImportErrors if not installed
sys.modules['google'] = MagicMock()
sys.modules['google.genai'] = MagicMock()
sys.modules['google'].genai = sys.modules['google.genai']
sys.modules['openai'] = MagicMock()

from bilim_match import llm_client, locales
from bilim_match.config import Settings
from bilim_match.generator import render_markdown
from bilim_match.interview import fallback_analytics
from bilim_match.models import CandidateProfile, JobPosting, Language, TargetJobContext, Tone
from bilim_match.scorer import score_jobs
from bilim_match.synthesizer import synthesize_resume


def make_settings(**overrides):
    values = dict(
        provider="openai",
        base_url="http://127.0.0.1:1234/v1",
        model="local-model",
        api_key="lm-studio",
        gemini_api_key="",
        timeout=5.0,
        disabled=False,
    )
    values.update(overrides)
    return Settings(**values)


class TestCallLLM(unittest.TestCase):
    def setUp(self):
        self.env_patch = patch.dict(os.environ, {}, clear=True)
        self.env_patch.start()

    def tearDown(self):
        self.env_patch.stop()

    def test_call_llm_openai(self):
        mock_openai = sys.modules['openai']
        mock_openai.reset_mock()

        mock_message = MagicMock()
        mock_message.content = "  OpenAI Response  "
        mock_choice = MagicMock()
        mock_choice.message = mock_message
        mock_response = MagicMock()
        mock_response.choices = [mock_choice]
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = mock_response
        mock_openai.OpenAI.return_value = mock_client

        client = llm_client.LLMClient(make_settings())
        result = client._call_llm("Test Prompt", system_prompt="Be brief")

        self.assertEqual(result, "OpenAI Response")
        mock_openai.OpenAI.assert_called_with(
            base_url="http://127.0.0.1:1234/v1", api_key="lm-studio", timeout=5.0
        )
        messages = mock_client.chat.completions.create.call_args.kwargs["messages"]
        self.assertEqual(messages[0], {"role": "system", "content": "Be brief"})
        self.assertEqual(messages[1], {"role": "user", "content": "Test Prompt"})

    def test_call_llm_gemini_tries_next_model(self):
        mock_genai = sys.modules['google.genai']
        mock_genai.reset_mock()

        mock_response = MagicMock()
        mock_response.text = "Gemini Response"
        mock_client = MagicMock()
        mock_client.models.generate_content.side_effect = [RuntimeError("404"), mock_response]
        mock_genai.Client.return_value = mock_client

        client = llm_client.LLMClient(make_settings(provider="gemini", model="gemini-x", gemini_api_key="g-key"))
        result = client._call_llm("Test Prompt")

        self.assertEqual(result, "Gemini Response")
        mock_genai.Client.assert_called_with(api_key="g-key")
        models_tried = [c.kwargs["model"] for c in mock_client.models.generate_content.call_args_list]
        self.assertEqual(models_tried, ["gemini-x", "gemini-1.5-flash"])

    def test_call_llm_failure_returns_empty(self):
        mock_openai = sys.modules['openai']
        mock_openai.reset_mock()
        mock_openai.OpenAI.side_effect = RuntimeError("connection refused")
        try:
            client = llm_client.LLMClient(make_settings())
            self.assertEqual(client._call_llm("Prompt"), "")
        finally:
            mock_openai.OpenAI.side_effect = None

    def test_disabled_skips_network(self):
        mock_openai = sys.modules['openai']
        mock_openai.reset_mock()
        client = llm_client.LLMClient(make_settings(disabled=True))
        self.assertEqual(client._call_llm("Prompt"), "")
        mock_openai.OpenAI.assert_not_called()

    def test_clean_json(self):
        client = llm_client.LLMClient(make_settings())
        self.assertEqual(client._clean_json('```json\n{"a": 1}\n```'), '{"a": 1}')
        self.assertEqual(client._clean_json('```\n[1]\n```'), '[1]')
        self.assertEqual(client._clean_json(' {"a": 1} '), '{"a": 1}')


class TestMatchJobs(unittest.TestCase):
    def setUp(self):
        self.client = llm_client.LLMClient(make_settings())
        self.profile = CandidateProfile(skills=["SQL"], desired_role="Analyst")
        self.jobs = [
            JobPosting(id="1", title="Analyst", skills=["SQL"]),
            JobPosting(id="2", title="Driver", skills=["Driving license"]),
        ]

    def test_model_scores_merged_with_offline(self):
        reply = "```json\n" + json.dumps([
            {"jobId": "1", "matchPercent": 150, "explanation": "Strong SQL"},
            {"jobId": "99", "matchPercent": 80, "explanation": "Unknown job"},
            {"jobId": "2", "matchPercent": "n/a"},
        ]) + "\n```"
        with patch.object(self.client, '_call_llm', return_value=reply):
            results = self.client.match_jobs(self.profile, self.jobs)

        offline = score_jobs(self.profile, self.jobs)
        self.assertEqual([r.job_id for r in results], ["1", "2"])
        self.assertEqual(results[0].match_percent, 100)
        self.assertEqual(results[0].explanation, "Strong SQL")
        self.assertEqual(results[1], offline[1])

    def test_model_percent_rounds_half_up(self):
        reply = json.dumps([{"jobId": "1", "matchPercent": 46.5, "explanation": "SQL"}])
        with patch.object(self.client, '_call_llm', return_value=reply):
            results = self.client.match_jobs(self.profile, self.jobs)
        self.assertEqual(results[0].match_percent, 47)

    def test_unparseable_reply_uses_offline_scores(self):
        for reply in ("", "not json", "[]", '{"jobId": "1"}'):
            with patch.object(self.client, '_call_llm', return_value=reply):
                results = self.client.match_jobs(self.profile, self.jobs, Language.KK)
            self.assertEqual(results, score_jobs(self.profile, self.jobs, Language.KK))

    def test_no_jobs_skips_model(self):
        with patch.object(self.client, '_call_llm') as mock_call:
            self.assertEqual(self.client.match_jobs(self.profile, []), [])
            mock_call.assert_not_called()


class TestStructuredResume(unittest.TestCase):
    def setUp(self):
        self.client = llm_client.LLMClient(make_settings())
        self.profile = CandidateProfile(name="Aibek", skills=["SQL"])
        self.job = TargetJobContext(title="BI Analyst", company="Kaspi", requirements=["Power BI"], skills=["SQL"])

    def test_draft_merged(self):
        reply = json.dumps({"fullName": "", "title": "BI-аналитик", "skills": ["SQL", "SQL", "Python"]})
        with patch.object(self.client, '_call_llm', return_value=reply) as mock_call:
            resume = self.client.generate_structured_resume(self.profile, [], Tone.BOLD, Language.RU, target_job=self.job)

        self.assertEqual(resume.full_name, "Aibek")
        self.assertEqual(resume.title, "BI-аналитик")
        self.assertEqual(resume.skills, ["SQL", "Python"])

        prompt = mock_call.call_args[0][0]
        self.assertIn("Тон: уверенный", prompt)
        self.assertIn("BI Analyst (Kaspi)", prompt)
        self.assertIn("Power BI", prompt)

    def test_unparseable_draft_gives_offline_resume(self):
        with patch.object(self.client, '_call_llm', return_value="Sorry, I cannot help"):
            resume = self.client.generate_structured_resume(self.profile, [], Tone.NEUTRAL, Language.KK)
        self.assertEqual(resume, synthesize_resume(self.profile, [], Tone.NEUTRAL, Language.KK))

    def test_markdown_resume_fallback(self):
        with patch.object(self.client, '_call_llm', return_value=""):
            text = self.client.generate_markdown_resume(self.profile, [], Language.RU)
        expected = render_markdown(synthesize_resume(self.profile, [], Tone.NEUTRAL, Language.RU), Language.RU)
        self.assertEqual(text, expected)
        self.assertTrue(text.startswith("# Aibek"))

    def test_markdown_resume_from_model(self):
        with patch.object(self.client, '_call_llm', return_value="# Резюме"):
            self.assertEqual(self.client.generate_markdown_resume(self.profile, [], Language.RU), "# Резюме")


class TestInterview(unittest.TestCase):
    def setUp(self):
        self.client = llm_client.LLMClient(make_settings())

    def test_first_turn_fallback(self):
        with patch.object(self.client, '_call_llm', return_value=""):
            text = self.client.conduct_interview("Analyst", ["SQL"], [], True, Language.KK)
        self.assertEqual(text, "Сәлеметсіз бе! Сұхбатты бастайық. Өзіңіз және тәжірибеңіз туралы айтып беріңіз.")

    def test_follow_up_prompt_includes_history(self):
        history = [{"role": "assistant", "content": "Кто вы?"}, {"role": "user", "content": "Аналитик"}]
        with patch.object(self.client, '_call_llm', return_value="Следующий вопрос") as mock_call:
            text = self.client.conduct_interview("Analyst", ["SQL"], history, False)
        self.assertEqual(text, "Следующий вопрос")
        prompt = mock_call.call_args[0][0]
        self.assertIn("Кандидат: Аналитик", prompt)
        self.assertIn("Questions asked so far: 1", prompt)

    def test_kazakh_prompt_uses_kazakh_speaker_labels(self):
        history = [{"role": "assistant", "content": "Сіз кімсіз?"}, {"role": "user", "content": "Талдаушы"}]
        with patch.object(self.client, '_call_llm', return_value="Келесі сұрақ") as mock_call:
            self.client.conduct_interview("Analyst", ["SQL"], history, False, Language.KK)
        prompt = mock_call.call_args[0][0]
        candidate, _ = locales.INTERVIEW_SPEAKERS[Language.KK]
        self.assertIn(f"{candidate}: Талдаушы", prompt)
        self.assertNotIn("Кандидат:", prompt)

    def test_analyze_interview(self):
        reply = json.dumps({
            "confidenceScore": 81,
            "anxietyLevel": "низкий",
            "responseQuality": 77,
            "strengths": ["Ясность"],
            "weaknesses": [],
            "overallFeedback": "Отлично",
            "detailedAnalysis": "## Итог",
        })
        messages = [{"role": "user", "content": "Ответ", "timestamp": 1}]
        with patch.object(self.client, '_call_llm', return_value=reply):
            analytics = self.client.analyze_interview(messages, "Analyst")
        self.assertEqual(analytics.confidence_score, 81)
        self.assertEqual(analytics.strengths, ["Ясность"])

    def test_analyze_interview_fallback(self):
        with patch.object(self.client, '_call_llm', return_value="```json\n{broken\n```"):
            analytics = self.client.analyze_interview([], "Analyst", Language.RU)
        self.assertEqual(analytics, fallback_analytics(Language.RU))


if __name__ == '__main__':
    unittest.main()
