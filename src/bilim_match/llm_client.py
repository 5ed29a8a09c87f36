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
Client for the external language model.
Supports any OpenAI-compatible endpoint (LM Studio, OpenAI) and Google GenAI.

Every public method degrades to the deterministic engine, so callers always
receive a complete result whether or not the model answered.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from bilim_match import locales
from bilim_match.config import Settings, configure_ssl_env
from bilim_match.generator import render_markdown
from bilim_match.interview import (
    count_questions,
    fallback_analytics,
    fallback_turn,
    format_history,
    parse_analytics,
)
from bilim_match.models import (
    CandidateProfile,
    InterviewAnalytics,
    JobPosting,
    Language,
    MatchResult,
    ResumeFlow,
    TargetJobContext,
    Tone,
    StructuredResume,
)
from bilim_match.scorer import round_half_up, score_jobs
from bilim_match.synthesizer import synthesize_resume
from bilim_match.text_utils import normalize_text

# Logger is configured in main.py
logger = logging.getLogger(__name__)

GEMINI_FALLBACK_MODELS = ['gemini-1.5-flash', 'gemini-1.5-flash-001', 'gemini-pro']

LANGUAGE_NAMES = {Language.RU: "Russian", Language.KK: "Kazakh"}


class LLMClient:
    """
    Abstraction layer for LLM providers.
    Handles prompted requests for job matching, resumes and mock interviews.
    """
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings.from_env()
        if self.settings.disabled:
            logger.info("AI calls disabled. Using the offline engine only.")
        elif self.settings.provider == "gemini" and not self.settings.gemini_api_key:
            logger.warning("No GEMINI_API_KEY found. LLM features will fall back to the offline engine.")

    def _call_llm(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """
        Mockable wrapper for LLM calls.
        Returns the trimmed model text, or "" when the call fails or is disabled.
        """
        if self.settings.disabled:
            return ""

        # Ensure custom CA bundle is visible to httpx-based SDKs
        configure_ssl_env()

        try:
            if self.settings.provider == "gemini":
                text = self._call_gemini(prompt, system_prompt)
            else:
                text = self._call_openai(prompt, system_prompt)
        except ImportError as e:
            logger.error(f"Missing dependency for provider '{self.settings.provider}': {e}")
            return ""
        except Exception as e:
            logger.error(f"LLM call failed: {e}")
            return ""

        text = (text or "").strip()
        if not text:
            logger.warning("LLM returned an empty response.")
        return text

    def _call_openai(self, prompt: str, system_prompt: Optional[str]) -> str:
        import openai

        client = openai.OpenAI(
            base_url=self.settings.base_url,
            api_key=self.settings.api_key or "missing",
            timeout=self.settings.timeout,
        )
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        logger.debug(f"Requesting {self.settings.model} at {self.settings.base_url}")
        response = client.chat.completions.create(
            model=self.settings.model,
            messages=messages,
            temperature=0.7,
            max_tokens=1024,
        )
        return response.choices[0].message.content

    def _call_gemini(self, prompt: str, system_prompt: Optional[str]) -> str:
        from google import genai

        if not self.settings.gemini_api_key:
            return ""

        client = genai.Client(api_key=self.settings.gemini_api_key)
        contents = f"{system_prompt}\n\n{prompt}" if system_prompt else prompt

        models = [self.settings.model] + [m for m in GEMINI_FALLBACK_MODELS if m != self.settings.model]
        last_exception = None
        for model_name in models:
            try:
                logger.info(f"Attempting model: {model_name}")
                response = client.models.generate_content(model=model_name, contents=contents)
                return response.text
            except Exception as e:
                logger.warning(f"Model {model_name} failed: {e}")
                last_exception = e

        if last_exception:
            raise last_exception
        return ""

    def _clean_json(self, text: str) -> str:
        """Helper to strip code fences from LLM output"""
        if "```json" in text:
            text = text.split("```json")[1].split("```")[0]
        elif "```" in text:
            text = text.split("```")[1].split("```")[0]
        return text.strip()

    def _parse_json(self, text: str) -> Any:
        if not text:
            return None
        try:
            return json.loads(self._clean_json(text))
        except json.JSONDecodeError:
            logger.error("Failed to decode LLM response as JSON")
            logger.debug(f"Raw response: {text}")
            return None

    def match_jobs(self, profile: CandidateProfile, jobs: Sequence[JobPosting],
                   language: Language = Language.RU) -> List[MatchResult]:
        """
        Asks the model to rate every job. Jobs the model skipped or rated with a
        malformed entry are scored offline; an unusable reply is scored entirely offline.
        """
        language = Language.parse(language)
        offline = score_jobs(profile, jobs, language)
        if not jobs:
            return offline

        system_prompt = f"""
        You are a job-matching system for a career platform.
        Analyse the candidate profile and the list of vacancies and estimate the match percentage for each vacancy.
        Answer STRICTLY as a JSON array: [{{"jobId": "1", "matchPercent": 85, "explanation": "Short explanation"}}]
        Percent is between 0 and 100. Consider skills, experience, interests and education.
        Write the explanations in {LANGUAGE_NAMES[language]}.
        """
        job_brief = [
            {"id": j.id, "title": j.title, "skills": j.skills,
             "requirements": j.requirements, "experience": j.experience}
            for j in jobs
        ]
        prompt = f"""
        CANDIDATE PROFILE: {json.dumps(profile.to_dict(), ensure_ascii=False)}

        VACANCIES: {json.dumps(job_brief, ensure_ascii=False)}

        Return the JSON array with matchPercent and explanation for every vacancy. JSON only, no markdown.
        """
        data = self._parse_json(self._call_llm(prompt, system_prompt))
        if not isinstance(data, list) or not data:
            logger.info("Using offline match scores.")
            return offline

        rated: Dict[str, MatchResult] = {}
        known_ids = {str(j.id) for j in jobs}
        for item in data:
            result = self._coerce_match(item)
            if result is None or result.job_id not in known_ids:
                continue
            rated.setdefault(result.job_id, result)

        merged = []
        for fallback in offline:
            result = rated.get(fallback.job_id)
            if result is None:
                merged.append(fallback)
                continue
            if not result.explanation:
                result.explanation = fallback.explanation
            merged.append(result)

        logger.info(f"Model rated {len(rated)} of {len(jobs)} jobs")
        return merged

    @staticmethod
    def _coerce_match(item: Any) -> Optional[MatchResult]:
        if not isinstance(item, dict):
            return None
        job_id = normalize_text(item.get("jobId"))
        percent = item.get("matchPercent")
        if isinstance(percent, str):
            try:
                percent = float(percent.strip().rstrip("%"))
            except ValueError:
                return None
        if not job_id or isinstance(percent, bool) or not isinstance(percent, (int, float)):
            return None
        return MatchResult(
            job_id=job_id,
            match_percent=max(0, min(100, round_half_up(percent))),
            explanation=normalize_text(item.get("explanation")),
        )

    def generate_structured_resume(
        self,
        profile: CandidateProfile,
        answers: Any,
        tone: Tone = Tone.NEUTRAL,
        language: Language = Language.RU,
        target_job: Optional[TargetJobContext] = None,
        flow: ResumeFlow = ResumeFlow.ONLINE,
    ) -> StructuredResume:
        """
        Requests a JSON resume draft and merges it field-by-field over the
        offline synthesis.
        """
        tone = Tone.parse(tone)
        language = Language.parse(language)

        system_prompt = f"""
        You are a professional resume writer. Return ONLY clean JSON. No markdown, no asterisks, no code blocks.
        All text values must be written in {LANGUAGE_NAMES[language]}.
        JSON format:
        {{
            "fullName": "string",
            "title": "string",
            "city": "string",
            "email": "string",
            "phone": "string",
            "summary": "at least 360 characters, strong and convincing",
            "skills": ["string"],
            "strengths": ["string"],
            "achievements": ["string"],
            "tools": ["string"],
            "experience": "string",
            "education": "string",
            "languages": ["string"],
            "projects": ["string"]
        }}
        """

        target_section = ""
        if target_job is not None:
            target_section = f"""
        TARGET VACANCY: {target_job.title} ({target_job.company})
        Requirements: {', '.join(target_job.requirements)}
        Key skills: {', '.join(target_job.skills)}
        """

        prompt = f"""
        PROFILE: {json.dumps(profile.to_dict(), ensure_ascii=False)}
        ONBOARDING ANSWERS: {json.dumps(answers or [], ensure_ascii=False, default=str)}
        {locales.TONE_INSTRUCTIONS[(language, tone)]}
        Add 3-4 strong achievements and 3-5 tools. The text should read like the resume of a strong candidate.
        {target_section}
        Return JSON only.
        """
        draft = self._parse_json(self._call_llm(prompt, system_prompt))
        if draft is None:
            logger.info("Using offline resume synthesis.")
        return synthesize_resume(
            profile, answers, tone, language,
            target_job=target_job, draft=draft, flow=flow,
        )

    def generate_markdown_resume(self, profile: CandidateProfile, answers: Any,
                                 language: Language = Language.RU) -> str:
        """Free-form Markdown resume; rendered from the offline synthesis when the model is silent."""
        language = Language.parse(language)
        system_prompt = f"""
        You are a professional resume writer. Create a well-structured resume in {LANGUAGE_NAMES[language]} in Markdown.
        Use the profile data and the onboarding answers. The resume must be ready to send to an employer.
        Structure: Full name, Contacts, About, Skills, Work experience, Education, Languages, Projects.
        """
        prompt = f"""
        PROFILE: {json.dumps(profile.to_dict(), ensure_ascii=False)}
        ONBOARDING ANSWERS: {json.dumps(answers or [], ensure_ascii=False, default=str)}

        Create a professional resume in Markdown.
        """
        text = self._call_llm(prompt, system_prompt)
        if text:
            return text
        resume = synthesize_resume(profile, answers, Tone.NEUTRAL, language)
        return render_markdown(resume, language)

    def conduct_interview(self, job_title: str, requirements: Sequence[str], history: Sequence[Any],
                          is_first: bool, language: Language = Language.RU) -> str:
        """Next interviewer turn of a mock interview."""
        language = Language.parse(language)
        system_prompt = f"""
        You are a strict but fair HR interviewer. You are interviewing a candidate for the position "{job_title}".
        Position requirements: {', '.join(requirements)}.

        Rules:
        1. Ask one question at a time
        2. Questions must be relevant to the position
        3. Start with a greeting and a simple question
        4. Make the questions gradually harder
        5. Ask 5-7 questions, then close the interview
        6. Be professional but friendly
        7. Answer in {LANGUAGE_NAMES[language]}
        8. Use Markdown for formatting
        """
        if is_first:
            prompt = "Start the interview. Introduce yourself and ask the first question."
        else:
            prompt = f"""
            Conversation so far:
            {format_history(history, language)}

            Questions asked so far: {count_questions(history)}.
            Continue the interview. If 5 or more questions have been asked, close the interview and say the analysis will be ready soon.
            """

        text = self._call_llm(prompt, system_prompt)
        return text or fallback_turn(history, is_first, language)

    def analyze_interview(self, messages: Sequence[Any], job_title: str,
                          language: Language = Language.RU) -> InterviewAnalytics:
        """Scores a finished interview; fixed fallback analytics when the reply is unusable."""
        language = Language.parse(language)
        system_prompt = f"""
        You are an interview analyst. Analyse the interview and produce detailed analytics in {LANGUAGE_NAMES[language]}.

        Answer STRICTLY as JSON:
        {{
            "confidenceScore": number from 0 to 100,
            "anxietyLevel": "low" | "medium" | "high" (in the answer language),
            "responseQuality": number from 0 to 100,
            "strengths": ["strength 1", "strength 2"],
            "weaknesses": ["weakness 1"],
            "overallFeedback": "Overall feedback in 2-3 sentences",
            "detailedAnalysis": "Detailed Markdown analysis with recommendations"
        }}

        Consider answer patterns (length, detail), pauses between messages (timestamps),
        confidence of wording, relevance of answers and professional vocabulary.
        """
        history = []
        for m in messages or []:
            if isinstance(m, dict):
                history.append({"role": m.get("role"), "content": m.get("content"), "timestamp": m.get("timestamp")})
            elif hasattr(m, "content"):
                history.append({"role": m.role, "content": m.content, "timestamp": m.timestamp})

        prompt = f"""
        POSITION: {job_title}
        INTERVIEW: {json.dumps(history, ensure_ascii=False, default=str)}

        Analyse and return JSON. JSON only, no markdown wrappers.
        """
        analytics = parse_analytics(self._parse_json(self._call_llm(prompt, system_prompt)))
        if analytics is None:
            logger.info("Using fallback interview analytics.")
            return fallback_analytics(language)
        return analytics
