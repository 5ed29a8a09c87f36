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
Handles ingestion of profiles, onboarding answers and job listings (JSON),
plus free text from URLs, DOCX and PDF files.
"""

import json
import logging
import os
from typing import Any, List

import requests
import urllib3
from bs4 import BeautifulSoup
from docx import Document
from pypdf import PdfReader

from bilim_match.config import get_ca_bundle
from bilim_match.models import CandidateProfile, JobPosting

logger = logging.getLogger(__name__)

USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36'


def _is_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


def _fetch(url: str) -> requests.Response:
    """GET with the configured CA bundle, retrying unverified on SSL errors."""
    headers = {'User-Agent': USER_AGENT}
    try:
        response = requests.get(url, headers=headers, timeout=10, verify=get_ca_bundle())
        response.raise_for_status()
    except requests.exceptions.SSLError:
        logger.warning(f"SSL verification failed for {url}. Retrying without verification (Unsafe)...")
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        response = requests.get(url, headers=headers, timeout=10, verify=False)
        response.raise_for_status()
    return response


def load_json(source: str) -> Any:
    """
    Loads JSON from a local file or an HTTP(S) URL.
    Raises ValueError when the source is missing or not valid JSON.
    """
    try:
        if _is_url(source):
            return _fetch(source).json()
        with open(source, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, requests.exceptions.RequestException) as e:
        raise ValueError(f"Cannot read {source}: {e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {source}: {e}") from e


def load_profile(source: str) -> CandidateProfile:
    data = load_json(source)
    if not isinstance(data, dict):
        raise ValueError(f"Profile in {source} must be a JSON object")
    return CandidateProfile.from_dict(data)


def load_answers(source: str) -> List[Any]:
    """Onboarding answers: a JSON array, or an object holding an "answers" array."""
    data = load_json(source)
    if isinstance(data, dict):
        data = data.get("answers", [])
    if not isinstance(data, list):
        raise ValueError(f"Answers in {source} must be a JSON array")
    return data


def load_jobs(source: str) -> List[JobPosting]:
    """Job listings; records without an id are skipped."""
    data = load_json(source)
    if isinstance(data, dict):
        data = data.get("jobs", [])
    if not isinstance(data, list):
        raise ValueError(f"Jobs in {source} must be a JSON array")

    jobs = []
    for index, raw in enumerate(data):
        if not isinstance(raw, dict):
            logger.warning(f"Skipping job #{index}: not an object")
            continue
        job = JobPosting.from_dict(raw)
        if not job.id:
            logger.warning(f"Skipping job #{index}: missing id")
            continue
        jobs.append(job)

    logger.info(f"Loaded {len(jobs)} jobs from {source}")
    return jobs


def read_docx(file_path: str) -> str:
    """
    Extracts text from a DOCX file.
    """
    try:
        doc = Document(file_path)
        return '\n'.join(para.text for para in doc.paragraphs)
    except Exception as e:
        logger.error(f"Error reading {file_path}: {e}")
        return ""


def _extract_text_from_html(html) -> str:
    """Extracts clean text from raw HTML content."""
    soup = BeautifulSoup(html, 'html.parser')

    # Kill all script and style elements
    for script in soup(["script", "style"]):
        script.decompose()

    lines = (line.strip() for line in soup.get_text().splitlines())
    # Break multi-headlines into a line each
    chunks = (phrase.strip() for line in lines for phrase in line.split("  "))
    return '\n'.join(chunk for chunk in chunks if chunk)


def read_url(url: str) -> str:
    """
    Fetches a page and returns its visible text.
    """
    try:
        return _extract_text_from_html(_fetch(url).content)
    except Exception as e:
        logger.error(f"Failed to fetch {url}: {e}")
        return ""


def read_pdf(file_path: str) -> str:
    """
    Extracts text from a PDF file.
    """
    try:
        reader = PdfReader(file_path)
        return '\n'.join(page.extract_text() or "" for page in reader.pages)
    except Exception as e:
        logger.error(f"Error reading PDF {file_path}: {e}")
        return ""


def read_text_source(source: str) -> str:
    """
    Reads free text from a URL, a DOCX or PDF file, or a plain text file.
    Returns "" when the source cannot be read.
    """
    if _is_url(source):
        return read_url(source)

    ext = os.path.splitext(source)[1].lower()
    if ext == '.docx':
        return read_docx(source)
    if ext == '.pdf':
        return read_pdf(source)

    try:
        with open(source, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError as e:
        logger.error(f"Error reading {source}: {e}")
        return ""
