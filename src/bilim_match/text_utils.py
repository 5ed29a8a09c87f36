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
Text normalization helpers shared by the scorer and the resume synthesizer.
"""

from typing import Any, Iterable, List, Optional

_SCALARS = (str, int, float)


def normalize_text(value: Any) -> str:
    """Returns a trimmed string for any value; None becomes an empty string."""
    if value is None:
        return ""
    return str(value).strip()


def to_string_list(value: Any) -> List[str]:
    """
    Coerces a JSON-ish list into trimmed, non-empty strings.
    Anything that is not a list/tuple yields an empty list.
    """
    if not isinstance(value, (list, tuple)):
        return []
    items = []
    for item in value:
        # bool is an int subclass but "True" is never a useful entry
        if isinstance(item, bool) or not isinstance(item, _SCALARS):
            continue
        text = str(item).strip()
        if text:
            items.append(text)
    return items


def merge_unique(values: Iterable[str], limit: Optional[int] = None) -> List[str]:
    """
    Deduplicates by trimmed, case-preserving identity, keeping first occurrence.
    Empty entries are dropped and None counts as no values. `limit` caps the
    result length.
    """
    seen = set()
    merged = []
    for value in values or ():
        text = normalize_text(value)
        if not text or text in seen:
            continue
        seen.add(text)
        merged.append(text)
    if limit is not None:
        return merged[:limit]
    return merged


def extract_answers(answers: Any) -> List[str]:
    """
    Flattens onboarding answers into plain strings.

    An entry is normally {"question": ..., "answer": ...}; when `answer` is not a
    string, every string value of the entry is joined instead. Bare strings are
    accepted as answers too.
    """
    if not isinstance(answers, (list, tuple)):
        return []

    extracted = []
    for entry in answers:
        if isinstance(entry, str):
            text = entry.strip()
        elif isinstance(entry, dict):
            answer = entry.get("answer")
            if isinstance(answer, str):
                text = answer.strip()
            else:
                parts = [v.strip() for v in entry.values() if isinstance(v, str)]
                text = " ".join(parts).strip()
        else:
            continue
        if text:
            extracted.append(text)
    return extracted


def answer_text(answers: Any) -> str:
    """Concatenated lowercase text of all answers, used for keyword scans."""
    return " ".join(extract_answers(answers)).lower()
