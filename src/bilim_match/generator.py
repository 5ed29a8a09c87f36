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
Renders a StructuredResume as an MS Word (DOCX) document or as Markdown.
"""

import logging
from typing import List

from docx import Document
from docx.shared import Pt

from bilim_match import locales
from bilim_match.models import Language, StructuredResume

logger = logging.getLogger(__name__)

# Section order shared by the DOCX and Markdown renderers
TEXT_SECTIONS = ("summary",)
LIST_SECTIONS = ("skills", "strengths", "achievements", "tools")
TRAILING_SECTIONS = ("experience", "education", "languages", "projects")


def _contact_parts(resume: StructuredResume, language: Language) -> List[str]:
    headings = locales.SECTION_HEADINGS[language]
    parts = []
    for key in ("city", "email", "phone"):
        value = getattr(resume, key)
        if value:
            parts.append(f"{headings[key]}: {value}")
    return parts


class ResumeGenerator:
    """
    Generates a styled DOCX resume from a StructuredResume.
    """
    def __init__(self, template_path: str = None):
        self.template_used = False
        self.styles = {
            'title': 'Title',
            'h1': 'Heading 1',
            'body': 'Normal',
            'bullet': 'List Bullet'
        }

        if template_path:
            try:
                logger.info(f"Loading template: {template_path}")
                self.document = Document(template_path)
                self.template_used = True
                self._detect_template_styles()
                self._clear_body_content()
            except Exception as e:
                logger.error(f"Error loading template: {e}. Falling back to default.")
                self.template_used = False
                self.document = Document()
                self._setup_styles()
        else:
            self.document = Document()
            self._setup_styles()

    def _detect_template_styles(self):
        """
        Picks the template's title, heading and bullet styles. The first
        paragraph gives the title style; list-like style names give the bullet
        style; the first heading-like style gives the section heading.
        """
        paragraphs = [p for p in self.document.paragraphs if p.text.strip()]
        if paragraphs:
            self.styles['title'] = paragraphs[0].style.name
            logger.debug(f"    > Detected Title Style: '{self.styles['title']}'")

        for p in paragraphs[1:]:
            name = p.style.name
            lowered = name.lower()
            if 'list' in lowered or 'bullet' in lowered:
                self.styles['bullet'] = name
            elif lowered.startswith('heading') and self.styles['h1'] == 'Heading 1':
                self.styles['h1'] = name

        available = {s.name for s in self.document.styles}
        for key, name in list(self.styles.items()):
            if name not in available:
                logger.warning(f"Template has no '{name}' style; using 'Normal' for {key}.")
                self.styles[key] = 'Normal'

    def _clear_body_content(self):
        """Removes all body paragraphs and tables, keeping section properties."""
        body = self.document.element.body
        for element in list(body):
            if element.tag.endswith('sectPr'):
                continue
            body.remove(element)

    def _setup_styles(self):
        style = self.document.styles['Normal']
        font = style.font
        font.name = 'Calibri'
        font.size = Pt(11)

    def _add_heading(self, text: str):
        p = self.document.add_paragraph(text.upper(), style=self.styles['h1'])
        p.paragraph_format.keep_with_next = True
        return p

    def _add_body(self, text: str):
        p = self.document.add_paragraph(text, style=self.styles['body'])
        p.paragraph_format.widow_control = True
        return p

    def _add_bullets(self, items: List[str]):
        for item in items:
            p = self.document.add_paragraph(item, style=self.styles['bullet'])
            p.paragraph_format.widow_control = True

    def generate(self, resume: StructuredResume, output_filename: str, language: Language = Language.RU):
        """
        Main entry point to generate the document.

        Args:
            resume (StructuredResume): The resume content.
            output_filename (str): The path to save the generated DOCX.
            language (Language): Selects the section headings.
        """
        language = Language.parse(language)
        headings = locales.SECTION_HEADINGS[language]

        # Header
        p = self.document.add_paragraph(resume.full_name, style=self.styles['title'])
        p.paragraph_format.keep_with_next = True

        role = self.document.add_paragraph()
        role.add_run(resume.title).bold = True

        contacts = _contact_parts(resume, language)
        if contacts:
            self.document.add_paragraph(" | ".join(contacts))
        self.document.add_paragraph()  # Spacer

        # Body sections; empty sections are skipped
        for key in TEXT_SECTIONS:
            value = getattr(resume, key)
            if value:
                self._add_heading(headings[key])
                self._add_body(value)

        for key in LIST_SECTIONS:
            items = getattr(resume, key)
            if items:
                self._add_heading(headings[key])
                self._add_bullets(items)

        for key in TRAILING_SECTIONS:
            value = getattr(resume, key)
            if not value:
                continue
            self._add_heading(headings[key])
            if isinstance(value, list):
                self._add_bullets(value)
            else:
                self._add_body(value)

        self.document.save(output_filename)
        logger.info(f"Resume saved to {output_filename}")


def render_markdown(resume: StructuredResume, language: Language = Language.RU) -> str:
    """Markdown rendition with the same section order and headings as the DOCX."""
    language = Language.parse(language)
    headings = locales.SECTION_HEADINGS[language]

    lines = [f"# {resume.full_name}", "", f"**{resume.title}**", ""]

    contacts = _contact_parts(resume, language)
    if contacts:
        lines.append(f"## {headings['contacts']}")
        lines.extend(f"- {part}" for part in contacts)
        lines.append("")

    for key in TEXT_SECTIONS + LIST_SECTIONS + TRAILING_SECTIONS:
        value = getattr(resume, key)
        if not value:
            continue
        lines.append(f"## {headings[key]}")
        if isinstance(value, list):
            lines.extend(f"- {item}" for item in value)
        else:
            lines.append(value)
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
