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

import io
import json
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from docx import Document

from bilim_match import main as cli


class TestCLI(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.profile = self._write("profile.json", {
            "name": "Aibek",
            "skills": ["SQL", "Excel"],
            "desiredRole": "Analyst",
        })
        self.jobs = self._write("jobs.json", [
            {"id": "1", "title": "Data Analyst", "company": "Kaspi", "skills": ["SQL"], "requirements": ["Power BI"]},
            {"id": "2", "title": "Driver", "skills": ["Driving"]},
        ])
        self.logging_patch = patch.object(cli, 'setup_logging')
        self.logging_patch.start()

    def tearDown(self):
        self.logging_patch.stop()
        shutil.rmtree(self.test_dir)

    def _write(self, name, data):
        path = os.path.join(self.test_dir, name)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False)
        return path

    def _run(self, *argv):
        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            cli.main(["--offline", "-q", *argv])
        return stdout.getvalue()

    def test_match_prints_json(self):
        output = json.loads(self._run("match", "--profile", self.profile, "--jobs", self.jobs))
        self.assertEqual([r["jobId"] for r in output], ["1", "2"])
        self.assertGreater(output[0]["matchPercent"], output[1]["matchPercent"])

    def test_resume_json_tailored(self):
        output = json.loads(self._run(
            "resume", "--profile", self.profile, "--jobs", self.jobs, "--target-job", "1", "--tone", "bold",
        ))
        self.assertEqual(output["fullName"], "Aibek")
        self.assertEqual(output["skills"][0], "SQL")
        self.assertIn("Power BI", output["achievements"][0])

    def test_resume_markdown_to_file(self):
        target = os.path.join(self.test_dir, "out", "resume.md")
        stdout = self._run("resume", "--profile", self.profile, "--format", "md", "--lang", "kk", "--output", target)
        self.assertEqual(stdout, "")
        with open(target, encoding='utf-8') as f:
            self.assertTrue(f.read().startswith("# Aibek"))

    def test_resume_docx(self):
        target = os.path.join(self.test_dir, "resume.docx")
        self._run("resume", "--profile", self.profile, "--format", "docx", "--output", target)
        self.assertEqual(Document(target).paragraphs[0].text, "Aibek")

    def test_about_file_replaces_summary(self):
        about = os.path.join(self.test_dir, "about.txt")
        with open(about, 'w', encoding='utf-8') as f:
            f.write("Аналитик с пятилетним опытом построения отчётности для банков.")
        output = json.loads(self._run("resume", "--profile", self.profile, "--about-file", about))
        self.assertEqual(output["summary"], "Аналитик с пятилетним опытом построения отчётности для банков.")

    def test_unknown_target_job_exits_1(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run("resume", "--profile", self.profile, "--jobs", self.jobs, "--target-job", "404")
        self.assertEqual(ctx.exception.code, 1)

    def test_missing_profile_exits_1(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run("match", "--profile", os.path.join(self.test_dir, "none.json"), "--jobs", self.jobs)
        self.assertEqual(ctx.exception.code, 1)

    def test_interview_analytics_fallback(self):
        transcript = self._write("transcript.json", {
            "jobTitle": "Analyst",
            "messages": [{"role": "assistant", "content": "Кто вы?"}, {"role": "user", "content": "Аналитик"}],
        })
        output = json.loads(self._run("interview-analytics", "--transcript", transcript))
        self.assertEqual(output["confidenceScore"], 72)
        self.assertEqual(output["responseQuality"], 68)

    def test_keyboard_interrupt_exits_130(self):
        with patch.object(cli, '_main_cli', side_effect=KeyboardInterrupt):
            with patch('sys.stderr', new_callable=io.StringIO):
                with self.assertRaises(SystemExit) as ctx:
                    cli.main([])
        self.assertEqual(ctx.exception.code, 130)


if __name__ == '__main__':
    unittest.main()
