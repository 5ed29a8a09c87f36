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
Main entry point for the BilimMatch CLI.
"""

import argparse
import dataclasses
import json
import logging
import os
import re
import sys
from collections import deque
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.live import Live
from rich.text import Text

from bilim_match.config import Settings, set_ca_bundle_override
from bilim_match.generator import ResumeGenerator, render_markdown
from bilim_match.ingest import load_answers, load_jobs, load_json, load_profile, read_text_source
from bilim_match.llm_client import LLMClient
from bilim_match.models import InterviewMessage, Language, ResumeFlow, TargetJobContext, Tone

logger = logging.getLogger(__name__)

OUTPUT_DIR = "user_content/generated_resumes"


class StatusLogHandler(logging.Handler):
    """
    Custom handler to store the last N logs for a scrolling status display.
    """
    def __init__(self, console, maxlen=5):
        super().__init__()
        self.console = console
        self.maxlen = maxlen
        self.logs = deque(maxlen=maxlen)
        self.live = None

    def emit(self, record):
        try:
            self.logs.append(self.format(record))
            if self.live:
                self.live.update(self.get_renderable())
        except Exception:
            self.handleError(record)

    def get_renderable(self):
        return Text("\n".join(self.logs), style="dim grey50")


def setup_logging(verbosity: int, quiet: bool = False, custom_handler: logging.Handler = None):
    """
    Configures logging:
    - File: user_content/logs/bilim_match.log (DEBUG)
    - Console: Default=INFO (status panel), -q=ERROR, -v=WARNING, -vv=INFO, -vvv=DEBUG
    """
    log_dir = Path("user_content/logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "bilim_match.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    root.addHandler(file_handler)

    if quiet:
        level = logging.ERROR
    elif verbosity == 1:
        level = logging.WARNING
    elif verbosity == 2:
        level = logging.INFO
    elif verbosity >= 3:
        level = logging.DEBUG
    else:
        level = logging.INFO

    # Console output goes to stderr so JSON on stdout stays clean
    handler = custom_handler or logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter('%(message)s'))
    root.addHandler(handler)

    # Silence some noisy libs if not in super debug
    if verbosity < 3:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="BilimMatch: job matching and resume builder")
    parser.add_argument("--offline", action="store_true", help="Skip the AI service and use the offline engine only")
    parser.add_argument("--ca-bundle", help="Path to a custom CA certificate bundle for HTTPS verification (proxy environments)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase output verbosity (-v=WARNING, -vv=INFO, -vvv=DEBUG)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress status output (ERROR only)")

    sub = parser.add_subparsers(dest="command", required=True)

    match = sub.add_parser("match", help="Score job listings against a candidate profile")
    match.add_argument("--profile", required=True, help="Profile JSON (file path or URL)")
    match.add_argument("--jobs", required=True, help="Job listings JSON (file path or URL)")
    match.add_argument("--lang", default="ru", choices=[l.value for l in Language], help="Output language")
    match.add_argument("--output", help="Write JSON results to this file instead of stdout")

    resume = sub.add_parser("resume", help="Build a structured resume")
    resume.add_argument("--profile", required=True, help="Profile JSON (file path or URL)")
    resume.add_argument("--answers", help="Onboarding answers JSON (file path or URL)")
    resume.add_argument("--jobs", help="Job listings JSON, required with --target-job")
    resume.add_argument("--target-job", help="Id of the job to tailor the resume to")
    resume.add_argument("--target-description", help="URL or file with the target job description")
    resume.add_argument("--about-file", help="URL or file whose text replaces the profile 'about'")
    resume.add_argument("--tone", default="neutral", choices=[t.value for t in Tone], help="Narrative tone")
    resume.add_argument("--lang", default="ru", choices=[l.value for l in Language], help="Output language")
    resume.add_argument("--strict-summary", action="store_true",
                        help="Require the long (structured) summary from the AI draft")
    resume.add_argument("--format", default="json", choices=["json", "md", "docx"], help="Output format")
    resume.add_argument("--template", help="DOCX template for --format docx")
    resume.add_argument("--output", help="Output file (default: stdout for json/md, generated_resumes/ for docx)")

    analytics = sub.add_parser("interview-analytics", help="Analyze a saved mock-interview transcript")
    analytics.add_argument("--transcript", required=True, help="Transcript JSON: a message list or {jobTitle, messages}")
    analytics.add_argument("--job-title", help="Position title (overrides the transcript's jobTitle)")
    analytics.add_argument("--lang", default="ru", choices=[l.value for l in Language], help="Output language")
    analytics.add_argument("--output", help="Write JSON analytics to this file instead of stdout")

    return parser


def _make_client(args) -> LLMClient:
    settings = Settings.from_env()
    if args.offline:
        settings = dataclasses.replace(settings, disabled=True)
    return LLMClient(settings)


def _dump_json(data) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


def _write_or_return(text: str, output: Optional[str]) -> Optional[str]:
    """Writes text to `output` when given; otherwise returns it for stdout."""
    if not output:
        return text
    os.makedirs(os.path.dirname(output) or ".", exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        f.write(text)
    logger.info(f"Saved to {output}")
    return None


def _safe_filename(title: str) -> str:
    safe = re.sub(r'[^\w\s-]', '', title)
    safe = re.sub(r'[-\s]+', '_', safe).strip('-_')
    return safe[:60] or "Resume"


def _resolve_target(args) -> Optional[TargetJobContext]:
    target = None
    if args.target_job:
        if not args.jobs:
            raise ValueError("--target-job requires --jobs")
        jobs = {job.id: job for job in load_jobs(args.jobs)}
        job = jobs.get(args.target_job)
        if job is None:
            raise ValueError(f"Job '{args.target_job}' not found in {args.jobs}")
        target = TargetJobContext.from_job(job)
        logger.info(f"Tailoring to: {job.title} ({job.company})")

    if args.target_description:
        text = read_text_source(args.target_description)
        if not text:
            raise ValueError(f"Could not extract text from {args.target_description}")
        if target is None:
            # Free-text posting: its first line serves as the title
            title = next((line.strip() for line in text.splitlines() if line.strip()), "")
            target = TargetJobContext(title=title[:120], company="")
        target.description = text

    return target


def _run_match(args, client: LLMClient) -> Optional[str]:
    profile = load_profile(args.profile)
    jobs = load_jobs(args.jobs)
    logger.info(f"Matching {len(jobs)} jobs...")
    results = client.match_jobs(profile, jobs, Language.parse(args.lang))
    return _write_or_return(_dump_json([r.to_dict() for r in results]), args.output)


def _run_resume(args, client: LLMClient) -> Optional[str]:
    profile = load_profile(args.profile)
    answers = load_answers(args.answers) if args.answers else []
    language = Language.parse(args.lang)

    if args.about_file:
        about = read_text_source(args.about_file).strip()
        if about:
            profile.about = about
        else:
            logger.warning(f"No text found in {args.about_file}; keeping profile 'about'.")

    target = _resolve_target(args)
    flow = ResumeFlow.STRUCTURED if args.strict_summary else ResumeFlow.ONLINE

    logger.info("Building resume (this may take a moment)...")
    resume = client.generate_structured_resume(profile, answers, Tone.parse(args.tone), language,
                                               target_job=target, flow=flow)

    if args.format == "json":
        return _write_or_return(_dump_json(resume.to_dict()), args.output)
    if args.format == "md":
        return _write_or_return(render_markdown(resume, language), args.output)

    output = args.output or os.path.join(OUTPUT_DIR, f"{_safe_filename(resume.full_name)}.docx")
    os.makedirs(os.path.dirname(output) or ".", exist_ok=True)
    if args.template and not os.path.exists(args.template):
        raise ValueError(f"Template file not found: {args.template}")
    logger.info(f"Generating DOCX to: {output}")
    ResumeGenerator(template_path=args.template).generate(resume, output, language)
    return None


def _run_interview_analytics(args, client: LLMClient) -> Optional[str]:
    data = load_json(args.transcript)
    job_title = args.job_title or ""
    if isinstance(data, dict):
        job_title = job_title or str(data.get("jobTitle") or "")
        data = data.get("messages", [])
    if not isinstance(data, list):
        raise ValueError(f"Transcript in {args.transcript} must hold a message list")

    messages = [InterviewMessage.from_dict(m) for m in data if isinstance(m, dict)]
    logger.info(f"Analyzing {len(messages)} interview messages...")
    analytics = client.analyze_interview(messages, job_title, Language.parse(args.lang))
    return _write_or_return(_dump_json(analytics.to_dict()), args.output)


COMMANDS = {
    "match": _run_match,
    "resume": _run_resume,
    "interview-analytics": _run_interview_analytics,
}


def _run_main_logic(args) -> Optional[str]:
    """Runs the selected subcommand; input errors are logged and exit with status 1."""
    client = _make_client(args)
    try:
        return COMMANDS[args.command](args, client)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)
    except OSError as e:
        logger.error(f"Error writing output: {e}")
        sys.exit(1)


def main(argv=None):
    try:
        _main_cli(argv)
    except KeyboardInterrupt:
        # Use stderr so it captures attention even if stdout is redirected or rich
        sys.stderr.write("\n\033[31m[-] Cancelled by user\033[0m\n")
        sys.exit(130)


def _main_cli(argv=None):
    """
    Parses arguments, configures logging and runs the subcommand. Results
    destined for stdout are printed after the status display closes.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure custom CA bundle if provided via CLI
    if args.ca_bundle:
        set_ca_bundle_override(args.ca_bundle)

    if args.quiet:
        setup_logging(0, quiet=True)
        result = _run_main_logic(args)
    elif args.verbose == 0:
        # Default mode: scrolling status panel on stderr
        console = Console(stderr=True)
        status_handler = StatusLogHandler(console)
        setup_logging(2, custom_handler=status_handler)
        with Live(status_handler.get_renderable(), refresh_per_second=4, console=console) as live:
            status_handler.live = live
            logger.info("--- BilimMatch ---")
            result = _run_main_logic(args)
    else:
        setup_logging(args.verbose)
        logger.info("--- BilimMatch ---")
        result = _run_main_logic(args)

    if result is not None:
        sys.stdout.write(result if result.endswith("\n") else result + "\n")


if __name__ == "__main__":
    main()
