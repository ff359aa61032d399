"""
AutoApply CLI Demo

Command-line walkthrough of the full flow.
Run with: python -m autoapply.examples.cli_demo path/to/cv.pdf --query "web developer" --apply 3 --dry-run

This shows how the components work together:
1. CV parsing and profile extraction
2. UAE job search via JSearch (needs JSEARCH_RAPIDAPI_KEY)
3. Application emails to the first N jobs (log only with --dry-run)
"""

import sys
import asyncio
import logging
import argparse
from pathlib import Path

from autoapply.core.config import get_settings
from autoapply.core.errors import AutoApplyError
from autoapply.core.schemas import CandidateProfile, DispatchReport, DispatchStatus
from autoapply.agents.cv_parser.cv_parser import CVParser
from autoapply.agents.discovery.discovery_agent import JSearchClient, build_search_query
from autoapply.services.composer import attachment_from_profile
from autoapply.services.dispatcher import ApplicationDispatcher
from autoapply.services.mailer import LoggingEmailSender, build_email_sender

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def print_profile(profile: CandidateProfile):
    """Pretty print an extracted profile."""

    print("\n" + "=" * 60)
    print("           EXTRACTED PROFILE")
    print("=" * 60)
    print(f"Name:       {profile.name or '-'}")
    print(f"Email:      {profile.email or '-'}")
    print(f"Phone:      {profile.phone or '-'}")
    print(f"Job title:  {profile.job_title or '-'}")
    print(f"Experience: {profile.experience or '-'}")
    print(f"Skills:     {', '.join(profile.skills) or '-'}")
    if profile.summary:
        print(f"\nSummary:\n{profile.summary}")


def print_report(report: DispatchReport):
    """Pretty print dispatch results."""

    print("\n" + "=" * 60)
    print("           APPLICATION RESULTS")
    print("=" * 60)
    for result in report.results:
        mark = "OK  " if result.status == DispatchStatus.SENT else "FAIL"
        print(f"[{mark}] {result.employer_name} - {result.job_title}")
        print(f"       {result.message}")

    s = report.summary
    print(f"\n{s.successful} of {s.total} applications sent for {s.applicant} "
          f"({s.failed} failed)")


def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    cv_path = Path(args.cv)

    parser = CVParser(parser_settings=settings.parser)
    profile, _ = parser.parse_document(cv_path.read_bytes(), cv_path.name)
    print_profile(profile)

    if args.apply <= 0 and not args.query:
        return 0

    query = build_search_query(args.query, profile)
    print(f"\nSearching UAE jobs for: {query!r} (page {args.page})")

    jobs = JSearchClient(settings.job_search).search(query, page=args.page)
    print(f"Found {len(jobs)} jobs")
    for i, job in enumerate(jobs[:10], 1):
        print(f"{i:>3}. {job.employer_name} - {job.job_title}")

    if args.apply <= 0:
        return 0

    selected = jobs[:args.apply]
    if not selected:
        print("No jobs to apply to.")
        return 0

    sender = LoggingEmailSender() if args.dry_run else build_email_sender(settings.mail)
    dispatcher = ApplicationDispatcher(sender, from_address=settings.mail.from_address)

    report = asyncio.run(
        dispatcher.dispatch(selected, profile, attachment_from_profile(profile))
    )
    print_report(report)

    return 0 if report.summary.failed == 0 else 1


def main():
    """Main entry point."""

    arg_parser = argparse.ArgumentParser(description="AutoApply UAE demo")
    arg_parser.add_argument("cv", help="CV file (PDF, DOCX or TXT)")
    arg_parser.add_argument("--query", default="", help="Search text; defaults to the CV's job title")
    arg_parser.add_argument("--page", type=int, default=1)
    arg_parser.add_argument("--apply", type=int, default=0,
                            help="Apply to the first N jobs found")
    arg_parser.add_argument("--dry-run", action="store_true",
                            help="Log emails instead of sending them")
    args = arg_parser.parse_args()

    try:
        sys.exit(run(args))
    except AutoApplyError as e:
        logger.error(str(e))
        sys.exit(2)


if __name__ == "__main__":
    main()
