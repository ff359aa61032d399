"""
Application Dispatcher

Sends one application email per selected job and reports the outcome.

Jobs are processed strictly in order, one send at a time. A failed send
(error reply or raised exception) is recorded as a failed result and the
loop moves on; nothing short of a missing job list or profile stops a
batch once it has started.
"""

import logging
from typing import Optional, List, Sequence

from autoapply.core.errors import DispatchRejected
from autoapply.core.schemas import (
    Attachment, CandidateProfile, JobListing,
    DispatchResult, DispatchStatus, DispatchSummary, DispatchReport
)
from autoapply.services.composer import derive_employer_email, compose_application
from autoapply.services.mailer import EmailSender

logger = logging.getLogger(__name__)


class ApplicationDispatcher:
    """Emails applications for a list of jobs through one sender."""

    def __init__(self, sender: EmailSender, from_address: str):
        """
        Initialize the dispatcher.

        Args:
            sender: Transport used for every email
            from_address: Sender shown on every email
        """
        self.sender = sender
        self.from_address = from_address

    async def dispatch_one(self, job: JobListing, profile: CandidateProfile,
                           attachment: Optional[Attachment] = None) -> DispatchResult:
        """
        Send the application for a single job.

        Never raises for send failures; they come back as a failed result.
        """
        employer_email = derive_employer_email(job.employer_name, job.employer_website)
        if employer_email is None:
            # Fall back to the applicant's own address
            logger.warning(f"No employer address for {job.employer_name!r}, "
                           f"sending to applicant")
        sent_to = employer_email or profile.email

        message = compose_application(
            job, profile,
            to_address=sent_to,
            from_address=self.from_address,
            attachment=attachment
        )

        base = {
            "job_id": job.job_id,
            "job_title": job.job_title,
            "employer_name": job.employer_name,
            "apply_link": job.job_apply_link,
            "sent_to": sent_to,
        }

        try:
            outcome = await self.sender.send(message)
        except Exception as e:
            logger.error(f"Email send error for {job.employer_name}: {e}")
            return DispatchResult(
                **base,
                status=DispatchStatus.FAILED,
                message=f"Failed to send email: {str(e) or 'Unknown error'}"
            )

        if not outcome.ok:
            logger.error(f"{self.sender.name} error for {job.employer_name}: {outcome.error}")
            return DispatchResult(
                **base,
                status=DispatchStatus.FAILED,
                message=f"Email failed: {outcome.error}"
            )

        logger.info(f"Application for {job.job_title} sent to {sent_to}")
        return DispatchResult(
            **base,
            status=DispatchStatus.SENT,
            message=f"Application email sent to {sent_to}",
            email_id=outcome.message_id
        )

    async def dispatch(self, jobs: Optional[Sequence[JobListing]],
                       profile: Optional[CandidateProfile],
                       attachment: Optional[Attachment] = None) -> DispatchReport:
        """
        Send applications for every job, in order.

        Args:
            jobs: Jobs to apply to
            profile: Applicant profile used for every email
            attachment: CV file, attached to every email when given

        Returns:
            Per-job results (same order as ``jobs``) and their summary

        Raises:
            DispatchRejected: no jobs or no profile; nothing is sent
        """
        if not jobs:
            raise DispatchRejected("No jobs provided")
        if profile is None:
            raise DispatchRejected("CV profile not provided")

        logger.info(f"Dispatching {len(jobs)} applications for {profile.name!r}")

        results: List[DispatchResult] = []
        for job in jobs:
            results.append(await self.dispatch_one(job, profile, attachment))

        summary = DispatchSummary.from_results(results, applicant=profile.name)
        logger.info(f"Dispatch complete: {summary.successful}/{summary.total} sent, "
                    f"{summary.failed} failed")

        return DispatchReport(summary=summary, results=results)
