"""Email notifiers.

``email-smtp`` submits the report to an SMTP server directly, using STARTTLS
on 587 or SSL otherwise.  ``email-sendmail`` hands it to the local mail
transport agent.  Both send the plain-text report as the body.
"""

from __future__ import annotations

import logging
import smtplib
import ssl
import subprocess
from dataclasses import dataclass, field
from email.message import EmailMessage
from typing import Optional, Tuple

import requests

from ..errors import ConfigError, NotifierError, missing_parameter
from ..models import CheckResult
from .base import Notifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailParams:
    sender: Optional[str] = None
    recipients: Tuple[str, ...] = ()
    subject_prefix: str = ""


@dataclass(frozen=True)
class SmtpParams:
    email: EmailParams = field(default_factory=EmailParams)
    host: str = "smtp.gmail.com"
    port: int = 587
    use_tls: bool = True
    username: Optional[str] = None
    password: Optional[str] = None


@dataclass(frozen=True)
class SendmailParams:
    email: EmailParams = field(default_factory=EmailParams)
    command: Optional[str] = None


def _check_address(owner: str, address: str, env_name: str) -> str:
    address = address.strip()
    if "@" not in address:
        raise ConfigError(f"{owner}: `{address}` in {env_name} is not an email address")
    return address


class _EmailNotifier(Notifier):
    def __init__(self, email: EmailParams, session: Optional[requests.Session] = None) -> None:
        super().__init__(session)
        if not email.sender:
            raise missing_parameter(self.name, "EMAIL_FROM")
        if not email.recipients:
            raise missing_parameter(self.name, "EMAIL_TO")
        self.sender = _check_address(self.name, email.sender, "EMAIL_FROM")
        self.recipients = tuple(_check_address(self.name, r, "EMAIL_TO") for r in email.recipients)
        self.subject_prefix = email.subject_prefix

    def build_message(self, result: CheckResult) -> EmailMessage:
        subject = f"Server availability notification for {result.provider_name}"
        if self.subject_prefix:
            subject = f"{self.subject_prefix} {subject}"
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = ", ".join(self.recipients)
        msg.set_content(str(result))
        return msg


class SmtpEmail(_EmailNotifier):
    name = "email-smtp"

    def __init__(self, params: SmtpParams, session: Optional[requests.Session] = None) -> None:
        super().__init__(params.email, session)
        if not params.host:
            raise missing_parameter(self.name, "EMAIL_SMTP_HOST")
        if params.password and not params.username:
            raise missing_parameter(self.name, "EMAIL_USERNAME", "EMAIL_PASSWORD is set")
        self.params = params

    def send(self, result: CheckResult) -> None:
        msg = self.build_message(result)
        p = self.params
        try:
            if p.use_tls and p.port == 587:
                with smtplib.SMTP(p.host, p.port) as s:
                    s.ehlo()
                    s.starttls(context=ssl.create_default_context())
                    if p.username:
                        s.login(p.username, p.password or "")
                    s.send_message(msg)
            else:
                with smtplib.SMTP_SSL(p.host, p.port, context=ssl.create_default_context()) as s:
                    if p.username:
                        s.login(p.username, p.password or "")
                    s.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise NotifierError(self.name, f"SMTP submission to {p.host}:{p.port} failed: {e}") from e
        logger.info("Email sent to %s (subject=%s)", ", ".join(self.recipients), msg["Subject"])


class SendmailEmail(_EmailNotifier):
    name = "email-sendmail"

    def __init__(self, params: SendmailParams, session: Optional[requests.Session] = None) -> None:
        super().__init__(params.email, session)
        if not params.command:
            raise missing_parameter(self.name, "SENDMAIL_COMMAND", "no sendmail found on PATH")
        self.command = params.command

    def send(self, result: CheckResult) -> None:
        msg = self.build_message(result)
        try:
            proc = subprocess.run(
                [self.command, "-i", "-t"],
                input=msg.as_bytes(),
                capture_output=True,
                check=False,
            )
        except OSError as e:
            raise NotifierError(self.name, f"cannot run {self.command}: {e}") from e
        if proc.returncode != 0:
            detail = proc.stderr.decode("utf-8", errors="replace").strip()
            raise NotifierError(self.name, f"{self.command} exited with {proc.returncode}: {detail}")
        logger.info("Email handed to %s for %s", self.command, ", ".join(self.recipients))
