"""New-device notifications.

The mail notifier renders a short message describing the sign-in and
hands it to a transport. The transport is the only part that talks to
a mail server.
"""

import logging
import smtplib
from email.headerregistry import Address
from email.message import EmailMessage
from typing import Protocol

from user_agents import parse as parse_ua

from auth_log.schema import UserInformation, UserReference

logger = logging.getLogger(__name__)

SUBJECT = "New sign-in to your account"


class Notifier(Protocol):
    """Sends the new-device notification for a login."""

    def send(self, user_information: UserInformation, user_reference: UserReference) -> None:
        ...


class MailTransport(Protocol):
    def send_message(self, message: EmailMessage) -> None:
        ...


class NullNotifier:
    """Notifier that sends nothing."""

    def send(self, user_information: UserInformation, user_reference: UserReference) -> None:
        logger.debug(f"Notification disabled for {user_reference.type}:{user_reference.id}")


class SmtpTransport:
    """Delivers messages through an SMTP server."""

    def __init__(self, host: str = "localhost", port: int = 25, timeout: float = 10.0):
        self.host = host
        self.port = port
        self.timeout = timeout

    def send_message(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            smtp.send_message(message)


class MailNotifier:
    """Emails the principal about a new sign-in.
    
    Args:
        transport: Delivers the rendered message.
        sender_email: From address.
        sender_name: From display name.
    """

    def __init__(self, transport: MailTransport, sender_email: str, sender_name: str):
        self.transport = transport
        self.sender_email = sender_email
        self.sender_name = sender_name

    def send(self, user_information: UserInformation, user_reference: UserReference) -> None:
        """Send the notification, unless the principal has no address.
        
        Args:
            user_information: Snapshot of the login.
            user_reference: Principal carrying the notification target.
        """
        if not user_reference.email:
            logger.info(
                f"No notification email for {user_reference.type}:{user_reference.id}, skipping"
            )
            return
        
        message = self.build_message(user_information, user_reference)
        self.transport.send_message(message)
        logger.info(f"Sent new sign-in notification to {user_reference.email}")

    def build_message(
        self,
        user_information: UserInformation,
        user_reference: UserReference,
    ) -> EmailMessage:
        """Render the notification email."""
        message = EmailMessage()
        message["Subject"] = SUBJECT
        message["From"] = str(Address(self.sender_name, addr_spec=self.sender_email))
        message["To"] = str(
            Address(user_reference.display_name or "", addr_spec=user_reference.email)
        )
        message.set_content(_render_body(user_information, user_reference))
        return message


def describe_device(user_agent: str | None) -> str:
    """Summarize a user agent, e.g. ``"Chrome on Windows"``.
    
    Args:
        user_agent: User agent string.
        
    Returns:
        Browser and OS families, or "Unknown device".
    """
    if not user_agent:
        return "Unknown device"
    
    ua = parse_ua(user_agent)
    browser = ua.browser.family or "Unknown"
    os = ua.os.family or "Unknown"
    return f"{browser} on {os}"


def _render_body(user_information: UserInformation, user_reference: UserReference) -> str:
    greeting = user_reference.display_name or user_reference.email
    location = user_information.location.label() if user_information.location else None
    
    lines = [
        f"Hello {greeting},",
        "",
        "Your account was just used to sign in from a new device.",
        "",
        f"  Date:     {user_information.login_at.strftime('%Y-%m-%d %H:%M:%S %Z').strip()}",
        f"  Device:   {describe_device(user_information.user_agent)}",
        f"  IP:       {user_information.ip_address or 'Unknown'}",
        f"  Location: {location or 'Unknown'}",
        "",
        "If this was you, no action is needed. Otherwise, change your password.",
    ]
    return "\n".join(lines)
