"""Tests for new-device notifications."""

from auth_log.notification import SUBJECT, MailNotifier, NullNotifier, describe_device
from auth_log.schema import UserInformation, UserReference

CHROME_WINDOWS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class RecordingTransport:
    def __init__(self):
        self.messages = []

    def send_message(self, message):
        self.messages.append(message)


class TestDescribeDevice:
    """Tests for user agent summaries."""
    
    def test_known_browser(self):
        assert describe_device(CHROME_WINDOWS) == "Chrome on Windows"
    
    def test_missing_user_agent(self):
        assert describe_device(None) == "Unknown device"
        assert describe_device("") == "Unknown device"


class TestMailNotifier:
    """Tests for the mail notifier."""
    
    def test_sends_message_to_principal(self, user_reference, login_time, paris):
        """Test the email is addressed and describes the sign-in."""
        transport = RecordingTransport()
        notifier = MailNotifier(transport, "no-reply@example.com", "Security")
        info = UserInformation(
            ip_address="203.0.113.5",
            user_agent=CHROME_WINDOWS,
            login_at=login_time,
            location=paris,
        )
        
        notifier.send(info, user_reference)
        
        assert len(transport.messages) == 1
        message = transport.messages[0]
        assert message["Subject"] == SUBJECT
        assert message["To"] == "Alice <alice@acme.dev>"
        assert message["From"] == "Security <no-reply@example.com>"
        
        body = message.get_content()
        assert "Hello Alice," in body
        assert "203.0.113.5" in body
        assert "Chrome on Windows" in body
        assert "Paris, France" in body
        assert "2026-01-15 08:30:00" in body
    
    def test_unknown_location(self, user_reference, user_information):
        """Test a login without location still renders."""
        transport = RecordingTransport()
        
        MailNotifier(transport, "no-reply@example.com", "Security").send(
            user_information, user_reference
        )
        
        assert "Location: Unknown" in transport.messages[0].get_content()
    
    def test_skips_principal_without_email(self, user_information):
        """Test nothing is sent when there is no address."""
        transport = RecordingTransport()
        reference = UserReference(type="account", id="7")
        
        MailNotifier(transport, "no-reply@example.com", "Security").send(
            user_information, reference
        )
        
        assert transport.messages == []
    
    def test_null_notifier(self, user_reference, user_information):
        NullNotifier().send(user_information, user_reference)
