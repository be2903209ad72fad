"""Message summary formatting for scan reports."""

from email.message import Message
from typing import Optional

from mboxscan.config.scanner_config import ReportConfig
from mboxscan.utils.header_utils import decode_header_value, parse_date, split_sender, truncate_subject


class MetadataFormatter:
    """Format one-line summaries of scanned messages."""

    MISSING_VALUE = "-"

    def __init__(self, config: Optional[ReportConfig] = None):
        """
        Initialize formatter with configuration.

        Args:
            config: Report configuration with the summary template
        """
        config = config or ReportConfig()
        self.summary_template = config.summary_template
        self.subject_max_length = config.subject_max_length

    def format_summary(self, offset: int, message: Message) -> str:
        """
        Format a message summary line.

        Args:
            offset: Stream position before the message was scanned (start of its
                separator line, or of any blank lines or noise skipped before it)
            message: Decoded message (or header block)

        Returns:
            Formatted summary string
        """
        sender_name, sender_email = split_sender(message.get("From"))
        sender_display = f"{sender_name} <{sender_email}>" if sender_name else sender_email

        sent_date = parse_date(message.get("Date"))
        date_str = sent_date.strftime("%Y-%m-%d %H:%M") if sent_date else self.MISSING_VALUE

        subject = truncate_subject(decode_header_value(message.get("Subject")), self.subject_max_length)

        return self.summary_template.format(
            offset=offset,
            sender=sender_display or self.MISSING_VALUE,
            date=date_str,
            subject=subject or self.MISSING_VALUE,
        )

    def format_footer(self, total_messages: int, position: int, error: Optional[Exception] = None) -> str:
        """
        Format the report footer.

        Args:
            total_messages: Number of messages scanned
            position: Bytes consumed from the stream
            error: Scan error, if the scan stopped early

        Returns:
            Footer string
        """
        footer = f"Scanned {total_messages} messages, {position} bytes"
        if error is not None:
            footer += f"\nScan stopped: {error.__class__.__name__}: {error}"
        return footer
