"""
Unit tests for LoggingNotifier.

Tests cover:
1. Notifications are recorded in memory
2. Notifications are written to the log
3. Test helper methods
"""

import logging

from contentflow.adapters.notifier import LoggingNotifier


class TestLoggingNotifier:
    def test_records_notification(self) -> None:
        notifier = LoggingNotifier()

        notifier.notify("Content published", "Launch Video")

        last = notifier.get_last()
        assert last is not None
        assert last.label == "Content published"
        assert last.title == "Launch Video"
        assert last.id.startswith("note-")
        assert notifier.count == 1

    def test_logs_notification(self, caplog) -> None:
        notifier = LoggingNotifier()

        with caplog.at_level(logging.INFO, logger="contentflow.adapters.notifier"):
            notifier.notify("Content archived", "Old Post")

        assert "Content archived" in caplog.text
        assert "Old Post" in caplog.text

    def test_custom_log_level(self, caplog) -> None:
        notifier = LoggingNotifier(log_level=logging.DEBUG)

        with caplog.at_level(logging.INFO, logger="contentflow.adapters.notifier"):
            notifier.notify("Content published", "Quiet")

        assert "Quiet" not in caplog.text
        assert notifier.count == 1


class TestLoggingNotifierHelpers:
    def test_get_last_empty(self) -> None:
        assert LoggingNotifier().get_last() is None

    def test_with_label(self) -> None:
        notifier = LoggingNotifier()
        notifier.notify("Content published", "A")
        notifier.notify("Content archived", "B")
        notifier.notify("Content published", "C")

        titles = [n.title for n in notifier.with_label("Content published")]
        assert titles == ["A", "C"]

    def test_clear(self) -> None:
        notifier = LoggingNotifier()
        notifier.notify("Content published", "A")

        notifier.clear()

        assert notifier.count == 0
