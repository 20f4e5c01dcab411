from school_office.core.notifications import LoggingReminderSender


class TestLoggingReminderSender:
    def test_send_returns_count(self):
        sender = LoggingReminderSender()
        assert sender.send(["inv-1", "inv-2"], context="Term 1") == 2
        assert list(sender.sent_batches) == [["inv-1", "inv-2"]]

    def test_history_is_capped(self):
        sender = LoggingReminderSender(max_batches=3)
        for index in range(10):
            sender.send([f"inv-{index}"])

        assert len(sender.sent_batches) == 3
        assert list(sender.sent_batches) == [["inv-7"], ["inv-8"], ["inv-9"]]
