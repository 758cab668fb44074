"""
Test suite for session module

Tests the advisory idle-session warning.
"""

from datetime import datetime, timedelta

from banking_ledger.session import SessionActivity


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class TestSessionActivity:
    """Test idle tracking"""

    def setup_method(self):
        """Set up test fixtures"""
        self.clock = FakeClock(datetime(2024, 3, 15, 9, 0, 0))
        self.session = SessionActivity("12345678", idle_warning=timedelta(minutes=3),
                                       clock=self.clock)

    def test_fresh_session_does_not_warn(self):
        """Test a new session is not idle"""
        assert self.session.idle_for() == timedelta(0)
        assert not self.session.should_warn()

    def test_warns_from_threshold(self):
        """Test the warning fires once idle time reaches the threshold"""
        self.clock.now += timedelta(minutes=3) - timedelta(microseconds=1)
        assert not self.session.should_warn()
        self.clock.now += timedelta(microseconds=1)
        assert self.session.idle_for() == timedelta(minutes=3)
        assert self.session.should_warn()

    def test_touch_resets_idle_time(self):
        """Test an interaction restarts the idle timer"""
        self.clock.now += timedelta(minutes=5)
        self.session.touch()
        assert self.session.idle_for() == timedelta(0)
        assert not self.session.should_warn()

    def test_default_threshold_from_config(self):
        """Test the default threshold comes from configuration"""
        session = SessionActivity("12345678", clock=self.clock)
        assert session.idle_warning == timedelta(seconds=180)
