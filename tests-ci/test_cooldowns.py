"""
Tests de la table de cooldown (core/cooldowns.py)
"""
import pytest

from core.cooldowns import CooldownTable


@pytest.mark.unit
class TestCooldownTable:

    def test_first_call_allowed(self, clock):
        table = CooldownTable(clock=clock)
        assert table.is_on_cooldown("!hello", 10) is False

    def test_blocks_within_window(self, clock):
        table = CooldownTable(clock=clock)
        table.record("!hello")

        clock.advance(1.9)
        assert table.is_on_cooldown("!hello", 2) is True

    def test_allows_after_window(self, clock):
        table = CooldownTable(clock=clock)
        table.record("!hello")

        clock.advance(2.0)
        assert table.is_on_cooldown("!hello", 2) is False

    def test_zero_cooldown_never_blocks(self, clock):
        table = CooldownTable(clock=clock)
        table.record("!hello")
        assert table.is_on_cooldown("!hello", 0) is False

    def test_tokens_are_independent(self, clock):
        table = CooldownTable(clock=clock)
        table.record("!hello")
        assert table.is_on_cooldown("!rank", 30) is False
        assert len(table) == 1

    def test_record_refreshes_timestamp(self, clock):
        table = CooldownTable(clock=clock)
        table.record("!hello")
        clock.advance(5)
        table.record("!hello")
        assert table.last_used("!hello") == clock.now
