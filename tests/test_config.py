"""
tests/test_config.py — YAML Configuration Loader Tests
=======================================================
"""

from __future__ import annotations

import pytest

from debtcollector.config import DebtCollectorConfig, load_config


def _write(tmp_path, text: str):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfig:
    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_empty_file_uses_defaults(self, tmp_path):
        cfg = load_config(_write(tmp_path, ""))
        assert cfg == DebtCollectorConfig()

    def test_values_are_read(self, tmp_path):
        cfg = load_config(_write(
            tmp_path,
            "bot_name: Ledger\n"
            "currency: eur\n"
            "currency_symbol: \"€\"\n"
            "max_debt_amount: 500\n"
            "leaderboard_size: 5\n"
            "transactions_per_page: 4\n",
        ))
        assert cfg.bot_name == "Ledger"
        assert cfg.currency == "EUR"
        assert cfg.currency_symbol == "€"
        assert cfg.max_debt_amount == 500.0
        assert cfg.leaderboard_size == 5
        assert cfg.transactions_per_page == 4

    def test_rejects_zero_leaderboard(self, tmp_path):
        with pytest.raises(ValueError):
            load_config(_write(tmp_path, "leaderboard_size: 0\n"))

    def test_rejects_non_positive_max_amount(self, tmp_path):
        with pytest.raises(ValueError):
            load_config(_write(tmp_path, "max_debt_amount: -1\n"))

    def test_config_is_frozen(self):
        cfg = DebtCollectorConfig()
        with pytest.raises(AttributeError):
            cfg.currency = "GBP"  # type: ignore[misc]
