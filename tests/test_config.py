"""Configuration class tests."""

from __future__ import annotations

from campus_events.config import BaseConfig, DevelopmentConfig, ProductionConfig


def test_production_inherits_the_default_log_level():
    assert "LOG_LEVEL" not in vars(ProductionConfig)
    assert ProductionConfig.LOG_LEVEL == BaseConfig.LOG_LEVEL
    assert "LOG_LEVEL" in vars(DevelopmentConfig)
