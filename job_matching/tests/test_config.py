"""
Tests for scoring configuration and environment overrides.
"""

import logging
import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from job_matching.config import (
    DEFAULT_CONFIG,
    LOG_FORMAT,
    WEIGHTS,
    ScoringConfig,
    configure_logging,
    get_settings,
    load_config,
)


class TestScoringConfig(unittest.TestCase):

    def test_defaults(self):
        self.assertEqual(DEFAULT_CONFIG.weights, WEIGHTS)
        self.assertAlmostEqual(sum(WEIGHTS.values()), 1.0)
        self.assertEqual(DEFAULT_CONFIG.education_tiers.one_below, 0.7)
        self.assertEqual(DEFAULT_CONFIG.experience_tiers.within_range, 0.8)
        self.assertEqual(DEFAULT_CONFIG.experience_tiers.floor, 0.3)
        self.assertEqual(DEFAULT_CONFIG.days_per_year, 365.25)

    def test_weights_must_sum_to_one(self):
        with self.assertRaises(ValidationError):
            ScoringConfig(weights={"education": 0.3, "experience": 0.3, "skills": 0.3, "eligibility": 0.2})

    def test_weights_must_cover_every_component(self):
        with self.assertRaises(ValidationError):
            ScoringConfig(weights={"education": 0.5, "skills": 0.5})

    def test_weights_must_be_in_range(self):
        with self.assertRaises(ValidationError):
            ScoringConfig(weights={"education": 1.5, "experience": -0.5, "skills": 0.0, "eligibility": 0.0})

    def test_tiers_must_be_in_range(self):
        with self.assertRaises(ValidationError):
            ScoringConfig(experience_tiers={"floor": 1.3})

    def test_frozen(self):
        with self.assertRaises(ValidationError):
            DEFAULT_CONFIG.score_precision = 4


class TestEnvironment(unittest.TestCase):

    @patch.dict(os.environ, {
        "MATCH_WEIGHT_EDUCATION": "0.25",
        "MATCH_WEIGHT_EXPERIENCE": "0.25",
        "MATCH_WEIGHT_SKILLS": "0.25",
        "MATCH_WEIGHT_ELIGIBILITY": "0.25",
    })
    def test_load_config_overrides(self):
        config = load_config()
        self.assertEqual(set(config.weights.values()), {0.25})

    @patch.dict(os.environ, {"MATCH_WEIGHT_SKILLS": "0.9"})
    def test_load_config_rejects_bad_sum(self):
        with self.assertRaises(ValidationError):
            load_config()

    @patch.dict(os.environ, {"MATCH_DEFAULT_LIMIT": "5", "MATCH_MAX_WORKERS": "3", "LOG_LEVEL": "debug"})
    def test_get_settings(self):
        settings = get_settings()
        self.assertEqual(settings.default_limit, 5)
        self.assertEqual(settings.max_workers, 3)
        self.assertEqual(settings.log_level, "debug")

    def test_configure_logging(self):
        with patch("job_matching.config.logging.basicConfig") as basic_config:
            configure_logging("debug")
        basic_config.assert_called_once_with(level=logging.DEBUG, format=LOG_FORMAT)


if __name__ == "__main__":
    unittest.main()
