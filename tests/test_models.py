#!/usr/bin/env python3
"""Tests for the data models."""

import dataclasses
import unittest

from card_wiki.models import Card, SiteConfig


class TestCard(unittest.TestCase):
    """Test Card dataclass."""

    def test_tag_list(self):
        card = Card("1", "Knight", "unit", "normal", "", "melee, fire  hero、王/x")
        self.assertEqual(card.tag_list, ["melee", "fire", "hero", "王", "x"])
        self.assertEqual(Card("1", "a", "", "", "", "").tag_list, [])

    def test_display_name(self):
        self.assertEqual(
            Card("042", "Knight", "", "", "", "").display_name, "Knight (042)"
        )
        self.assertEqual(Card("", "Knight", "", "", "", "").display_name, "Knight")

    def test_cards_are_immutable(self):
        card = Card("1", "Knight", "unit", "normal", "", "")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            card.name = "Other"


class TestSiteConfig(unittest.TestCase):
    """Test SiteConfig normalization."""

    def test_base_path_normalized(self):
        self.assertEqual(SiteConfig(base_path="wiki").base_path, "/wiki/")
        self.assertEqual(SiteConfig(base_path="").base_path, "/")
        self.assertEqual(SiteConfig(base_path="/wiki/").base_path, "/wiki/")

    def test_base_url_trailing_slash_removed(self):
        config = SiteConfig(base_url="https://example.com/wiki/")
        self.assertEqual(config.base_url, "https://example.com/wiki")


if __name__ == "__main__":
    unittest.main()
