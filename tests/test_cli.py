#!/usr/bin/env python3
"""Tests for the command-line entry points."""

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from card_wiki import cli, generate_search_index


class TestCli(unittest.TestCase):
    """Test card-wiki command behaviour."""

    def setUp(self):
        """Set up test environment."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.cards_csv = self.temp_dir / "cards.csv"
        self.output_dir = self.temp_dir / "output"
        # Keep CLI logging setup from adding handlers to the root logger
        patcher = mock.patch.object(cli, "setup_cli_logging")
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def run_cli(self, *args):
        cli.main(
            [
                "--cards-csv",
                str(self.cards_csv),
                "--rulings-csv",
                str(self.temp_dir / "rulings.csv"),
                "--images-dir",
                str(self.temp_dir / "images"),
                "--output-dir",
                str(self.output_dir),
                *args,
            ]
        )

    def test_build(self):
        self.cards_csv.write_text(
            "id,name,kind,type,effect,tags\n001,Knight,unit,normal,x,\n",
            encoding="utf-8",
        )
        self.run_cli()

        self.assertTrue((self.output_dir / "index.html").exists())
        self.assertTrue((self.output_dir / "cards" / "001.html").exists())

    def test_check_does_not_write_output(self):
        self.cards_csv.write_text(
            "id,name,kind,type,effect,tags\n001,Knight,unit,normal,x,\n",
            encoding="utf-8",
        )
        self.run_cli("--check")

        self.assertFalse(self.output_dir.exists())

    def test_invalid_data_exits_with_error(self):
        self.cards_csv.write_text("id,name\n001,Knight\n", encoding="utf-8")

        with self.assertRaises(SystemExit) as ctx:
            self.run_cli()

        self.assertEqual(ctx.exception.code, 1)
        self.assertFalse((self.output_dir / "index.html").exists())

    def test_missing_cards_file_exits_with_error(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli()

        self.assertEqual(ctx.exception.code, 1)

    def test_write_search_index(self):
        self.cards_csv.write_text(
            "id,name,kind,type,effect,tags\n001,Knight,unit,normal,x,hero\n",
            encoding="utf-8",
        )
        output_file = self.temp_dir / "index.json"

        self.assertTrue(
            generate_search_index.write_search_index(self.cards_csv, output_file)
        )
        self.assertTrue(output_file.exists())

    def test_write_search_index_invalid_data(self):
        self.cards_csv.write_text("id\n1\n", encoding="utf-8")

        self.assertFalse(
            generate_search_index.write_search_index(
                self.cards_csv, self.temp_dir / "index.json"
            )
        )


if __name__ == "__main__":
    unittest.main()
