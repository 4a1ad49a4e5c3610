import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from pydantic import ValidationError

from scratchcard.errors import MalformedScenario, UnknownPayout
from scratchcard.gamedata import GameData, build_prize_table, load_game_data

GAME_DATA = {
    "ticketPrices": [100, 200],
    "scenarios": ["W:5,12;P:5,3,9,5,20,IW1", "W:1,2;P:3,4,5,6,7,8"],
    "instantWins": {"IW1": {"100": 1000, "200": 2000}},
    "prizeMultipliers": {"match": 5},
}


class LoadGameDataTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.data_path = Path(self._tmpdir.name) / "data.json"

    def tearDown(self) -> None:
        self._tmpdir.cleanup()

    def _write(self, payload) -> str:
        self.data_path.write_text(json.dumps(payload), encoding="utf-8")
        return str(self.data_path)

    def test_reads_file_with_on_disk_field_names(self) -> None:
        data = load_game_data(self._write(GAME_DATA))
        self.assertEqual(data.ticket_prices, [100, 200])
        self.assertEqual(data.instant_wins, {"IW1": {100: 1000, 200: 2000}})
        self.assertEqual(data.prize_multipliers.match, 5)
        self.assertEqual(len(data.scenarios), 2)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_game_data(str(self.data_path))

    def test_non_object_payload(self) -> None:
        with self.assertRaises(ValueError):
            load_game_data(self._write([1, 2, 3]))

    def test_schema_violations(self) -> None:
        cases = {
            "no prices": dict(GAME_DATA, ticketPrices=[]),
            "duplicate prices": dict(GAME_DATA, ticketPrices=[100, 100]),
            "negative price": dict(GAME_DATA, ticketPrices=[-100]),
            "missing multipliers": {k: v for k, v in GAME_DATA.items() if k != "prizeMultipliers"},
            "negative payout": dict(GAME_DATA, instantWins={"IW1": {"100": -1}}),
        }
        for name, payload in cases.items():
            with self.subTest(name):
                with self.assertRaises(ValidationError):
                    GameData(**payload)

    def test_tags_must_be_reachable_from_a_scenario(self) -> None:
        for tag in (" IW1", "IW1 ", "07", "+7", "A,B", "A;B", "A:B"):
            with self.subTest(tag=tag):
                with self.assertRaises(ValidationError):
                    GameData(**dict(GAME_DATA, instantWins={tag: {"100": 1000, "200": 2000}}))

    def test_numeric_tag_in_canonical_form_is_accepted(self) -> None:
        data = GameData(**dict(GAME_DATA, instantWins={"7": {"100": 50, "200": 100}}))
        self.assertEqual(data.instant_wins, {"7": {100: 50, 200: 100}})

    @mock.patch("scratchcard.gamedata.requests.get")
    def test_reads_from_url(self, mock_get) -> None:
        mock_get.return_value.json.return_value = GAME_DATA
        data = load_game_data("https://example.test/data.json", timeout_seconds=3)
        mock_get.assert_called_once_with("https://example.test/data.json", timeout=3)
        mock_get.return_value.raise_for_status.assert_called_once_with()
        self.assertEqual(data.ticket_prices, [100, 200])


class BuildPrizeTableTests(unittest.TestCase):
    def test_builds_table(self) -> None:
        table = build_prize_table(GameData(**GAME_DATA))
        self.assertEqual(table.instant_win_tags, ("IW1",))
        self.assertEqual(table.match_amount(200), 1000)

    def test_missing_payout_fails_fast(self) -> None:
        payload = dict(GAME_DATA, instantWins={"IW1": {"100": 1000}})
        with self.assertRaises(UnknownPayout):
            build_prize_table(GameData(**payload))

    def test_malformed_scenario_fails_fast(self) -> None:
        payload = dict(GAME_DATA, scenarios=["W:1,2;P:3", "W:bad"])
        with self.assertRaises(MalformedScenario) as ctx:
            build_prize_table(GameData(**payload))
        self.assertIn("scenarios[1]", str(ctx.exception))

    def test_instant_win_limit(self) -> None:
        payload = dict(GAME_DATA, scenarios=["W:1,2;P:IW1,IW1,3"])
        build_prize_table(GameData(**payload))
        with self.assertRaises(MalformedScenario):
            build_prize_table(GameData(**payload), max_instant_wins=1)


if __name__ == "__main__":
    unittest.main()
