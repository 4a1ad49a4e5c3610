import random
import unittest
from collections import Counter

from scratchcard.errors import MalformedScenario
from scratchcard.parser import parse_scenario
from scratchcard.scenarios import RandomScenarioSource, ScenarioPool


class ScenarioPoolTests(unittest.TestCase):
    def test_draws_only_from_pool(self) -> None:
        pool = ScenarioPool(["W:1;P:1", "W:2;P:2", "W:3;P:3"], rng=random.Random(7))
        draws = Counter(pool.next() for _ in range(300))
        self.assertEqual(set(draws), set(pool.scenarios))
        for count in draws.values():
            self.assertGreater(count, 50)

    def test_override_takes_priority_exactly_once(self) -> None:
        pool = ScenarioPool(["W:1;P:1"], rng=random.Random(1))
        pool.force("W:9;P:9,8")
        self.assertEqual(pool.pending_override, "W:9;P:9,8")
        self.assertEqual(pool.next(), "W:9;P:9,8")
        self.assertIsNone(pool.pending_override)
        self.assertEqual(pool.next(), "W:1;P:1")

    def test_malformed_override_is_rejected_immediately(self) -> None:
        pool = ScenarioPool(["W:1;P:1"])
        with self.assertRaises(MalformedScenario):
            pool.force("W:1")
        self.assertIsNone(pool.pending_override)

    def test_clear_override(self) -> None:
        pool = ScenarioPool(["W:1;P:1"])
        pool.force("W:2;P:2")
        pool.clear_override()
        self.assertEqual(pool.next(), "W:1;P:1")

    def test_empty_pool_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ScenarioPool([])


class RandomScenarioSourceTests(unittest.TestCase):
    def test_rows_have_configured_sizes_and_no_duplicates(self) -> None:
        source = RandomScenarioSource(["IW1", "IW2"], rng=random.Random(3), instant_win_chance=0.5)
        for _ in range(200):
            scenario = parse_scenario(source.next())
            self.assertEqual(len(scenario.winning_symbols), 2)
            self.assertEqual(len(scenario.player_symbols), 6)
            self.assertEqual(len(set(scenario.winning_symbols)), 2)
            self.assertEqual(len(set(scenario.player_symbols)), 6)
            for symbol in scenario.winning_symbols:
                self.assertTrue(symbol.is_number)
                self.assertTrue(1 <= symbol.value <= 30)

    def test_at_most_configured_instant_wins(self) -> None:
        source = RandomScenarioSource(["IW1", "IW2"], rng=random.Random(11), instant_win_chance=1.0, max_instant_wins=2)
        for _ in range(50):
            tags = [s for s in parse_scenario(source.next()).player_symbols if not s.is_number]
            self.assertEqual(len(tags), 2)
            self.assertEqual(len(set(tags)), 2)

    def test_default_draws_at_most_one_instant_win(self) -> None:
        source = RandomScenarioSource(["IW1", "IW2"], rng=random.Random(5), instant_win_chance=1.0)
        for _ in range(50):
            tags = [s for s in parse_scenario(source.next()).player_symbols if not s.is_number]
            self.assertEqual(len(tags), 1)

    def test_zero_chance_never_draws_instant_wins(self) -> None:
        source = RandomScenarioSource(["IW1"], rng=random.Random(2), instant_win_chance=0.0)
        for _ in range(50):
            self.assertTrue(all(s.is_number for s in parse_scenario(source.next()).player_symbols))

    def test_seeded_sources_repeat(self) -> None:
        first = RandomScenarioSource(["IW1"], rng=random.Random(42))
        second = RandomScenarioSource(["IW1"], rng=random.Random(42))
        self.assertEqual([first.next() for _ in range(5)], [second.next() for _ in range(5)])

    def test_override_applies_to_random_source(self) -> None:
        source = RandomScenarioSource(["IW1"], rng=random.Random(2))
        source.force("W:1,2;P:1,2")
        self.assertEqual(source.next(), "W:1,2;P:1,2")

    def test_invalid_configuration(self) -> None:
        with self.assertRaises(ValueError):
            RandomScenarioSource(["IW1"], number_range=5)
        with self.assertRaises(ValueError):
            RandomScenarioSource(["IW1"], instant_win_chance=1.5)


if __name__ == "__main__":
    unittest.main()
