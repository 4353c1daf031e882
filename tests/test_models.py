from __future__ import annotations

import json
import unittest
from datetime import date

from commita import AnalysisResult, CommitRecord, analyze


class AnalysisResultJsonTests(unittest.TestCase):
    def setUp(self) -> None:
        commits = [
            CommitRecord("a1", "init \U0001f389", "2025-03-10T10:00:00Z", "repo"),
            CommitRecord("b2", "fix typo", "2025-03-11T22:30:00Z", "repo"),
        ]
        self.analysis = analyze("octocat", commits, 1, today=date(2025, 3, 11))

    def test_uses_camel_case_keys(self) -> None:
        data = self.analysis.to_dict()

        self.assertEqual(data["totalCommits"], 2)
        self.assertEqual(data["reposScanned"], 1)
        self.assertEqual(data["dayDistribution"][1], {"day": "Monday", "count": 1})
        self.assertEqual(data["hourDistribution"][22], {"hour": 22, "count": 1})
        self.assertEqual(data["streak"]["longestStart"], "2025-03-10")
        self.assertEqual(data["streak"]["current"], 2)
        self.assertEqual(data["messageInsights"]["topEmojis"], ["\U0001f389"])

    def test_survives_a_json_round_trip(self) -> None:
        text = json.dumps(self.analysis.to_dict())

        self.assertEqual(AnalysisResult.from_dict(json.loads(text)), self.analysis)

    def test_empty_streak_serializes_nulls(self) -> None:
        data = analyze("octocat", [], 0).to_dict()

        self.assertIsNone(data["streak"]["longestStart"])
        self.assertIsNone(data["streak"]["longestEnd"])
        self.assertEqual(AnalysisResult.from_dict(data).streak.longest_start, None)

    def test_from_dict_rejects_missing_keys(self) -> None:
        data = self.analysis.to_dict()
        del data["streak"]

        with self.assertRaises(KeyError):
            AnalysisResult.from_dict(data)


if __name__ == "__main__":
    unittest.main()
