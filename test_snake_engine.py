#!/usr/bin/env python3
"""
Tests for the snake engine and its qualifying policies.

This test file focuses on:
- Establishing and transferring the snake
- Ties never moving the snake
- Bracket finalization and freezing
- Explicit reopen of a finalized bracket
- Pluggable qualifying policies
"""

import unittest
from datetime import datetime, timedelta
from decimal import Decimal

from history.score_history import ScoreHistory
from models.bets import BACK_NINE, FRONT_NINE, OVERALL
from models.issues import IssueKind
from models.score import HoleScore
from settlement.snake_engine import SnakeEngine, bracket_ranges
from settlement.snake_policies import (
    ThreePuttPolicy, WorstGrossPolicy, WorstNetPolicy, get_snake_policy,
)

START = datetime(2024, 6, 1, 8, 0)
AMOUNTS = {FRONT_NINE: Decimal('5'), BACK_NINE: Decimal('5'), OVERALL: Decimal('10')}


def at(minute):
    return START + timedelta(minutes=minute)


def post_hole(history, hole, grosses, minute=None, putts=None):
    """Post gross scores (net equal to gross) for a hole."""
    minute = hole if minute is None else minute
    for player_id, gross in grosses.items():
        history.record(HoleScore(
            player_id=player_id,
            hole_number=hole,
            gross_strokes=gross,
            net_strokes=gross,
            timestamp=at(minute),
            putts=(putts or {}).get(player_id),
        ))


class TestSnakeEngine(unittest.TestCase):
    """Test cases for SnakeEngine with the worst-gross policy."""

    def setUp(self):
        """Set up test fixtures."""
        self.roster = ['P1', 'P2', 'P3']
        self.engine = SnakeEngine(AMOUNTS, WorstGrossPolicy(), total_holes=18)
        self.history = ScoreHistory()

    def _front_nine_with_p1_holding(self):
        """Holes 1-9 where P1's 7 on hole 2 is the worst score."""
        for hole in range(1, 10):
            if hole == 2:
                post_hole(self.history, hole, {'P1': 7, 'P2': 4, 'P3': 5})
            else:
                post_hole(self.history, hole, {'P1': 4, 'P2': 4, 'P3': 4})

    def test_initial_states_have_no_holder(self):
        """Test that every bracket starts without a holder."""
        outcome = self.engine.calculate(self.history, self.roster)

        self.assertEqual([s.bracket for s in outcome.states], [FRONT_NINE, BACK_NINE, OVERALL])
        for state in outcome.states:
            self.assertIsNone(state.current_holder_id)
            self.assertEqual(state.last_hole_updated, 0)
            self.assertFalse(state.is_final)
        self.assertEqual(outcome.state_for(OVERALL).amount, Decimal('10'))

    def test_worst_score_establishes_holder(self):
        """Test that the first worst score picks up the snake."""
        post_hole(self.history, 1, {'P1': 7, 'P2': 4, 'P3': 5})

        front = self.engine.calculate(self.history, self.roster).state_for(FRONT_NINE)

        self.assertEqual(front.current_holder_id, 'P1')
        self.assertEqual(front.last_hole_updated, 1)
        self.assertEqual(front.holder_value, 7)

    def test_equal_value_never_transfers(self):
        """Test that matching the holder's value does not move the snake."""
        post_hole(self.history, 1, {'P1': 7, 'P2': 4, 'P3': 5})
        post_hole(self.history, 2, {'P1': 3, 'P2': 7, 'P3': 4})

        front = self.engine.calculate(self.history, self.roster).state_for(FRONT_NINE)

        self.assertEqual(front.current_holder_id, 'P1')
        self.assertEqual(front.last_hole_updated, 1)

    def test_strictly_worse_score_transfers(self):
        """Test that a strictly worse score takes the snake and records the hole."""
        post_hole(self.history, 1, {'P1': 7, 'P2': 4, 'P3': 5})
        post_hole(self.history, 2, {'P1': 4, 'P2': 4, 'P3': 4})
        post_hole(self.history, 3, {'P1': 4, 'P2': 8, 'P3': 4})

        front = self.engine.calculate(self.history, self.roster).state_for(FRONT_NINE)

        self.assertEqual(front.current_holder_id, 'P2')
        self.assertEqual(front.last_hole_updated, 3)

    def test_tie_for_worst_on_a_hole_does_not_move_snake(self):
        """Test that two players sharing the worst score on a hole leave the holder alone."""
        post_hole(self.history, 1, {'P1': 7, 'P2': 4, 'P3': 5})
        post_hole(self.history, 2, {'P1': 4, 'P2': 9, 'P3': 9})

        front = self.engine.calculate(self.history, self.roster).state_for(FRONT_NINE)

        self.assertEqual(front.current_holder_id, 'P1')

    def test_holder_getting_worse_keeps_last_hole_updated(self):
        """Test that the holder's own worse score is not a transfer."""
        post_hole(self.history, 1, {'P1': 7, 'P2': 4, 'P3': 5})
        post_hole(self.history, 2, {'P1': 9, 'P2': 4, 'P3': 4})
        post_hole(self.history, 3, {'P1': 4, 'P2': 8, 'P3': 4})

        front = self.engine.calculate(self.history, self.roster).state_for(FRONT_NINE)

        self.assertEqual(front.current_holder_id, 'P1')
        self.assertEqual(front.last_hole_updated, 1)
        self.assertEqual(front.holder_value, 9)

    def test_back_nine_only_counts_holes_ten_to_eighteen(self):
        """Test that brackets run over their own hole ranges."""
        post_hole(self.history, 1, {'P1': 9, 'P2': 4, 'P3': 4})
        post_hole(self.history, 10, {'P1': 4, 'P2': 6, 'P3': 4})

        outcome = self.engine.calculate(self.history, self.roster)

        self.assertEqual(outcome.state_for(FRONT_NINE).current_holder_id, 'P1')
        self.assertEqual(outcome.state_for(BACK_NINE).current_holder_id, 'P2')
        self.assertEqual(outcome.state_for(BACK_NINE).last_hole_updated, 10)
        self.assertEqual(outcome.state_for(OVERALL).current_holder_id, 'P1')

    def test_bracket_final_when_last_hole_posted_by_everyone(self):
        """Test that the front nine finalizes once hole 9 is complete."""
        self._front_nine_with_p1_holding()

        outcome = self.engine.calculate(self.history, self.roster)
        front = outcome.state_for(FRONT_NINE)

        self.assertTrue(front.is_final)
        self.assertEqual(front.current_holder_id, 'P1')
        self.assertEqual(front.finalized_at, at(9))
        self.assertFalse(outcome.state_for(BACK_NINE).is_final)
        self.assertFalse(outcome.state_for(OVERALL).is_final)

    def test_partial_last_hole_is_not_final(self):
        """Test that a bracket is not final until the whole field posts its last hole."""
        for hole in range(1, 9):
            post_hole(self.history, hole, {'P1': 4, 'P2': 4, 'P3': 5})
        post_hole(self.history, 9, {'P1': 4, 'P2': 4})

        front = self.engine.calculate(self.history, self.roster).state_for(FRONT_NINE)

        self.assertFalse(front.is_final)

    def test_final_bracket_ignores_later_corrections(self):
        """Test that a correction after finalization is flagged and does not move the snake."""
        self._front_nine_with_p1_holding()
        post_hole(self.history, 3, {'P3': 9}, minute=30)

        outcome = self.engine.calculate(self.history, self.roster)
        front = outcome.state_for(FRONT_NINE)

        self.assertTrue(front.is_final)
        self.assertEqual(front.current_holder_id, 'P1')
        self.assertEqual(outcome.state_for(OVERALL).current_holder_id, 'P3')
        reopen_issues = [i for i in outcome.issues if i.kind == IssueKind.REOPEN_AFTER_FINAL]
        self.assertEqual(len(reopen_issues), 1)
        self.assertEqual(reopen_issues[0].player_id, 'P3')
        self.assertEqual(reopen_issues[0].hole_number, 3)

    def test_unplayed_hole_in_range_keeps_bracket_open(self):
        """Test that a skipped hole blocks finalization until it is posted."""
        roster = ['P1', 'P2']
        for hole in range(1, 10):
            if hole == 2:
                post_hole(self.history, hole, {'P1': 7, 'P2': 4})
            elif hole == 5:
                post_hole(self.history, hole, {'P1': 4})
            else:
                post_hole(self.history, hole, {'P1': 4, 'P2': 4})

        before = self.engine.calculate(self.history, roster).state_for(FRONT_NINE)
        self.assertFalse(before.is_final)
        self.assertEqual(before.current_holder_id, 'P1')

        post_hole(self.history, 5, {'P2': 12}, minute=30)
        outcome = self.engine.calculate(self.history, roster)
        front = outcome.state_for(FRONT_NINE)

        self.assertTrue(front.is_final)
        self.assertEqual(front.current_holder_id, 'P2')
        self.assertEqual(front.last_hole_updated, 5)
        self.assertEqual(front.finalized_at, at(30))
        self.assertEqual([i for i in outcome.issues if i.kind == IssueKind.REOPEN_AFTER_FINAL], [])

    def test_first_post_after_finalization_is_reported(self):
        """Test that a new score in a final bracket is flagged even when it is not a correction."""
        self._front_nine_with_p1_holding()
        post_hole(self.history, 4, {'P4': 10}, minute=30)

        outcome = self.engine.calculate(self.history)
        front = outcome.state_for(FRONT_NINE)

        self.assertEqual(front.current_holder_id, 'P1')
        self.assertEqual(front.finalized_at, at(9))
        reopen_issues = [i for i in outcome.issues
                         if i.kind == IssueKind.REOPEN_AFTER_FINAL and i.target == "snake bracket 'front_nine'"]
        self.assertEqual(len(reopen_issues), 1)
        self.assertEqual(reopen_issues[0].player_id, 'P4')
        self.assertEqual(reopen_issues[0].hole_number, 4)

    def test_explicit_reopen_applies_pending_corrections(self):
        """Test that an audited reopen re-derives and re-finalizes the bracket."""
        self._front_nine_with_p1_holding()
        post_hole(self.history, 3, {'P3': 9}, minute=30)
        self.history.reopen('snake', FRONT_NINE, at(40), actor='committee', reason='scorecard fix')

        outcome = self.engine.calculate(self.history, self.roster)
        front = outcome.state_for(FRONT_NINE)

        self.assertEqual(front.current_holder_id, 'P3')
        self.assertEqual(front.last_hole_updated, 3)
        self.assertTrue(front.is_final)
        self.assertEqual(front.finalized_at, at(40))
        self.assertEqual([i for i in outcome.issues if i.kind == IssueKind.REOPEN_AFTER_FINAL], [])

    def test_reopen_of_another_bracket_does_not_unfreeze(self):
        """Test that reopening one bracket leaves the others frozen."""
        self._front_nine_with_p1_holding()
        post_hole(self.history, 3, {'P3': 9}, minute=30)
        self.history.reopen('snake', BACK_NINE, at(40), actor='committee')

        front = self.engine.calculate(self.history, self.roster).state_for(FRONT_NINE)

        self.assertEqual(front.current_holder_id, 'P1')

    def test_identical_input_gives_identical_output(self):
        """Test that the engine is idempotent."""
        self._front_nine_with_p1_holding()

        first = self.engine.calculate(self.history, self.roster)
        second = self.engine.calculate(self.history, self.roster)

        self.assertEqual(first.states, second.states)
        self.assertEqual(first.issues, second.issues)


class TestSnakePolicies(unittest.TestCase):
    """Test cases for the qualifying policies."""

    def setUp(self):
        """Set up test fixtures."""
        self.roster = ['P1', 'P2', 'P3']
        self.history = ScoreHistory()

    def test_three_putt_policy_tracks_last_three_putter(self):
        """Test that a later three-putt takes the snake regardless of strokes."""
        engine = SnakeEngine(AMOUNTS, ThreePuttPolicy(), total_holes=18)
        post_hole(self.history, 1, {'P1': 5, 'P2': 4, 'P3': 4}, putts={'P1': 3, 'P2': 2, 'P3': 2})
        post_hole(self.history, 2, {'P1': 4, 'P2': 4, 'P3': 4}, putts={'P1': 2, 'P2': 2, 'P3': 2})
        post_hole(self.history, 3, {'P1': 4, 'P2': 4, 'P3': 6}, putts={'P1': 1, 'P2': 2, 'P3': 3})

        front = engine.calculate(self.history, self.roster).state_for(FRONT_NINE)

        self.assertEqual(front.current_holder_id, 'P3')
        self.assertEqual(front.last_hole_updated, 3)

    def test_three_putt_policy_ties_on_same_hole_do_not_transfer(self):
        """Test that two three-putts on the same hole leave the snake where it was."""
        engine = SnakeEngine(AMOUNTS, ThreePuttPolicy(), total_holes=18)
        post_hole(self.history, 1, {'P1': 5, 'P2': 4, 'P3': 4}, putts={'P1': 3})
        post_hole(self.history, 2, {'P1': 4, 'P2': 5, 'P3': 5}, putts={'P2': 3, 'P3': 3})

        front = engine.calculate(self.history, self.roster).state_for(FRONT_NINE)

        self.assertEqual(front.current_holder_id, 'P1')

    def test_three_putt_policy_ignores_scores_without_putts(self):
        """Test that scores without putt data are never snake events."""
        policy = ThreePuttPolicy()
        score = HoleScore('P1', 4, 9, 9, at(4))

        self.assertIsNone(policy.qualifying_value(score))

    def test_worst_net_policy_uses_net_strokes(self):
        """Test the worst-net policy."""
        policy = WorstNetPolicy()
        scores = [HoleScore('P1', 1, 6, 5, at(1)), HoleScore('P2', 1, 5, 6, at(1))]

        self.assertEqual(policy.candidate(scores), ('P2', 6))

    def test_policy_lookup_by_name(self):
        """Test that policies are selected by name with a default fallback."""
        self.assertIsInstance(get_snake_policy('three_putt'), ThreePuttPolicy)
        self.assertIsInstance(get_snake_policy('worst_net'), WorstNetPolicy)
        self.assertIsInstance(get_snake_policy(None), WorstGrossPolicy)
        self.assertIsInstance(get_snake_policy('no_such_rule'), WorstGrossPolicy)

    def test_bracket_ranges_for_nine_hole_round(self):
        """Test that a nine-hole round has no back-nine bracket."""
        self.assertEqual(bracket_ranges(9), {FRONT_NINE: (1, 9), OVERALL: (1, 9)})
        self.assertEqual(bracket_ranges(18)[BACK_NINE], (10, 18))


if __name__ == '__main__':
    unittest.main()
