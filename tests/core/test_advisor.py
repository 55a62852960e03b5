"""Tests for action recommendations."""

import pytest
from hypothesis import given, strategies as st

from conftest import hand_strategy, rank_strategy, shoe_strategy
from core.shoe import Shoe
from core.statistics.probability import estimate
from core.strategy.advisor import Action, hit_expected_value, recommend


class TestEligibility:
    """Which actions appear in the evaluation."""

    def test_stand_and_hit_only(self, shoe):
        """Without double or split, only STAND and HIT are valued."""
        rec = recommend(["10", "6"], "9", shoe, can_double=False, can_split=False)
        assert set(rec.expected_values) == {Action.STAND, Action.HIT}

    def test_derived_from_two_card_hand(self, shoe):
        """Two cards allow doubling; an identical pair also allows splitting."""
        assert Action.DOUBLE in recommend(["10", "6"], "9", shoe).expected_values
        assert Action.SPLIT not in recommend(["10", "6"], "9", shoe).expected_values
        assert Action.SPLIT in recommend(["8", "8"], "9", shoe).expected_values

    def test_no_double_after_two_cards(self, shoe):
        """Three-card hands can neither double nor split."""
        rec = recommend(["2", "3", "4"], "9", shoe)
        assert set(rec.expected_values) == {Action.STAND, Action.HIT}

    def test_single_card_hand(self, shoe):
        """A lone card still gets STAND and HIT values."""
        rec = recommend(["10"], "9", shoe)
        assert set(rec.expected_values) == {Action.STAND, Action.HIT}

    def test_empty_hand(self, shoe):
        rec = recommend([], "9", shoe)
        assert set(rec.expected_values) == {Action.STAND, Action.HIT}


class TestExpectedValues:
    """Tests for the EV arithmetic."""

    def test_stand_ev_is_win_minus_loss(self, shoe):
        probs = estimate(["10", "7"], "6", shoe)
        rec = recommend(["10", "7"], "6", shoe)
        assert rec.stand_ev == pytest.approx(probs.win_prob - probs.loss_prob)
        assert rec.expected_values[Action.STAND] == rec.stand_ev

    def test_hit_on_21_equals_stand(self, shoe):
        """No further draw is modelled on 21."""
        rec = recommend(["10", "5", "6"], "6", shoe)
        assert rec.hit_ev == rec.stand_ev

    def test_double_is_twice_hit(self, shoe):
        rec = recommend(["5", "6"], "6", shoe)
        assert rec.expected_values[Action.DOUBLE] == pytest.approx(2 * rec.hit_ev)

    def test_split_is_discounted_stand(self, shoe):
        rec = recommend(["8", "8"], "10", shoe)
        assert rec.expected_values[Action.SPLIT] == pytest.approx(0.9 * rec.stand_ev)

    def test_hit_is_weighted_average_of_draws(self):
        """With only 5s left, hitting hard 12 always lands on 17."""
        shoe = Shoe.from_counts({"5": 10})
        stand_ev = estimate(["10", "2"], "6", shoe).stand_ev
        after = estimate(["10", "2", "5"], "6", shoe.draw("5")).stand_ev
        assert hit_expected_value(["10", "2"], "6", shoe, stand_ev) == pytest.approx(after)

    def test_hit_into_certain_bust(self):
        """With only tens left, hitting 16 is worth -1."""
        shoe = Shoe.from_counts({"10": 5, "K": 5})
        rec = recommend(["10", "6"], "7", shoe, can_double=False)
        assert rec.hit_ev == pytest.approx(-1)
        assert rec.recommended_action is Action.STAND

    def test_empty_shoe(self, empty_shoe):
        """An empty shoe leaves every action at a certain loss."""
        rec = recommend(["10", "6"], "7", empty_shoe)
        assert rec.stand_ev == -1
        assert rec.hit_ev == -1
        assert rec.recommended_action is Action.STAND

    def test_does_not_touch_shoe(self, shoe):
        """Speculative draws leave the caller's shoe alone."""
        before = shoe.to_dict()
        recommend(["5", "6"], "6", shoe)
        assert shoe.to_dict() == before


class TestRecommendedAction:
    """Tests for the action ranking."""

    def test_stand_on_twenty(self, shoe):
        assert recommend(["10", "K"], "6", shoe).recommended_action is Action.STAND

    def test_double_eleven(self, shoe):
        assert recommend(["5", "6"], "6", shoe).recommended_action is Action.DOUBLE

    def test_hit_eleven_when_double_not_allowed(self, shoe):
        rec = recommend(["5", "6"], "6", shoe, can_double=False)
        assert rec.recommended_action is Action.HIT

    def test_split_eights_against_ten(self, shoe):
        assert recommend(["8", "8"], "10", shoe).recommended_action is Action.SPLIT

    def test_tie_goes_to_stand(self, shoe):
        """On 21, STAND and HIT tie and STAND wins."""
        rec = recommend(["10", "5", "6"], "6", shoe)
        assert rec.expected_values[Action.STAND] == rec.expected_values[Action.HIT]
        assert rec.recommended_action is Action.STAND

    def test_ranked_actions_descending(self, shoe):
        rec = recommend(["8", "8"], "10", shoe)
        values = [ev for _, ev in rec.ranked_actions]
        assert values == sorted(values, reverse=True)
        assert rec.ranked_actions[0][0] is rec.recommended_action

    @given(
        hand_strategy(min_cards=0, max_cards=4),
        rank_strategy,
        shoe_strategy(max_per_rank=6),
        st.booleans(),
        st.booleans(),
    )
    def test_recommendation_is_best_with_priority_ties(
        self, cards, upcard, shoe, can_double, can_split
    ):
        """The top action has the maximum EV, earliest in priority on ties."""
        rec = recommend(cards, upcard, shoe, can_double, can_split)
        best = max(rec.expected_values.values())
        first_best = next(a for a in Action if rec.expected_values.get(a) == best)
        assert rec.recommended_action is first_best
        assert (Action.DOUBLE in rec.expected_values) == can_double
        assert (Action.SPLIT in rec.expected_values) == can_split
