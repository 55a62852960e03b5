"""Pytest fixtures for decision engine tests."""

import pytest
from decimal import Decimal

from hypothesis import strategies as st

from core.cards import RANKS, Rank
from core.game import new_table
from core.shoe import Shoe
from core.strategy import RuleSet


@pytest.fixture
def shoe():
    """A full 6-deck shoe."""
    return Shoe.fresh(6)


@pytest.fixture
def empty_shoe():
    """A shoe with every card dealt."""
    return Shoe({})


@pytest.fixture
def low_rich_shoe():
    """A shoe holding only 2s through 6s."""
    return Shoe.from_counts({"2": 24, "3": 24, "4": 24, "5": 24, "6": 24})


@pytest.fixture
def high_rich_shoe():
    """A shoe holding only tens, faces and aces."""
    return Shoe.from_counts({"10": 24, "J": 24, "Q": 24, "K": 24, "A": 24})


@pytest.fixture
def rules():
    """Default ruleset."""
    return RuleSet()


@pytest.fixture
def table(rules):
    """A fresh table with the default bankroll."""
    return new_table(bankroll=Decimal("1000"), bet=10, rules=rules)


# Hypothesis strategies for property-based testing
rank_strategy = st.sampled_from(RANKS)


@st.composite
def hand_strategy(draw, min_cards=0, max_cards=6):
    """Generate a sequence of ranks."""
    return draw(st.lists(rank_strategy, min_size=min_cards, max_size=max_cards))


@st.composite
def shoe_strategy(draw, max_per_rank=24):
    """Generate an arbitrary partially dealt shoe."""
    counts = {
        rank: draw(st.integers(min_value=0, max_value=max_per_rank)) for rank in Rank
    }
    return Shoe(counts)
