"""
Search and category filtering for card lists
"""
from typing import List, Optional

from studycards.models.flashcard import Flashcard

ALL_CATEGORIES = "all"


def filter_cards(
    cards: List[Flashcard],
    search_term: Optional[str] = "",
    category: Optional[str] = ALL_CATEGORIES
) -> List[Flashcard]:
    """
    Cards matching the search term and category, in input order.

    The search is a case-insensitive substring match on front or back;
    an empty term matches everything. The category must match exactly
    unless it is "all".
    """
    needle = (search_term or "").lower()
    category = category or ALL_CATEGORIES

    result = []
    for card in cards:
        if needle and needle not in card.front.lower() and needle not in card.back.lower():
            continue
        if category != ALL_CATEGORIES and card.category != category:
            continue
        result.append(card)
    return result


def study_deck(
    cards: List[Flashcard],
    search_term: Optional[str] = "",
    category: Optional[str] = ALL_CATEGORIES
) -> List[Flashcard]:
    """The filtered cards, or every card when the filter matches nothing"""
    return filter_cards(cards, search_term, category) or list(cards)
