from __future__ import annotations

from typing import List

from .constants import GRAHA_KEYS, PLANET_META, RASHI_SYMBOLS
from .models import GrahaCard, Panchangam


def get_graha_cards(panchangam: Panchangam) -> List[GrahaCard]:
    """Display cards for the nine grahas, in traditional order.

    Grahas missing from the snapshot are skipped.
    """
    cards = []
    for key in GRAHA_KEYS:
        position = panchangam.planetary_positions.get(key)
        if position is None:
            continue
        english, sanskrit, icon = PLANET_META[key]
        cards.append(GrahaCard(
            id=key,
            english_name=english,
            sanskrit_name=sanskrit,
            icon=icon,
            rashi_name=position.rashi_name,
            rashi_symbol=RASHI_SYMBOLS[position.rashi] if 0 <= position.rashi < 12 else "?",
            degree=round(position.degree, 2),
            is_retrograde=position.is_retrograde,
            dignity=position.dignity,
        ))
    return cards
