from __future__ import annotations

import logging
from typing import Iterable

from kwg.contracts import RandomSource
from kwg.vocabulary import glyph_for
from kwg.word_rain.models import FallingObject, RoundSet

logger = logging.getLogger(__name__)

SPAWN_Y_TOP = -0.05
SPAWN_Y_STAGGER = 0.1


def create_set(
    vocabulary: Iterable[str],
    count: int,
    target_word: str,
    random_source: RandomSource,
    *,
    round_index: int = 0,
) -> RoundSet:
    """Build one round of falling words with ``target_word`` among them.

    The target is always included, even when the caller passes a word that is
    not in ``vocabulary``. Remaining slots are filled with distinct shuffled
    words until ``count`` is reached; a short vocabulary yields a short set.
    Slots are evenly spaced at ``(i + 0.5) / n`` after a final shuffle so the
    target is not always first.
    """
    shuffled = list(vocabulary)
    random_source.shuffle(shuffled)

    selected = [target_word]
    for word in shuffled:
        if len(selected) >= count:
            break
        if word not in selected:
            selected.append(word)

    random_source.shuffle(selected)

    n = len(selected)
    objects = [
        FallingObject(
            label=word,
            glyph_hint=glyph_for(word),
            x=(i + 0.5) / n,
            y=SPAWN_Y_TOP - random_source.rand() * SPAWN_Y_STAGGER,
            is_target=word == target_word,
        )
        for i, word in enumerate(selected)
    ]
    logger.debug("round %d spawned %s target=%s", round_index, selected, target_word)
    return RoundSet(objects=objects, target_label=target_word, round_index=round_index)
