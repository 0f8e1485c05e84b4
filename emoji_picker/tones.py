from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from emoji_picker.catalog import EmojiEntry
from emoji_picker.config import (
    FITZPATRICK_SCALE_MODIFIERS,
    SKIN_TONE_BASE,
    ZERO_WIDTH_JOINER,
)
from emoji_picker.errors import InvalidSkinToneError


def apply_modifier(entry: EmojiEntry, modifier: str) -> str:
    """Return the display glyph for ``entry`` carrying ``modifier``.

    Joined sequences get the modifier in front of every zero width joiner,
    everything else gets it appended. This follows the emojilib convention
    rather than the per-sequence Unicode placement rules.
    """
    # no modifier or can't be modified
    if not modifier or not entry.fitzpatrick_scale:
        return entry.char

    # skin tone magic explained: https://emojipedia.org/zero-width-joiner/
    if ZERO_WIDTH_JOINER in entry.char:
        return entry.char.replace(ZERO_WIDTH_JOINER, modifier + ZERO_WIDTH_JOINER)
    return entry.char + modifier


def retone(catalog: Dict[str, EmojiEntry], modifier: str) -> Dict[str, EmojiEntry]:
    """Derive a copy of ``catalog`` with ``modifier`` applied to tone-capable entries."""
    # grab emojis that can have their skin tone changed
    toned = {
        name: replace(entry, char=apply_modifier(entry, modifier))
        for name, entry in catalog.items()
        if entry.fitzpatrick_scale
    }

    # merge back, only overwriting names the base catalog already has
    merged = dict(catalog)
    for name, entry in toned.items():
        if name in merged:
            merged[name] = entry
    return merged


def modifier_for_key(key: Optional[str]) -> Tuple[int, str]:
    """Map a ``skin_tone_N`` key to its selection index and modifier."""
    if not key or key not in FITZPATRICK_SCALE_MODIFIERS:
        raise InvalidSkinToneError(key)
    return int(key.rsplit("_", 1)[-1]), FITZPATRICK_SCALE_MODIFIERS[key]


def modifier_for_index(index: int) -> str:
    return FITZPATRICK_SCALE_MODIFIERS.get(f"skin_tone_{index}", "")


def skin_tone_selections(base: str = SKIN_TONE_BASE) -> List[str]:
    # ✋ ✋🏻 ✋🏼 ✋🏽 ✋🏾 ✋🏿
    return [base + modifier_for_index(i) for i in range(len(FITZPATRICK_SCALE_MODIFIERS))]


def tone_index_from_cookie(value: Optional[str]) -> int:
    """Parse the ``tone`` cookie, falling back to 0 (no modifier) on anything odd."""
    if value is None:
        return 0
    try:
        index = int(value)
    except ValueError:
        return 0
    if 0 <= index < len(FITZPATRICK_SCALE_MODIFIERS):
        return index
    return 0
