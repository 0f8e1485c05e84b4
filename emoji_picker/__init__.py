# emoji_picker package
from emoji_picker.catalog import EmojiCatalog, EmojiEntry
from emoji_picker.tones import apply_modifier, retone

__all__ = ['EmojiCatalog', 'EmojiEntry', 'apply_modifier', 'retone']
