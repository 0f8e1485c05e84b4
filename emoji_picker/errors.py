class EmojiPickerError(Exception):
    """Base class for emoji picker errors."""


class CatalogLoadError(EmojiPickerError):
    """The emoji dataset could not be read or fetched.

    Raised during bootstrap; the server must not start without a catalog.
    """

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class InvalidSkinToneError(EmojiPickerError, ValueError):
    """A skin tone key that doesn't map to a Fitzpatrick modifier."""

    def __init__(self, key):
        super().__init__(f"Invalid skin tone: {key!r}")
        self.key = key
