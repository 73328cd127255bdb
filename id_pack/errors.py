# ==================================================
# id_pack/errors.py
# ==================================================


class IdPackError(ValueError):
    """Base class for everything the codec raises."""


class InvalidInput(IdPackError):
    """Caller passed something the encoder cannot represent."""


class InvalidAlphabet(InvalidInput):
    pass


class InvalidSymbol(IdPackError):
    """A decoded token holds a character outside the alphabet."""


class CorruptedToken(IdPackError):
    pass
