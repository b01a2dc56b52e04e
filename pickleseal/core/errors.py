class PickleSealError(Exception):
    """Base class for every error raised by pickleseal."""


class DecodeError(PickleSealError):
    """
    The byte stream is not a pickle this codec can read: bad header,
    unknown opcode, truncated input, missing STOP or a structurally
    impossible sequence of opcodes.
    """


class EncodeError(PickleSealError):
    """A value cannot be represented in the wire format."""


class FormatError(PickleSealError):
    """An envelope is malformed: wrong version byte, bad padding or layout."""


class IntegrityError(PickleSealError):
    """An envelope signature does not match its payload."""
