# =============================================================================
# errors.py — CTSE exception taxonomy
# =============================================================================
#
# Construction-time problems (bad arguments, incompatible channel layouts,
# unreadable files) are raised straight to the caller.  StreamExhausted is the
# one non-fatal member: the streaming decoder raises and catches it internally
# and answers with silence instead.
# =============================================================================


class SoundError(Exception):
    """Base class for every error raised by CTSE."""


class InvalidSignal(SoundError, ValueError):
    """A signal was constructed from malformed arguments (empty probe frame,
    negative duration ...)."""


class InvalidSpec(SoundError, ValueError):
    """A segmented-linear spec is not an odd-length amplitude/duration list of
    at least five entries."""


class ChannelMismatch(SoundError, ValueError):
    """A combinator was given signals with incompatible channel counts."""


class UnsupportedChannelCount(SoundError, ValueError):
    """Stereo coercion was requested on a signal that is neither mono nor
    stereo."""


class DecodeFailure(SoundError, OSError):
    """The audio container could not be opened or decoded."""


class StreamExhausted(SoundError):
    """A forward read or discard on a decode stream came up short."""
