# =============================================================================
# CTSE/SGM/__init__.py — Signal Generation Module
# =============================================================================
#
# Everything needed to describe a sound without doing any I/O.
#
# Modules:
#   signal.py       — Signal base class, make_signal(), sample(), channel_count()
#   generators.py   — source signals: silence, constant, linear ramps,
#                     segmented_linear, sinusoid, square_wave
#   combinators.py  — pure transforms: multiplex, to_stereo, mix, multiply,
#                     gain, pan, trim, append, timeshift, fade_in, fade_out
#
# Rule: combinators only ever read their inputs through sample(), which
# returns silence outside a signal's [0, duration] range.  That is what lets
# append() or mix() work on inputs of different lengths without special cases.
# =============================================================================
