# =============================================================================
# CTSE/SFM/__init__.py — Sound Format Module
# =============================================================================
#
# Single source of truth for output format and buffering constants: sample
# rate, PCM scaling, oversampling factor, decode-window and playback block
# sizes.
#
# All other CTSE sub-modules import these from here.  Functions that depend
# on one of them accept a keyword override instead of redefining it.
#
# Sub-modules:
#   constants.py  — all format, scaling and buffering constants
# =============================================================================
