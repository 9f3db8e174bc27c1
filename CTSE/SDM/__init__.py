# =============================================================================
# CTSE/SDM/__init__.py — Sound Decode Module
# =============================================================================
#
# Turns an audio file into a Signal without decoding the whole file up front.
#
# Modules:
#   file_sound.py  — FileSound (streaming, windowed, forward-biased decoder)
#                    and read_sound() to open one
#
# Container decoding itself is libsndfile's job (via soundfile); this module
# only decides WHEN to read, WHAT to keep, and when to start over.
# =============================================================================
