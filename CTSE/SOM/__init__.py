# =============================================================================
# CTSE/SOM/__init__.py — Sound Output Module
# =============================================================================
#
# Turns continuous-time signals into discrete 16-bit PCM.
#
# Modules:
#   oversample.py   — oversample(): mean of n closely spaced samples
#   pcm.py          — short_sample(), render_frames(), frames_to_pcm()
#   byte_stream.py  — SampledInputStream: lazy, pull-based PCM byte stream
#   wav_export.py   — save(): stream a signal into a 16-bit WAV file
#   playback.py     — play(): background playback with a stop handle
#
# Every render pass samples its signal at strictly increasing times, which
# keeps file-backed signals (SDM/) on their cheap forward path.
# =============================================================================
