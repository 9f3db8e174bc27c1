# =============================================================================
# Continuous-Time Sound Engine (CTSE)
# =============================================================================
#
# ── A SOUND IS A FUNCTION OF TIME ────────────────────────────────────────────
#
# Every sound handled here is a continuous-time signal: something you can ask
# "what are your amplitudes at t = 1.2345 s?" for any t, on any number of
# channels.  Nothing is rendered to a sample buffer until an output adapter
# needs bytes.
#
# RESPONSIBLE for:
#   - The signal algebra
#       Sounds are built by composing pure combinators (mix, multiply, pan,
#       trim, append, fades, ramps ...).  Duration and channel rules are
#       checked when a combinator is built, never at query time.
#   - File-backed sounds
#       A decoded audio file behaves like any other sound.  Decoding is
#       forward-only with a sliding 10 s window; going backwards reopens the
#       file.  Memory stays bounded no matter how long the file is.
#   - Output
#       Oversampled 16-bit PCM for live playback and for WAV serialization,
#       rendered lazily block by block.
#
# NOT responsible for:
#   - Container decoding / encoding     (libsndfile via soundfile)
#   - Talking to the sound card         (PortAudio via sounddevice)
#   - Drawing charts                    (matplotlib, optional)
#
# ── Module layout ─────────────────────────────────────────────────────────────
#   errors.py  — exception taxonomy shared by every sub-module
#   SFM/       — Sound Format Module: sample rate, PCM scaling, window sizes
#   SGM/       — Signal Generation Module: Signal contract, generators,
#                combinators
#   SDM/       — Sound Decode Module: streaming file-backed Signal
#   SOM/       — Sound Output Module: oversampler, PCM packing, byte stream,
#                WAV export, live playback
#   SViz/      — Sound Visualizer: sampled traces + matplotlib plot
# =============================================================================
