# =============================================================================
# constants.py — SFM Format, Scaling and Buffering Constants
# =============================================================================

# -----------------------------------------------------------------------------
# OUTPUT FORMAT
# -----------------------------------------------------------------------------

SAMPLE_RATE       = 44_100      # Hz, default rate for playback and WAV export
BITS_PER_SAMPLE   = 16
BYTES_PER_SAMPLE  = BITS_PER_SAMPLE // 8   # = 2

# Encoding: float amplitude → int16.  Symmetric range, so -1.0 and 1.0 map to
# -32767 and 32767 and the most negative short (-32768) is never produced.
PCM_MAX = 32767

# Decoding: int16 → float.  Divide by 32768 so every decoded value lands in
# [-1.0, 1.0) exactly.
SHORT_SCALE = 32768.0

# -----------------------------------------------------------------------------
# OVERSAMPLING
# -----------------------------------------------------------------------------
# Each output frame is the mean of OVERSAMPLE_STEPS samples spaced
# 1 / (rate * OVERSAMPLE_STEPS) apart, starting at the frame's own time.

OVERSAMPLE_STEPS = 4

# -----------------------------------------------------------------------------
# STREAMING DECODER
# -----------------------------------------------------------------------------
# Window  : frames decoded ahead of the latest query, at the file's own rate.
#           10 s of 44.1 kHz stereo int16 = 1.76 MB.
# Discard : forward gaps are skipped by reading and dropping at most this many
#           frames per read, so a one-hour skip never allocates an hour.

WINDOW_SECONDS    = 10
DISCARD_FRAME_MAX = 1_000

# -----------------------------------------------------------------------------
# OUTPUT ADAPTERS
# -----------------------------------------------------------------------------

PLAYBACK_BLOCK_SECONDS = 0.5     # one device write; also the stop latency
STREAM_CHUNK_FRAMES    = 4_096   # frames per chunk when serializing to WAV

# -----------------------------------------------------------------------------
# INSPECTION
# -----------------------------------------------------------------------------

PLOT_POINTS = 4_000              # points per plotted trace
