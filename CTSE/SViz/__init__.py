# =============================================================================
# CTSE/SViz/__init__.py — Sound Visualizer
# =============================================================================
#
# Looks at a signal without listening to it: samples one channel at evenly
# spaced times and plots amplitude against time.
#
# Sub-modules:
#   plot.py  — function_points(), channel_trace(), visualize()
#
# matplotlib is only imported when a plot is actually drawn (the `viz`
# extra); the sampling helpers need numpy only.
# =============================================================================
