"""Global constants and default settings."""

# Beat snap classification
SNAP_OFFSET_MS = 2.0  # forward buffer against timing-detection jitter
SNAP_DIVISIONS = 48  # a beat is split into 48ths before classification

# Coarse to fine: 1/1, 1/2, 1/3, 1/4, 1/6, 1/8, 1/12, 1/16
BEAT_SNAPS = (48, 24, 16, 12, 8, 6, 4, 3)
UNSNAPPED_CATEGORY = len(BEAT_SNAPS)  # finer than 1/16

# Chart loading
DEFAULT_BPM = 120.0
DEFAULT_KEY_COUNT = 4
LONG_NOTE_MIN_MS = 150.0  # shorter MIDI notes load as taps

# Density statistics
DENSITY_WINDOW_MS = 1000.0
