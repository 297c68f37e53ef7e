"""Configuration for the Harmonic Clock.

Everything is session-scoped; nothing here is persisted.
"""

# Audio settings
SAMPLE_RATE = 44100
BUFFER_SIZE = 512

# Frame loop (frames per second)
FRAME_RATE = 30

# Musical settings
REFERENCE_PITCH = 440.0  # A4
REFERENCE_MIDI = 69
NOTES = ['C', 'C#', 'D', 'D#', 'E', 'F', 'F#', 'G', 'G#', 'A', 'A#', 'B']
TRIAD_FORMULAS = {
    "Major": [0, 4, 7],  # semitone intervals above the root
    "Minor": [0, 3, 7],
}

# Hands
HANDS = ("hour", "minute", "second")
DEFAULT_OCTAVES = {"hour": 3, "minute": 4, "second": 3}
DEFAULT_GAINS = {"hour": 0.5, "minute": 0.5, "second": 0.5}
OCTAVE_RANGE = (0, 8)

# Waveforms available to every hand
WAVEFORMS = ("sine", "square", "sawtooth", "triangle")
DEFAULT_WAVEFORM = "sine"

# Parameter smoothing (seconds)
RAMP_TIME = 0.05
MASTER_RAMP_TIME = 0.2

# Rate control surface: raw values in [-100, 100], 10 means real time
RATE_CONTROL_RANGE = (-100, 100)
RATE_CONTROL_DEFAULT = 10
RATE_FINE_LIMIT = 10
RATE_MAX = 100.0  # multiplier at either end of the control

# Chord detection
CHORD_MIN_NOTES = 2
CHORD_PLACEHOLDER = "..."

# Oscilloscope
SCOPE_BUFFER = 2048
SCOPE_WIDTH = 80
SCOPE_HEIGHT = 9
