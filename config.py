"""
Emulator configuration for the CHIP-8 front ends
Plain dictionaries of defaults; the command line can override TIMING
"""

# CPU and timer rates
TIMING = {
    "cpu_hz": 700,  # Instructions per second
    "timer_hz": 60,  # Delay/sound timer decrement rate, fixed
    "frame_hz": 60,  # Presentation rate, independent of timer_hz
}

# Settings the command line may not change
FIXED = ("timer_hz",)

# Window and colors
DISPLAY = {
    "scale": 10,  # Window pixels per CHIP-8 pixel
    "foreground": (0xFF, 0xFF, 0xFF),
    "background": (0x00, 0x00, 0x00),
    "title": "CHIP-8",
}

# Buzzer
AUDIO = {
    "sample_rate": 48000,
    "frequency": 440,  # Square wave pitch in Hz
    "volume": 3000,  # Peak amplitude of signed 16-bit samples
}


def cycles_per_frame(cpu_hz, frame_hz=TIMING["frame_hz"]):
    """Number of step() calls to run between two frames (at least one)"""
    return max(1, round(cpu_hz / frame_hz))


def apply_overrides(**overrides):
    """Copy of TIMING with the given keys replaced; None values are ignored

    Raises:
        KeyError: for a key TIMING does not have
        ValueError: when changing a FIXED setting
    """
    timing = dict(TIMING)
    for key, value in overrides.items():
        if key not in timing:
            raise KeyError(f"Unknown timing setting: {key}")
        if key in FIXED and value is not None and value != timing[key]:
            raise ValueError(f"{key} is fixed at {timing[key]}")
        if value is not None:
            timing[key] = value
    return timing


def describe(timing=None):
    """Active settings as printable lines"""
    timing = timing or TIMING
    lines = []
    for category, opts in [("Timing", timing), ("Display", DISPLAY), ("Audio", AUDIO)]:
        lines.append(f"  {category}: " + ", ".join(f"{k}={v}" for k, v in opts.items()))
    return lines
