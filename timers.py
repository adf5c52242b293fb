"""
CHIP-8 delay and sound timers
Both count down once per tick() while nonzero; the shell calls tick() at 60 Hz
"""


class Timers:
    def __init__(self):
        self.delay = 0
        self.sound = 0

    def reset(self):
        self.delay = 0
        self.sound = 0

    def tick(self):
        """Decrement both counters, holding at zero"""
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    def set_delay(self, value):
        self.delay = max(0, min(255, value))

    def set_sound(self, value):
        self.sound = max(0, min(255, value))

    def get_delay(self):
        return self.delay

    def get_sound(self):
        return self.sound

    @property
    def sound_active(self):
        """The buzzer is on whenever the sound timer is nonzero"""
        return self.sound > 0


class TickScheduler:
    """Spreads timer ticks over presentation frames.

    The timers run at timer_hz whatever the frame rate is; with a 30 Hz
    frame rate every frame gets two ticks, at 120 Hz every other frame one.
    """

    def __init__(self, timer_hz, frame_hz):
        self.ticks_per_frame = timer_hz / frame_hz
        self.pending = 0.0

    def ticks_for_frame(self):
        """Number of tick() calls due at the end of the next frame"""
        self.pending += self.ticks_per_frame
        due = int(self.pending + 1e-9)
        self.pending -= due
        return due
