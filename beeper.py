"""
CHIP-8 buzzer
Square wave generator that queues audio to an SDL2 device while the sound
timer is running
"""

import struct

import sdl2

from config import AUDIO


class Beeper:
    """Square wave source with phase carried across frames"""

    def __init__(self, sample_rate=None, frequency=None, volume=None):
        self.sample_rate = sample_rate or AUDIO["sample_rate"]
        self.frequency = frequency or AUDIO["frequency"]
        self.volume = AUDIO["volume"] if volume is None else volume
        self.audio_device = None
        self.phase = 0.0  # Position within the current period, 0.0-1.0

    def init_audio_device(self, audio_device):
        """Attach the SDL audio device opened by the front end"""
        self.audio_device = audio_device

    def generate(self, count):
        """Next `count` signed 16-bit mono samples as bytes"""
        step = self.frequency / self.sample_rate
        samples = []
        phase = self.phase
        for _ in range(count):
            samples.append(self.volume if phase < 0.5 else -self.volume)
            phase += step
            if phase >= 1.0:
                phase -= 1.0
        self.phase = phase
        return struct.pack(f"<{count}h", *samples)

    def update(self, active, frame_hz):
        """Queue one frame of tone while active, drop queued audio otherwise"""
        if not self.audio_device:
            return
        if not active:
            sdl2.SDL_ClearQueuedAudio(self.audio_device)
            self.phase = 0.0
            return

        frame_samples = self.sample_rate // frame_hz
        # Keep at most two frames buffered so the tone stops promptly
        if sdl2.SDL_GetQueuedAudioSize(self.audio_device) > frame_samples * 4:
            return
        data = self.generate(frame_samples)
        sdl2.SDL_QueueAudio(self.audio_device, data, len(data))
