"""
CHIP-8 hex keypad latch
Written by the front end between steps, only read by instructions
"""

NUM_KEYS = 16


class Keypad:
    def __init__(self):
        self.keys = [False] * NUM_KEYS

    def reset(self):
        self.keys = [False] * NUM_KEYS

    def set_key(self, index, pressed):
        if not 0 <= index < NUM_KEYS:
            raise ValueError(f"Key index must be 0x0-0xF, got {index}")
        self.keys[index] = bool(pressed)

    def is_pressed(self, index):
        # Instructions pass a full register value; only the low nibble names a key
        return self.keys[index & 0xF]

    def first_pressed(self):
        """Lowest pressed key index, or None if nothing is held"""
        for index, pressed in enumerate(self.keys):
            if pressed:
                return index
        return None
