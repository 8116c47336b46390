# Key mapping - maps physical keyboard keys to the CHIP-8 keypad
#
#   Keypad       Keyboard
#   1 2 3 C      1 2 3 4
#   4 5 6 D      Q W E R
#   7 8 9 E      A S D F
#   A 0 B F      Z X C V
#
# Keys are named the way pyglet.window.key names them, so the frontend can
# resolve them with getattr() and this module stays importable without a display.

from .constants import NUM_KEYS

KEYMAP = {
    "_1": 0x1, "_2": 0x2, "_3": 0x3, "_4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}


class Keyboard:
    """Tracks which keypad keys are held, fed by press/release events."""

    def __init__(self, keymap=None):
        self.keymap = dict(KEYMAP if keymap is None else keymap)
        self.keys = [False] * NUM_KEYS

    def press(self, name):
        if name in self.keymap:
            self.keys[self.keymap[name]] = True
            return True
        return False

    def release(self, name):
        if name in self.keymap:
            self.keys[self.keymap[name]] = False
            return True
        return False

    def release_all(self):
        self.keys = [False] * NUM_KEYS

    def snapshot(self):
        return list(self.keys)
