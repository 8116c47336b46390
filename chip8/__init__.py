"""CHIP-8 virtual machine with a pyglet frontend.

The core (Machine, decode, Engine) has no clock and no I/O: the host feeds it
key snapshots, calls tick() at 60 Hz and step() at the instruction rate, and
reads the display back.
"""

__version__ = "0.1.0"

from .constants import WIDTH, HEIGHT, PIXEL_ON, PIXEL_OFF
from .errors import (
    Chip8Error, ImageTooLargeError, MachineFault, DecodeError,
    StackOverflowError, StackUnderflowError, MemoryAccessError, KeyIndexError,
)
from .instructions import Op, Instruction, decode
from .machine import Machine, MachineSnapshot

__all__ = [
    "Machine", "MachineSnapshot", "Op", "Instruction", "decode",
    "Chip8Error", "ImageTooLargeError", "MachineFault", "DecodeError",
    "StackOverflowError", "StackUnderflowError", "MemoryAccessError", "KeyIndexError",
    "WIDTH", "HEIGHT", "PIXEL_ON", "PIXEL_OFF",
]
