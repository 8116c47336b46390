# CHIP8 Virtual Machine
#----------------------------------------------------------------------------------------------
# Input - the host hands over a full 16-key snapshot once per frame.
# Output - 64x32 display (pixels are either on or off) & the sound timer as a buzzer gate.
# Memory - 0xFFF bytes holding the font set at 0x050 and the program at 0x200.
#----------------------------------------------------------------------------------------------
# The machine has no clock of its own. The host calls tick() at 60 Hz and
# step() as often as it wants instructions to run.

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .constants import (
    FONTSET, FONTSET_START, MEMORY_SIZE, NUM_KEYS, NUM_REGISTERS, PROGRAM_START,
)
from .display import Display
from .engine import Engine
from .errors import ImageTooLargeError, MachineFault
from .instructions import Instruction, decode
from .log import log
from .memory import CallStack, Memory


@dataclass(frozen=True)
class MachineSnapshot:
    registers: Tuple[int, ...]
    index: int
    pc: int
    stack: Tuple[int, ...]
    sp: int
    delay_timer: int
    sound_timer: int
    keypad: Tuple[bool, ...]

    def __str__(self):
        regs = " ".join(f"V{i:X}={v:02X}" for i, v in enumerate(self.registers))
        return (f"PC={self.pc:03X} I={self.index:03X} SP={self.sp} "
                f"DT={self.delay_timer} ST={self.sound_timer} {regs}")


class Machine:

    def __init__(self, program=b"", rng=None):
        program = bytes(program)
        capacity = MEMORY_SIZE - PROGRAM_START
        if len(program) > capacity:
            raise ImageTooLargeError(len(program), capacity)

        # ---- CPU state ----
        self.memory = Memory()
        self.V = bytearray(NUM_REGISTERS)   # V0..VF
        self.I = 0                          # index register
        self.pc = PROGRAM_START
        self.stack = CallStack()
        self.delay_timer = 0
        self.sound_timer = 0
        self.keypad = np.zeros(NUM_KEYS, dtype=bool)
        self.display = Display()
        self.engine = Engine(rng)
        self.cycle_count = 0

        # Load fontset and ROM into memory
        self.memory.load(FONTSET_START, FONTSET)
        self.memory.load(PROGRAM_START, program)

    # ---- Cycle ----
    def step(self) -> Instruction:
        """Fetch, decode and execute one instruction.

        Raises a MachineFault on an invalid opcode or an illegal stack, memory
        or key access; the machine is then left as it was before the call.
        """
        pc = self.pc
        opcode = self.memory.read_word(pc)
        ins = decode(opcode)

        self.pc = (pc + 2) & 0xFFFF
        try:
            self.engine.execute(self, ins)
        except MachineFault:
            self.pc = pc
            raise

        self.cycle_count += 1
        log("%03X: %04X %s", pc, opcode, ins)
        return ins

    def skip(self):
        """Move past the current instruction word without running it."""
        self.pc = (self.pc + 2) & 0xFFFF

    # ---- timers ----
    def tick(self):
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1

    def is_playing_sound(self):
        return self.sound_timer > 0

    # ---- Input ----
    def set_keypad(self, pressed):
        keys = np.asarray(pressed, dtype=bool)
        if keys.shape != (NUM_KEYS,):
            raise ValueError(f"keypad snapshot needs {NUM_KEYS} entries, got {keys.size}")
        self.keypad = keys.copy()

    # ---- Output ----
    def get_display(self):
        return self.display.snapshot()

    def snapshot(self):
        return MachineSnapshot(
            registers=tuple(self.V),
            index=self.I,
            pc=self.pc,
            stack=self.stack.frames(),
            sp=self.stack.sp,
            delay_timer=self.delay_timer,
            sound_timer=self.sound_timer,
            keypad=tuple(bool(k) for k in self.keypad),
        )

    def __str__(self):
        return str(self.snapshot())
