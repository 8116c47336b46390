# Frame driver shared by the window and headless mode.
#----------------------------------------------------------------------------------------------
# One frame = one timer period: push the key snapshot, tick the timers once,
# then run as many instructions as cpu_hz / timer_hz asks for. The fractional
# part carries over so e.g. 500 Hz / 60 Hz averages out to 8.33 steps.
#----------------------------------------------------------------------------------------------

import logging

from .config import Config
from .errors import MachineFault
from .keymap import Keyboard

logger = logging.getLogger("chip8")


class Runner:

    def __init__(self, machine, config=None, keyboard=None):
        self.machine = machine
        self.config = config or Config()
        self.keyboard = keyboard or Keyboard()
        self.halted = False
        self.fault = None
        self.frames = 0
        self._budget = 0.0

    def frame(self):
        """Run one timer period. Returns the number of cycles run, skipped faults included."""
        if self.halted:
            return 0

        m = self.machine
        m.set_keypad(self.keyboard.snapshot())
        m.tick()

        self._budget += self.config.steps_per_frame
        steps = int(self._budget)
        self._budget -= steps

        executed = 0
        for _ in range(steps):
            try:
                m.step()
            except MachineFault as e:
                logger.warning("%s at 0x%03X", e, m.pc)
                if self.config.on_fault == "halt":
                    self.halted = True
                    self.fault = e
                    break
                m.skip()
            executed += 1

        self.frames += 1
        return executed

    def run(self, frames):
        total = 0
        for _ in range(frames):
            if self.halted:
                break
            total += self.frame()
        return total
