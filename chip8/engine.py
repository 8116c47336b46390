# Execution engine: one handler per Op, applied to a Machine in place.
#----------------------------------------------------------------------------------------------
# By the time a handler runs, fetch has already moved pc past the instruction,
# so "skip" is one more +2 and jumps overwrite pc. Handlers validate memory,
# stack and key accesses before changing anything, so a fault leaves the
# machine untouched.
#----------------------------------------------------------------------------------------------

import random

import numpy as np

from .constants import FLAG_REGISTER, FONTSET_START, FONT_BYTES_PER_CHAR, NUM_KEYS
from .errors import KeyIndexError
from .instructions import Op


class Engine:

    def __init__(self, rng=None):
        # anything with getrandbits() works, e.g. random.Random(seed)
        self.rng = rng if rng is not None else random.Random()
        self.setup_funcmap()

    def execute(self, m, ins):
        self.funcmap[ins.op](m, ins)

    # ---- Opcode function map ----
    def setup_funcmap(self):
        self.funcmap = {
            Op.CLEAR: self.op_CLS,
            Op.RETURN: self.op_RET,
            Op.JUMP: self.op_JP,
            Op.CALL: self.op_CALL,
            Op.SKIP_IF_EQUAL_BYTE: self.op_SE_Vx_kk,
            Op.SKIP_IF_NOT_EQUAL_BYTE: self.op_SNE_Vx_kk,
            Op.SKIP_IF_EQUAL_REGISTER: self.op_SE_Vx_Vy,
            Op.LOAD_BYTE: self.op_LD_Vx_kk,
            Op.ADD_BYTE: self.op_ADD_Vx_kk,
            Op.LOAD_REGISTER: self.op_LD_Vx_Vy,
            Op.OR: self.op_OR,
            Op.AND: self.op_AND,
            Op.XOR: self.op_XOR,
            Op.ADD_REGISTER: self.op_ADD,
            Op.SUB: self.op_SUB,
            Op.SHIFT_RIGHT: self.op_SHR,
            Op.SUB_FROM: self.op_SUBN,
            Op.SHIFT_LEFT: self.op_SHL,
            Op.SKIP_IF_NOT_EQUAL_REGISTER: self.op_SNE_Vx_Vy,
            Op.SET_INDEX: self.op_LD_I,
            Op.JUMP_OFFSET: self.op_JP_V0,
            Op.RANDOM: self.op_RND,
            Op.DISPLAY_SPRITE: self.op_DRW,
            Op.SKIP_IF_KEY_PRESSED: self.op_SKP,
            Op.SKIP_IF_NOT_KEY_PRESSED: self.op_SKNP,
            Op.LOAD_DELAY_TIMER: self.op_LD_Vx_DT,
            Op.WAIT_KEY_PRESS: self.op_WAITKEY,
            Op.SET_DELAY_TIMER: self.op_LD_DT_Vx,
            Op.SET_SOUND_TIMER: self.op_LD_ST_Vx,
            Op.ADD_INDEX: self.op_ADD_I_Vx,
            Op.LOAD_FONT: self.op_FONT,
            Op.BINARY_CODED_DECIMAL: self.op_BCD,
            Op.STORE_REGISTERS: self.op_STORE,
            Op.READ_REGISTERS: self.op_LOAD,
        }

    @staticmethod
    def _skip(m):
        m.pc = (m.pc + 2) & 0xFFFF

    @staticmethod
    def _key(m, x):
        key = m.V[x]
        if key >= NUM_KEYS:
            raise KeyIndexError(key)
        return key

    # ---- flow control ----

    def op_CLS(self, m, ins):
        m.display.clear()

    def op_RET(self, m, ins):
        m.pc = m.stack.pop()

    def op_JP(self, m, ins):
        m.pc = ins.nnn

    def op_CALL(self, m, ins):
        m.stack.push(m.pc)
        m.pc = ins.nnn

    def op_JP_V0(self, m, ins):
        m.pc = ins.nnn + m.V[0]

    def op_SE_Vx_kk(self, m, ins):
        if m.V[ins.x] == ins.kk:
            self._skip(m)

    def op_SNE_Vx_kk(self, m, ins):
        if m.V[ins.x] != ins.kk:
            self._skip(m)

    def op_SE_Vx_Vy(self, m, ins):
        if m.V[ins.x] == m.V[ins.y]:
            self._skip(m)

    def op_SNE_Vx_Vy(self, m, ins):
        if m.V[ins.x] != m.V[ins.y]:
            self._skip(m)

    # ---- registers and arithmetic ----

    def op_LD_Vx_kk(self, m, ins):
        m.V[ins.x] = ins.kk

    def op_ADD_Vx_kk(self, m, ins):
        # no carry flag for the immediate form
        m.V[ins.x] = (m.V[ins.x] + ins.kk) & 0xFF

    def op_LD_Vx_Vy(self, m, ins):
        m.V[ins.x] = m.V[ins.y]

    def op_OR(self, m, ins):
        m.V[ins.x] |= m.V[ins.y]

    def op_AND(self, m, ins):
        m.V[ins.x] &= m.V[ins.y]

    def op_XOR(self, m, ins):
        m.V[ins.x] ^= m.V[ins.y]

    def op_ADD(self, m, ins):
        total = m.V[ins.x] + m.V[ins.y]
        m.V[FLAG_REGISTER] = 1 if total > 0xFF else 0
        m.V[ins.x] = total & 0xFF

    def op_SUB(self, m, ins):
        # VF = NOT borrow
        vx, vy = m.V[ins.x], m.V[ins.y]
        m.V[FLAG_REGISTER] = 1 if vx > vy else 0
        m.V[ins.x] = (vx - vy) & 0xFF

    def op_SUBN(self, m, ins):
        vx, vy = m.V[ins.x], m.V[ins.y]
        m.V[FLAG_REGISTER] = 1 if vy > vx else 0
        m.V[ins.x] = (vy - vx) & 0xFF

    # CHIP-48 shifts: Vx is shifted in place, Vy is not read

    def op_SHR(self, m, ins):
        vx = m.V[ins.x]
        m.V[FLAG_REGISTER] = vx & 1
        m.V[ins.x] = vx >> 1

    def op_SHL(self, m, ins):
        vx = m.V[ins.x]
        m.V[FLAG_REGISTER] = (vx >> 7) & 1
        m.V[ins.x] = (vx << 1) & 0xFF

    def op_RND(self, m, ins):
        m.V[ins.x] = self.rng.getrandbits(8) & ins.kk

    # ---- index register and memory ----

    def op_LD_I(self, m, ins):
        m.I = ins.nnn

    def op_ADD_I_Vx(self, m, ins):
        m.I = (m.I + m.V[ins.x]) & 0xFFFF

    def op_FONT(self, m, ins):
        m.I = FONTSET_START + m.V[ins.x] * FONT_BYTES_PER_CHAR

    def op_BCD(self, m, ins):
        v = m.V[ins.x]
        m.memory.write_block(m.I, (v // 100, (v // 10) % 10, v % 10))

    def op_STORE(self, m, ins):
        m.memory.write_block(m.I, m.V[:ins.x + 1])

    def op_LOAD(self, m, ins):
        m.V[:ins.x + 1] = m.memory.read_block(m.I, ins.x + 1)

    # ---- display ----

    def op_DRW(self, m, ins):
        rows = m.memory.read_block(m.I, ins.n)
        collision = m.display.draw_sprite(m.V[ins.x], m.V[ins.y], rows)
        m.V[FLAG_REGISTER] = 1 if collision else 0

    # ---- keypad ----

    def op_SKP(self, m, ins):
        if m.keypad[self._key(m, ins.x)]:
            self._skip(m)

    def op_SKNP(self, m, ins):
        if not m.keypad[self._key(m, ins.x)]:
            self._skip(m)

    def op_WAITKEY(self, m, ins):
        pressed = np.flatnonzero(m.keypad)
        if len(pressed) == 0:
            # stall, the same instruction runs again next step
            m.pc = (m.pc - 2) & 0xFFFF
        else:
            m.V[ins.x] = int(pressed[0])

    # ---- timers ----

    def op_LD_Vx_DT(self, m, ins):
        m.V[ins.x] = m.delay_timer

    def op_LD_DT_Vx(self, m, ins):
        m.delay_timer = m.V[ins.x]

    def op_LD_ST_Vx(self, m, ins):
        m.sound_timer = m.V[ins.x]
