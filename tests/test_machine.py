"""Tests for Machine construction, stepping, timers and input."""

import dataclasses

import numpy as np
import pytest

from chip8 import Machine
from chip8.constants import FONTSET, FONTSET_START, MEMORY_SIZE, PROGRAM_START
from chip8.errors import DecodeError, ImageTooLargeError, MemoryAccessError


class TestConstruction:
    """A new machine holds the fonts, the program and nothing else."""

    def test_fonts_loaded(self):
        m = Machine(b"")
        assert m.memory.read_block(FONTSET_START, len(FONTSET)) == bytes(FONTSET)
        assert m.memory.read_block(0, FONTSET_START) == bytes(FONTSET_START)

    def test_program_loaded(self):
        m = Machine(b"\x12\x34\x56")
        assert m.memory.read_block(PROGRAM_START, 4) == b"\x12\x34\x56\x00"

    def test_initial_state(self):
        m = Machine(b"\x00\xE0")
        assert m.pc == 0x200
        assert m.I == 0
        assert list(m.V) == [0] * 16
        assert len(m.stack) == 0
        assert m.delay_timer == 0 and m.sound_timer == 0
        assert not m.keypad.any()
        assert not m.get_display().any()
        assert len(m.memory) == MEMORY_SIZE

    def test_largest_image_fits(self):
        m = Machine(bytes([0xAB]) * (MEMORY_SIZE - PROGRAM_START))
        assert m.memory.read_block(MEMORY_SIZE - 1, 1) == b"\xAB"

    def test_image_too_large(self):
        with pytest.raises(ImageTooLargeError) as exc:
            Machine(bytes(MEMORY_SIZE - PROGRAM_START + 1))
        assert exc.value.capacity == MEMORY_SIZE - PROGRAM_START


class TestStep:
    """Fetch / decode / execute."""

    def test_step_advances_pc(self, load):
        m = load(0x6A42)
        ins = m.step()
        assert str(ins) == "LD VA, 42"
        assert m.V[0xA] == 0x42
        assert m.pc == 0x202
        assert m.cycle_count == 1

    def test_decode_failure_leaves_state(self, load):
        m = load(0x5121)
        with pytest.raises(DecodeError) as exc:
            m.step()
        assert exc.value.opcode == 0x5121
        assert m.pc == 0x200
        assert m.cycle_count == 0

    def test_fetch_past_memory(self, load):
        m = load()
        m.pc = MEMORY_SIZE - 1
        with pytest.raises(MemoryAccessError):
            m.step()
        assert m.pc == MEMORY_SIZE - 1

    def test_skip_moves_past_word(self, load):
        m = load(0x5121, 0x6001)
        m.skip()
        m.step()
        assert m.V[0] == 1

    def test_running_off_the_program_faults(self, load):
        m = load(0x6001)
        m.step()
        with pytest.raises(DecodeError) as exc:
            m.step()
        assert exc.value.opcode == 0x0000
        assert m.pc == 0x202


class TestTimers:
    """Delay and sound timers."""

    def test_tick_decrements_both(self):
        m = Machine()
        m.delay_timer, m.sound_timer = 3, 1
        m.tick()
        assert (m.delay_timer, m.sound_timer) == (2, 0)

    def test_tick_is_floored(self):
        m = Machine()
        for _ in range(5):
            m.tick()
        assert (m.delay_timer, m.sound_timer) == (0, 0)

    def test_sound_gate(self):
        m = Machine()
        assert m.is_playing_sound() is False
        m.sound_timer = 2
        assert m.is_playing_sound() is True
        m.tick()
        assert m.is_playing_sound() is True
        m.tick()
        assert m.is_playing_sound() is False

    def test_steps_do_not_touch_timers(self, load):
        m = load(0x1200)
        m.delay_timer = 10
        for _ in range(50):
            m.step()
        assert m.delay_timer == 10


class TestKeypad:
    """Keypad snapshots replace the whole keypad."""

    def test_set_keypad(self):
        m = Machine()
        keys = [0] * 16
        keys[3] = 0xFF
        m.set_keypad(keys)
        assert m.keypad[3]
        assert m.keypad.sum() == 1

    def test_snapshot_replaces_previous(self):
        m = Machine()
        m.set_keypad([True] * 16)
        m.set_keypad([False] * 16)
        assert not m.keypad.any()

    def test_snapshot_is_copied(self):
        m = Machine()
        keys = np.zeros(16, dtype=bool)
        m.set_keypad(keys)
        keys[0] = True
        assert not m.keypad[0]

    @pytest.mark.parametrize("size", [0, 15, 17])
    def test_wrong_size(self, size):
        with pytest.raises(ValueError):
            Machine().set_keypad([False] * size)


class TestSnapshots:
    """Read-only views of the machine."""

    def test_display_is_a_copy(self):
        m = Machine()
        screen = m.get_display()
        assert screen.shape == (32, 64)
        screen[0, 0] = 1
        assert m.get_display()[0, 0] == 0

    def test_state_snapshot(self, load):
        m = load(0x6105, 0x2300)
        m.step()
        m.step()
        snap = m.snapshot()
        assert snap.registers[1] == 5
        assert snap.pc == 0x300
        assert snap.stack == (0x204,)
        assert snap.sp == 1
        assert "PC=300" in str(snap)

    def test_snapshot_is_frozen(self):
        snap = Machine().snapshot()
        with pytest.raises(dataclasses.FrozenInstanceError):
            snap.pc = 0
