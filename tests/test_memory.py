"""Tests for bounds-checked memory, the call stack and the framebuffer."""

import pytest

from chip8.display import Display
from chip8.errors import MemoryAccessError, StackOverflowError, StackUnderflowError
from chip8.memory import CallStack, Memory


class TestMemory:

    def test_read_word_big_endian(self):
        mem = Memory()
        mem.load(0x300, [0xAB, 0xCD])
        assert mem.read_word(0x300) == 0xABCD

    @pytest.mark.parametrize("address,length", [(-1, 1), (0xFFF, 1), (0xFFE, 2), (0, 0x1000)])
    def test_out_of_range(self, address, length):
        with pytest.raises(MemoryAccessError) as exc:
            Memory().check(address, length)
        assert exc.value.address == address

    def test_last_byte_is_addressable(self):
        mem = Memory()
        mem.write_block(0xFFE, [7])
        assert mem.read_block(0xFFE, 1) == b"\x07"

    def test_rejected_write_changes_nothing(self):
        mem = Memory()
        with pytest.raises(MemoryAccessError):
            mem.write_block(0xFFD, [1, 2, 3])
        assert mem.read_block(0xFFD, 2) == b"\x00\x00"


class TestCallStack:

    def test_push_pop(self):
        stack = CallStack()
        stack.push(0x202)
        stack.push(0x404)
        assert stack.frames() == (0x202, 0x404)
        assert stack.pop() == 0x404
        assert stack.pop() == 0x202
        assert len(stack) == 0

    def test_capacity(self):
        stack = CallStack(size=4)
        for addr in range(3):
            stack.push(addr)
        with pytest.raises(StackOverflowError):
            stack.push(99)
        assert stack.frames() == (0, 1, 2)

    def test_underflow(self):
        with pytest.raises(StackUnderflowError):
            CallStack().pop()


class TestDisplay:

    def test_draw_returns_collision(self):
        d = Display()
        assert d.draw_sprite(0, 0, b"\x80") is False
        assert d.buffer[0, 0] == 1
        assert d.draw_sprite(0, 0, b"\x80") is True
        assert d.buffer[0, 0] == 0

    def test_clear(self):
        d = Display()
        d.draw_sprite(10, 10, b"\xFF\xFF")
        assert d.buffer.sum() == 16
        d.clear()
        assert not d.buffer.any()

    def test_to_text(self):
        d = Display(width=8, height=2)
        d.draw_sprite(0, 0, b"\xA0")
        assert d.to_text() == "#.#.....\n........"
