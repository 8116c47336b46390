# RAM and the subroutine stack. Every address that comes from a register or
# from I goes through check() before it is touched.

import numpy as np

from .constants import MEMORY_SIZE, STACK_SIZE
from .errors import MemoryAccessError, StackOverflowError, StackUnderflowError


class Memory:

    def __init__(self, size=MEMORY_SIZE):
        self.data = bytearray(size)

    def __len__(self):
        return len(self.data)

    def check(self, address, length=1):
        if address < 0 or length < 0 or address + length > len(self.data):
            raise MemoryAccessError(address, length)

    def load(self, address, data):
        """Copy a block in (fonts, program image)."""
        self.check(address, len(data))
        self.data[address:address + len(data)] = bytes(data)

    def read_word(self, address):
        # opcodes are big-endian
        self.check(address, 2)
        return (self.data[address] << 8) | self.data[address + 1]

    def read_block(self, address, length):
        self.check(address, length)
        return bytes(self.data[address:address + length])

    def write_block(self, address, values):
        self.check(address, len(values))
        self.data[address:address + len(values)] = bytes(values)


class CallStack:
    # sp is incremented before a push and decremented after a pop, so slot 0
    # is never used and sp == 0 means empty.

    def __init__(self, size=STACK_SIZE):
        self.slots = np.zeros(size, dtype=np.uint16)
        self.sp = 0

    def __len__(self):
        return self.sp

    def push(self, address):
        if self.sp >= len(self.slots) - 1:
            raise StackOverflowError(f"call stack full ({self.sp} return addresses)")
        self.sp += 1
        self.slots[self.sp] = address

    def pop(self):
        if self.sp == 0:
            raise StackUnderflowError("return with an empty call stack")
        address = int(self.slots[self.sp])
        self.sp -= 1
        return address

    def frames(self):
        return tuple(int(a) for a in self.slots[1:self.sp + 1])
