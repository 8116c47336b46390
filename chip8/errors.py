# Everything the core raises. MachineFault and its subclasses are per-step:
# the machine is left as it was before the faulting step and the host decides
# whether to halt or skip.


class Chip8Error(Exception):
    pass


class ImageTooLargeError(Chip8Error):
    def __init__(self, size, capacity):
        super().__init__(f"program image is {size} bytes, only {capacity} fit in memory")
        self.size = size
        self.capacity = capacity


class MachineFault(Chip8Error):
    pass


class DecodeError(MachineFault):
    def __init__(self, opcode):
        super().__init__(f"invalid opcode {opcode:04X}")
        self.opcode = opcode


class StackOverflowError(MachineFault):
    pass


class StackUnderflowError(MachineFault):
    pass


class MemoryAccessError(MachineFault):
    def __init__(self, address, length=1):
        super().__init__(f"memory access out of range: 0x{address:03X} (+{length})")
        self.address = address
        self.length = length


class KeyIndexError(MachineFault):
    def __init__(self, key):
        super().__init__(f"no such key: 0x{key:02X}")
        self.key = key
