# Instruction decode. CPU - CowGods CHIP8 Technical reference
# http://devernay.free.fr/hacks/chip8/C8TECH10.HTM#3.0
#----------------------------------------------------------------------------------------------
# Field names used throughout:
#   nnn => lowest 12 bits          n  => lowest 4 bits
#   x   => bits 8-11 (register)    y  => bits 4-7 (register)
#   kk  => lowest byte
#----------------------------------------------------------------------------------------------

import enum
from dataclasses import dataclass

from .errors import DecodeError


class Op(enum.Enum):
    CLEAR = enum.auto()
    RETURN = enum.auto()
    JUMP = enum.auto()
    CALL = enum.auto()
    SKIP_IF_EQUAL_BYTE = enum.auto()
    SKIP_IF_NOT_EQUAL_BYTE = enum.auto()
    SKIP_IF_EQUAL_REGISTER = enum.auto()
    LOAD_BYTE = enum.auto()
    ADD_BYTE = enum.auto()
    LOAD_REGISTER = enum.auto()
    OR = enum.auto()
    AND = enum.auto()
    XOR = enum.auto()
    ADD_REGISTER = enum.auto()
    SUB = enum.auto()
    SHIFT_RIGHT = enum.auto()
    SUB_FROM = enum.auto()
    SHIFT_LEFT = enum.auto()
    SKIP_IF_NOT_EQUAL_REGISTER = enum.auto()
    SET_INDEX = enum.auto()
    JUMP_OFFSET = enum.auto()
    RANDOM = enum.auto()
    DISPLAY_SPRITE = enum.auto()
    SKIP_IF_KEY_PRESSED = enum.auto()
    SKIP_IF_NOT_KEY_PRESSED = enum.auto()
    LOAD_DELAY_TIMER = enum.auto()
    WAIT_KEY_PRESS = enum.auto()
    SET_DELAY_TIMER = enum.auto()
    SET_SOUND_TIMER = enum.auto()
    ADD_INDEX = enum.auto()
    LOAD_FONT = enum.auto()
    BINARY_CODED_DECIMAL = enum.auto()
    STORE_REGISTERS = enum.auto()
    READ_REGISTERS = enum.auto()


# decode table, first match wins. 0nnn (SYS) is not supported and fails to decode.
# (mask, pattern, op)
OPCODES = [
    (0xFFFF, 0x00E0, Op.CLEAR),                      # 00E0 - CLS
    (0xFFFF, 0x00EE, Op.RETURN),                     # 00EE - RET

    (0xF000, 0x1000, Op.JUMP),                       # 1nnn - JP addr
    (0xF000, 0x2000, Op.CALL),                       # 2nnn - CALL addr
    (0xF000, 0x3000, Op.SKIP_IF_EQUAL_BYTE),         # 3xkk - SE Vx, byte
    (0xF000, 0x4000, Op.SKIP_IF_NOT_EQUAL_BYTE),     # 4xkk - SNE Vx, byte
    (0xF00F, 0x5000, Op.SKIP_IF_EQUAL_REGISTER),     # 5xy0 - SE Vx, Vy
    (0xF000, 0x6000, Op.LOAD_BYTE),                  # 6xkk - LD Vx, byte
    (0xF000, 0x7000, Op.ADD_BYTE),                   # 7xkk - ADD Vx, byte

    (0xF00F, 0x8000, Op.LOAD_REGISTER),              # 8xy0 - LD Vx, Vy
    (0xF00F, 0x8001, Op.OR),                         # 8xy1 - OR Vx, Vy
    (0xF00F, 0x8002, Op.AND),                        # 8xy2 - AND Vx, Vy
    (0xF00F, 0x8003, Op.XOR),                        # 8xy3 - XOR Vx, Vy
    (0xF00F, 0x8004, Op.ADD_REGISTER),               # 8xy4 - ADD Vx, Vy
    (0xF00F, 0x8005, Op.SUB),                        # 8xy5 - SUB Vx, Vy
    (0xF00F, 0x8006, Op.SHIFT_RIGHT),                # 8xy6 - SHR Vx
    (0xF00F, 0x8007, Op.SUB_FROM),                   # 8xy7 - SUBN Vx, Vy
    (0xF00F, 0x800E, Op.SHIFT_LEFT),                 # 8xyE - SHL Vx

    (0xF00F, 0x9000, Op.SKIP_IF_NOT_EQUAL_REGISTER), # 9xy0 - SNE Vx, Vy
    (0xF000, 0xA000, Op.SET_INDEX),                  # Annn - LD I, addr
    (0xF000, 0xB000, Op.JUMP_OFFSET),                # Bnnn - JP V0, addr
    (0xF000, 0xC000, Op.RANDOM),                     # Cxkk - RND Vx, byte
    (0xF000, 0xD000, Op.DISPLAY_SPRITE),             # Dxyn - DRW Vx, Vy, nibble

    (0xF0FF, 0xE09E, Op.SKIP_IF_KEY_PRESSED),        # Ex9E - SKP Vx
    (0xF0FF, 0xE0A1, Op.SKIP_IF_NOT_KEY_PRESSED),    # ExA1 - SKNP Vx

    (0xF0FF, 0xF007, Op.LOAD_DELAY_TIMER),           # Fx07 - LD Vx, DT
    (0xF0FF, 0xF00A, Op.WAIT_KEY_PRESS),             # Fx0A - LD Vx, K
    (0xF0FF, 0xF015, Op.SET_DELAY_TIMER),            # Fx15 - LD DT, Vx
    (0xF0FF, 0xF018, Op.SET_SOUND_TIMER),            # Fx18 - LD ST, Vx
    (0xF0FF, 0xF01E, Op.ADD_INDEX),                  # Fx1E - ADD I, Vx
    (0xF0FF, 0xF029, Op.LOAD_FONT),                  # Fx29 - LD F, Vx
    (0xF0FF, 0xF033, Op.BINARY_CODED_DECIMAL),       # Fx33 - LD B, Vx
    (0xF0FF, 0xF055, Op.STORE_REGISTERS),            # Fx55 - LD [I], Vx
    (0xF0FF, 0xF065, Op.READ_REGISTERS),             # Fx65 - LD Vx, [I]
]

MNEMONICS = {
    Op.CLEAR: "CLS",
    Op.RETURN: "RET",
    Op.JUMP: "JP {nnn:03X}",
    Op.CALL: "CALL {nnn:03X}",
    Op.SKIP_IF_EQUAL_BYTE: "SE V{x:X}, {kk:02X}",
    Op.SKIP_IF_NOT_EQUAL_BYTE: "SNE V{x:X}, {kk:02X}",
    Op.SKIP_IF_EQUAL_REGISTER: "SE V{x:X}, V{y:X}",
    Op.LOAD_BYTE: "LD V{x:X}, {kk:02X}",
    Op.ADD_BYTE: "ADD V{x:X}, {kk:02X}",
    Op.LOAD_REGISTER: "LD V{x:X}, V{y:X}",
    Op.OR: "OR V{x:X}, V{y:X}",
    Op.AND: "AND V{x:X}, V{y:X}",
    Op.XOR: "XOR V{x:X}, V{y:X}",
    Op.ADD_REGISTER: "ADD V{x:X}, V{y:X}",
    Op.SUB: "SUB V{x:X}, V{y:X}",
    Op.SHIFT_RIGHT: "SHR V{x:X}",
    Op.SUB_FROM: "SUBN V{x:X}, V{y:X}",
    Op.SHIFT_LEFT: "SHL V{x:X}",
    Op.SKIP_IF_NOT_EQUAL_REGISTER: "SNE V{x:X}, V{y:X}",
    Op.SET_INDEX: "LD I, {nnn:03X}",
    Op.JUMP_OFFSET: "JP V0, {nnn:03X}",
    Op.RANDOM: "RND V{x:X}, {kk:02X}",
    Op.DISPLAY_SPRITE: "DRW V{x:X}, V{y:X}, {n:X}",
    Op.SKIP_IF_KEY_PRESSED: "SKP V{x:X}",
    Op.SKIP_IF_NOT_KEY_PRESSED: "SKNP V{x:X}",
    Op.LOAD_DELAY_TIMER: "LD V{x:X}, DT",
    Op.WAIT_KEY_PRESS: "LD V{x:X}, K",
    Op.SET_DELAY_TIMER: "LD DT, V{x:X}",
    Op.SET_SOUND_TIMER: "LD ST, V{x:X}",
    Op.ADD_INDEX: "ADD I, V{x:X}",
    Op.LOAD_FONT: "LD F, V{x:X}",
    Op.BINARY_CODED_DECIMAL: "LD B, V{x:X}",
    Op.STORE_REGISTERS: "LD [I], V{x:X}",
    Op.READ_REGISTERS: "LD V{x:X}, [I]",
}


@dataclass(frozen=True)
class Instruction:
    """A decoded opcode: the op tag plus every bit-field of the raw word.

    Only the fields the op uses are meaningful; the rest are still filled in
    so handlers never re-extract bits.
    """
    op: Op
    opcode: int
    nnn: int = 0
    n: int = 0
    x: int = 0
    y: int = 0
    kk: int = 0

    def __str__(self):
        return MNEMONICS[self.op].format(nnn=self.nnn, n=self.n, x=self.x, y=self.y, kk=self.kk)


def decode(opcode: int) -> Instruction:
    """Map a 16-bit opcode to an Instruction, or raise DecodeError."""
    if not 0 <= opcode <= 0xFFFF:
        raise DecodeError(opcode)

    for mask, pattern, op in OPCODES:
        if (opcode & mask) == pattern:
            return Instruction(
                op=op,
                opcode=opcode,
                nnn=opcode & 0x0FFF,
                n=opcode & 0x000F,
                x=(opcode >> 8) & 0xF,
                y=(opcode >> 4) & 0xF,
                kk=opcode & 0xFF,
            )

    raise DecodeError(opcode)
