# CHIP8 memory map and machine sizes.
#----------------------------------------------------------------------------------------------
# 0x000 - 0x1FF reserved for the interpreter (fonts live at 0x050 - 0x09F)
# 0x200 - 0xFFE program / data space
#----------------------------------------------------------------------------------------------

MEMORY_SIZE = 0xFFF
PROGRAM_START = 0x200

NUM_REGISTERS = 16
FLAG_REGISTER = 0xF
STACK_SIZE = 16
NUM_KEYS = 16

# display
WIDTH, HEIGHT = 64, 32
PIXEL_ON = 1
PIXEL_OFF = 0
SPRITE_WIDTH = 8

# reference rates (Hz)
CPU_HZ = 500
TIMER_HZ = 60

# set fonts (binary pixel patterns)
FONTSET_START = 0x050
FONT_BYTES_PER_CHAR = 5
FONTSET = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
] #notice 80 bytes
