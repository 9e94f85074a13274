ROM_SIZE         = 0x100
RAM_SIZE         = 0x80
NIBBLE_COUNT     = RAM_SIZE * 2
PROGRAM_LIMIT    = ROM_SIZE - 1     # the last ROM byte is never loaded

DISPLAY_NIBBLES  = 4                # nibbles 0-3 form the 4x4 screen
DISPLAY_SIZE     = 4

REG_MASK         = 0x0F
ADDR_MASK        = 0xFF

DEFAULT_DELAY_US = 100000
HEADLESS_CYCLES  = 256

DISASM_WIDTH       = 15
MEMORY_ROW_NIBBLES = 16

VERSION = '1.0.0'
