"""
GlyphEngine - engine/keys.py
Virtual-key codes (0-255) understood by the InputTracker.
"""

KEY_COUNT: int = 256

VK_BACK = 0x08
VK_TAB = 0x09
VK_RETURN = 0x0D
VK_SHIFT = 0x10
VK_CONTROL = 0x11
VK_MENU = 0x12  # alt
VK_PAUSE = 0x13
VK_CAPITAL = 0x14
VK_ESCAPE = 0x1B
VK_SPACE = 0x20
VK_PRIOR = 0x21  # page up
VK_NEXT = 0x22  # page down
VK_END = 0x23
VK_HOME = 0x24
VK_LEFT = 0x25
VK_UP = 0x26
VK_RIGHT = 0x27
VK_DOWN = 0x28
VK_INSERT = 0x2D
VK_DELETE = 0x2E

VK_0 = 0x30  # VK_0..VK_9 follow ASCII digits
VK_A = 0x41  # VK_A..VK_Z follow ASCII uppercase letters

VK_NUMPAD0 = 0x60
VK_MULTIPLY = 0x6A
VK_ADD = 0x6B
VK_SUBTRACT = 0x6D
VK_DECIMAL = 0x6E
VK_DIVIDE = 0x6F

VK_F1 = 0x70  # VK_F1..VK_F12 are consecutive


def vk_digit(n: int) -> int:
    """Key code for the top-row digit n (0-9)."""
    if not 0 <= n <= 9:
        raise ValueError(f"Not a digit: {n}")
    return VK_0 + n


def vk_letter(letter: str) -> int:
    """Key code for a letter key, case-insensitive."""
    upper = letter.upper()
    if len(upper) != 1 or not "A" <= upper <= "Z":
        raise ValueError(f"Not a letter key: {letter!r}")
    return ord(upper)


def vk_function(n: int) -> int:
    """Key code for function key Fn (1-12)."""
    if not 1 <= n <= 12:
        raise ValueError(f"No such function key: F{n}")
    return VK_F1 + n - 1
