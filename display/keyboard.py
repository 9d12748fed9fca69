"""
GlyphEngine - display/keyboard.py
Turns tcod key events into the 256-entry "is down" sample the InputTracker eats.
"""

from __future__ import annotations

from typing import Dict, Optional

import numpy as np
import tcod.event

from engine import keys
from engine.keys import KEY_COUNT

KeySym = tcod.event.KeySym

SYM_TO_VK: Dict[KeySym, int] = {
    KeySym.BACKSPACE: keys.VK_BACK,
    KeySym.TAB: keys.VK_TAB,
    KeySym.RETURN: keys.VK_RETURN,
    KeySym.KP_ENTER: keys.VK_RETURN,
    KeySym.LSHIFT: keys.VK_SHIFT,
    KeySym.RSHIFT: keys.VK_SHIFT,
    KeySym.LCTRL: keys.VK_CONTROL,
    KeySym.RCTRL: keys.VK_CONTROL,
    KeySym.LALT: keys.VK_MENU,
    KeySym.RALT: keys.VK_MENU,
    KeySym.PAUSE: keys.VK_PAUSE,
    KeySym.CAPSLOCK: keys.VK_CAPITAL,
    KeySym.ESCAPE: keys.VK_ESCAPE,
    KeySym.SPACE: keys.VK_SPACE,
    KeySym.PAGEUP: keys.VK_PRIOR,
    KeySym.PAGEDOWN: keys.VK_NEXT,
    KeySym.END: keys.VK_END,
    KeySym.HOME: keys.VK_HOME,
    KeySym.LEFT: keys.VK_LEFT,
    KeySym.UP: keys.VK_UP,
    KeySym.RIGHT: keys.VK_RIGHT,
    KeySym.DOWN: keys.VK_DOWN,
    KeySym.INSERT: keys.VK_INSERT,
    KeySym.DELETE: keys.VK_DELETE,
    KeySym.KP_MULTIPLY: keys.VK_MULTIPLY,
    KeySym.KP_PLUS: keys.VK_ADD,
    KeySym.KP_MINUS: keys.VK_SUBTRACT,
    KeySym.KP_PERIOD: keys.VK_DECIMAL,
    KeySym.KP_DIVIDE: keys.VK_DIVIDE,
}
for _n in range(10):
    SYM_TO_VK[getattr(KeySym, f"N{_n}")] = keys.vk_digit(_n)
    SYM_TO_VK[getattr(KeySym, f"KP_{_n}")] = keys.VK_NUMPAD0 + _n
for _letter in "ABCDEFGHIJKLMNOPQRSTUVWXYZ":
    SYM_TO_VK[getattr(KeySym, _letter)] = keys.vk_letter(_letter)
for _n in range(1, 13):
    SYM_TO_VK[getattr(KeySym, f"F{_n}")] = keys.vk_function(_n)


class KeyboardSampler(tcod.event.EventDispatch[None]):
    """
    Keeps the down/up state of every mapped key between frames.
    Keys without a virtual-key code are ignored. Closing the window ends the
    process, the engine has no other shutdown path.
    tcod 21 deprecates EventDispatch and warns when it dispatches; the
    handlers keep working and the test suite filters that warning.
    """

    def __init__(self):
        super().__init__()
        self.down = np.zeros(KEY_COUNT, dtype=bool)

    def sample(self) -> np.ndarray:
        return self.down.copy()

    def ev_keydown(self, event: tcod.event.KeyDown) -> Optional[None]:
        code = SYM_TO_VK.get(event.sym)
        if code is not None:
            self.down[code] = True

    def ev_keyup(self, event: tcod.event.KeyUp) -> Optional[None]:
        code = SYM_TO_VK.get(event.sym)
        if code is not None:
            self.down[code] = False

    def ev_windowfocuslost(self, event: tcod.event.WindowEvent) -> Optional[None]:
        # Key-up events never arrive for keys released while unfocused.
        self.down.fill(False)

    def ev_quit(self, event: tcod.event.Quit) -> Optional[None]:
        raise SystemExit(0)
