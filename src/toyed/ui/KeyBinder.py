# toyed/ui/KeyBinder.py
"""KeyBinder.py
========================
Terminal input for the toyed editor.

`KeyBinder` reads raw keys from curses and turns them into `InputEvent`
values. The controller only ever sees events; it never sees a key code.

- ``quit`` and ``save_file`` are configurable in the ``[keybindings]``
  section of ``config.toml`` (``"ctrl+q"``, ``["ctrl+q", 17]`` or
  ``"ctrl+q|f10"`` are all accepted).
- Arrows, Backspace, Enter and terminal resize are fixed.
- ESC-prefixed CSI/SS3 arrow sequences are decoded for terminals that do not
  report arrows as curses key codes; a lone ESC is ignored.

Every raw key read is traced to the ``toyed.keyevents`` logger, which writes
only when ``TOYED_KEYTRACE`` is set.
"""

import curses
import logging
from typing import TYPE_CHECKING, Optional

from wcwidth import wcwidth

from toyed.core.Events import EventKind, InputEvent
from toyed.utils.logging_config import KEY_LOGGER

if TYPE_CHECKING:
    from toyed.core.Editor import Editor


ESC = 27
ESC_CHAR = chr(ESC)
FIRST_PRINTABLE = 32
LAST_PRINTABLE = 126


# ==================== KeyBinder Class ====================
class KeyBinder:
    """Class KeyBinder
    ====================
    Maps raw terminal keys onto editor events.

    Attributes:
        editor (Editor): Owning editor (for `config` and `stdscr`).
        keybindings (dict[str, list[int]]): Action name -> key codes, after
            configuration has been applied.
        action_map (dict[int, EventKind]): Key code -> event kind.
    """

    # Keys do NOT include the leading ESC; get_key_input() reads after it.
    ESCAPE_SEQUENCE_MAP: dict[str, str] = {
        "[A": "up", "[B": "down", "[C": "right", "[D": "left",
        "OA": "up", "OB": "down", "OC": "right", "OD": "left",
    }

    CONFIGURABLE_ACTIONS: dict[str, EventKind] = {
        "quit": EventKind.QUIT,
        "save_file": EventKind.SAVE,
    }

    def __init__(self, editor: "Editor"):
        logging.debug("KeyBinder initialized with editor: %s", editor)
        self.editor = editor
        self.config = editor.config
        self.stdscr = editor.stdscr

        self.keybindings = self._load_keybindings()
        self.action_map = self._setup_action_map()

    def _load_keybindings(self) -> dict[str, list[int]]:
        """Resolves the configurable bindings to key codes.

        Unparseable entries are logged and skipped; an action whose entries
        all fail falls back to its default.
        """
        default_keybindings: dict[str, list[int | str]] = {
            "quit": ["ctrl+q", 17],
            "save_file": ["ctrl+s", 19],
        }

        user_keybindings_config: dict[str, object] = self.config.get("keybindings", {})
        parsed_keybindings: dict[str, list[int]] = {}

        for action, default_value_spec in default_keybindings.items():
            key_value_spec: object = user_keybindings_config.get(action, default_value_spec)

            specs_to_process: list[int | str]
            if isinstance(key_value_spec, list):
                specs_to_process = key_value_spec
            elif isinstance(key_value_spec, str) and "|" in key_value_spec:
                specs_to_process = [s.strip() for s in key_value_spec.split("|")]
            elif isinstance(key_value_spec, (int, str)) and key_value_spec != "":
                specs_to_process = [key_value_spec]
            else:
                logging.warning("Keybinding for %r is empty or invalid (%r); using default.", action, key_value_spec)
                specs_to_process = default_value_spec

            key_codes = self._decode_specs(action, specs_to_process)
            if not key_codes:
                logging.warning("No valid key codes for %r; falling back to defaults.", action)
                key_codes = self._decode_specs(action, default_value_spec)

            parsed_keybindings[action] = key_codes

        logging.debug("Loaded keybindings (action -> key codes): %s", parsed_keybindings)
        return parsed_keybindings

    def _decode_specs(self, action: str, specs: list[int | str]) -> list[int]:
        """Decodes *specs* in order, dropping duplicates and unparseable items."""
        key_codes: list[int] = []
        for key_spec_item in specs:
            try:
                key_code = self._decode_keystring(key_spec_item)
            except ValueError as e:
                logging.error(
                    "Error parsing keybinding item %r for action %r: %s. It will be ignored.",
                    key_spec_item, action, e,
                )
                continue
            if key_code not in key_codes:
                key_codes.append(key_code)
        return key_codes

    def _decode_keystring(self, key_input: str | int) -> int:
        """Decodes a key specification into a curses key code.

        Args:
            key_input (str | int): A code, a named key (``"up"``, ``"f2"``) or a
                ``ctrl+<letter>`` chord.

        Raises:
            ValueError: If the specification cannot be resolved.
        """
        if isinstance(key_input, bool) or not isinstance(key_input, (int, str)):
            raise ValueError(f"Invalid key_input type: {type(key_input)}. Expected str or int.")
        if isinstance(key_input, int):
            return key_input

        s = key_input.strip().lower()
        if not s:
            raise ValueError("Key string cannot be empty.")

        named_keys_map: dict[str, int] = {
            "left": curses.KEY_LEFT,
            "right": curses.KEY_RIGHT,
            "up": curses.KEY_UP,
            "down": curses.KEY_DOWN,
            "home": curses.KEY_HOME,
            "end": getattr(curses, "KEY_END", curses.KEY_LL),
            "delete": curses.KEY_DC,
            "backspace": curses.KEY_BACKSPACE,
            "enter": curses.KEY_ENTER,
            "tab": 9,
            "space": ord(" "),
            "esc": ESC,
            "escape": ESC,
        }
        named_keys_map.update({f"f{i}": getattr(curses, f"KEY_F{i}", 264 + i) for i in range(1, 13)})

        if s in named_keys_map:
            return named_keys_map[s]

        parts = [p.strip() for p in (s.replace("-", "+") if len(s) > 1 else s).split("+")]
        base_key_str = parts[-1]
        modifiers = set(parts[:-1])

        if modifiers == {"ctrl"} and len(base_key_str) == 1 and "a" <= base_key_str <= "z":
            return ord(base_key_str) - ord("a") + 1
        if not modifiers and len(base_key_str) == 1:
            return ord(base_key_str)

        raise ValueError(f"Unknown key specification '{key_input}'")

    def _setup_action_map(self) -> dict[int, EventKind]:
        action_map: dict[int, EventKind] = {
            curses.KEY_UP: EventKind.UP,
            curses.KEY_DOWN: EventKind.DOWN,
            curses.KEY_LEFT: EventKind.LEFT,
            curses.KEY_RIGHT: EventKind.RIGHT,
            curses.KEY_BACKSPACE: EventKind.BACKSPACE,
            8: EventKind.BACKSPACE,
            127: EventKind.BACKSPACE,
            curses.KEY_ENTER: EventKind.LINE_BREAK,
            10: EventKind.LINE_BREAK,
            13: EventKind.LINE_BREAK,
            curses.KEY_RESIZE: EventKind.RESIZE,
        }
        for action, kind in self.CONFIGURABLE_ACTIONS.items():
            for code in self.keybindings.get(action, []):
                if code in action_map and action_map[code] is not kind:
                    logging.warning(
                        "Keybinding %r for %r overrides built-in %s.", code, action, action_map[code].name
                    )
                action_map[code] = kind
        return action_map

    def translate(self, key: int | str) -> InputEvent:
        """Turns one raw key into an event.

        `get_wch` yields a ``str`` for characters (control characters
        included) and an ``int`` for function keys.
        """
        if isinstance(key, str):
            if len(key) == 1 and ord(key) in self.action_map:
                return InputEvent(self.action_map[ord(key)])
            if len(key) == 1 and wcwidth(key) == 1:
                return InputEvent.printable(key)
            return InputEvent(EventKind.OTHER)

        if key in self.action_map:
            return InputEvent(self.action_map[key])
        if FIRST_PRINTABLE <= key <= LAST_PRINTABLE:
            return InputEvent.printable(chr(key))
        return InputEvent(EventKind.OTHER)

    def get_key_input(self, window: Optional[curses.window] = None) -> int | str:
        """Read one key with `get_wch`, decoding ESC-prefixed arrow sequences.

        Returns:
            int | str: A decoded character, a curses key code, ESC (27) for a
            lone or unknown ESC sequence, or ``curses.ERR`` on a curses error.
        """
        target = window or self.stdscr
        try:
            ch = target.get_wch()
            if ch not in (ESC, ESC_CHAR):
                return ch

            seq = ""
            target.nodelay(True)
            try:
                while True:
                    try:
                        nx = target.get_wch()
                    except curses.error:
                        break
                    if isinstance(nx, str):
                        seq += nx
            finally:
                target.nodelay(False)

            if not seq:
                logging.debug("get_key_input: standalone ESC")
                return ESC

            mapped = self.ESCAPE_SEQUENCE_MAP.get(seq)
            if mapped:
                code = self._decode_keystring(mapped)
                logging.debug("get_key_input: ESC %r -> %r -> code %r", seq, mapped, code)
                return code

            logging.warning("get_key_input: unknown escape sequence: ESC + %r", seq)
            return ESC

        except curses.error:
            return curses.ERR

    def read_event(self) -> InputEvent:
        """Block for the next key and return its event."""
        key = self.get_key_input()
        event = self.translate(key)
        KEY_LOGGER.debug("key=%r -> %s %r", key, event.kind.name, event.char)
        return event

    def lookup(self, key_spec: str | int) -> Optional[str]:
        """Returns the action name bound to *key_spec*, or None."""
        try:
            decoded_key = self._decode_keystring(key_spec)
        except ValueError:
            return None

        for action_name, key_list in self.keybindings.items():
            if decoded_key in key_list:
                return action_name
        return None
