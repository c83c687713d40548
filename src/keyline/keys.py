"""Symbolic key events and key identifier matching.

Key events arrive already decoded from the terminal stream. A key event
carries either a printable ``character`` or a symbolic ``name`` plus a set
of modifiers. Bindings refer to keys with identifiers such as ``"ctrl+r"``
or ``"shift+enter"``; ``matches_key`` checks an event against one.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

KeyId = str

# ---------------------------------------------------------------------------
# Key helper object
# ---------------------------------------------------------------------------


class Key:
    """Named key constants and modifier combinators."""

    enter = "enter"
    tab = "tab"
    backspace = "backspace"
    delete = "delete"
    escape = "escape"
    home = "home"
    end = "end"
    up = "up"
    down = "down"
    left = "left"
    right = "right"
    space = "space"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def shift(key: str) -> str:
        return f"shift+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"


NAMED_KEYS: frozenset[str] = frozenset(
    {
        Key.enter,
        Key.tab,
        Key.backspace,
        Key.delete,
        Key.escape,
        Key.home,
        Key.end,
        Key.up,
        Key.down,
        Key.left,
        Key.right,
        Key.space,
    }
)

# Alternate spellings -> canonical key names
KEY_ALIASES: dict[str, str] = {
    "return": "enter",
    "esc": "escape",
    "arrowup": "up",
    "arrowdown": "down",
    "arrowleft": "left",
    "arrowright": "right",
    "uparrow": "up",
    "downarrow": "down",
    "leftarrow": "left",
    "rightarrow": "right",
    "del": "delete",
}

MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

# "meta" is the same modifier bit as "alt"
MODIFIER_ALIASES: dict[str, str] = {
    "meta": "alt",
    "option": "alt",
    "control": "ctrl",
}


def normalize_key_name(name: str) -> str:
    """Return the canonical spelling of a named key (``"ArrowUp"`` -> ``"up"``)."""
    lower = name.lower()
    return KEY_ALIASES.get(lower, lower)


# ---------------------------------------------------------------------------
# KeyEvent
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Modifiers:
    ctrl: bool = False
    shift: bool = False
    meta: bool = False

    @property
    def bits(self) -> int:
        return _modifier_bits(ctrl=self.ctrl, shift=self.shift, alt=self.meta)


@dataclass(frozen=True)
class KeyEvent:
    """A single decoded key press.

    ``character`` holds printable text (possibly several codepoints for
    paste-like input). ``name`` holds a symbolic key such as ``"enter"``.
    When both are set, ``name`` wins.
    """

    character: str | None = None
    modifiers: Modifiers = field(default_factory=Modifiers)
    name: str | None = None

    def __post_init__(self) -> None:
        if self.name is not None:
            object.__setattr__(self, "name", normalize_key_name(self.name))
        if self.character == "":
            object.__setattr__(self, "character", None)

    @property
    def ctrl(self) -> bool:
        return self.modifiers.ctrl

    @property
    def shift(self) -> bool:
        return self.modifiers.shift

    @property
    def meta(self) -> bool:
        return self.modifiers.meta

    @property
    def is_printable(self) -> bool:
        """True for character input that should be inserted as text."""
        if self.name is not None or self.character is None:
            return False
        if self.ctrl or self.meta:
            return False
        return any(ord(ch) >= 32 or ch in "\n\t" for ch in self.character)

    def base_key(self) -> str | None:
        """The key component used for binding lookup, or ``None``."""
        if self.name is not None:
            return self.name
        if self.character is None or len(self.character) != 1:
            return None
        if self.character == " ":
            return Key.space
        if self.ctrl or self.meta:
            return self.character.lower()
        return self.character

    def key_id(self) -> KeyId | None:
        """Canonical identifier such as ``"ctrl+shift+enter"``."""
        key = self.base_key()
        if key is None:
            return None
        parts: list[str] = []
        if self.ctrl:
            parts.append("ctrl")
        # Shift is implied by the character itself for printable keys
        if self.shift and (self.name is not None or self.ctrl or self.meta):
            parts.append("shift")
        if self.meta:
            parts.append("alt")
        parts.append(key)
        return "+".join(parts)

    # -- Constructors --------------------------------------------------------

    @classmethod
    def char(cls, text: str, *, ctrl: bool = False, shift: bool = False, meta: bool = False) -> KeyEvent:
        return cls(character=text, modifiers=Modifiers(ctrl=ctrl, shift=shift, meta=meta))

    @classmethod
    def named(cls, name: str, *, ctrl: bool = False, shift: bool = False, meta: bool = False) -> KeyEvent:
        return cls(name=name, modifiers=Modifiers(ctrl=ctrl, shift=shift, meta=meta))

    @classmethod
    def from_key_id(cls, key_id: KeyId) -> KeyEvent:
        """Build an event from an identifier, e.g. ``"ctrl+r"`` or ``"shift+enter"``.

        Raises ``ValueError`` for an empty identifier.
        """
        parsed = parse_key_id(key_id)
        if parsed is None:
            raise ValueError(f"Invalid key id: {key_id!r}")
        mods = Modifiers(
            ctrl=bool(parsed.modifiers & MODIFIERS["ctrl"]),
            shift=bool(parsed.modifiers & MODIFIERS["shift"]),
            meta=bool(parsed.modifiers & MODIFIERS["alt"]),
        )
        if parsed.key in NAMED_KEYS and parsed.key != Key.space:
            return cls(name=parsed.key, modifiers=mods)
        text = " " if parsed.key == Key.space else parsed.key
        return cls(character=text, modifiers=mods)


# ---------------------------------------------------------------------------
# Key id parsing and matching
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParsedKeyId:
    modifiers: int
    key: str


def _modifier_bits(ctrl: bool = False, shift: bool = False, alt: bool = False) -> int:
    bits = 0
    if shift:
        bits |= MODIFIERS["shift"]
    if alt:
        bits |= MODIFIERS["alt"]
    if ctrl:
        bits |= MODIFIERS["ctrl"]
    return bits


def parse_key_id(key_id: KeyId) -> ParsedKeyId | None:
    """Split a key identifier like ``"ctrl+shift+a"`` into its components.

    Returns ``None`` if the identifier has no base key. A bare ``"+"``
    names the plus key itself.
    """
    if not key_id:
        return None
    if key_id == "+":
        return ParsedKeyId(modifiers=0, key="+")

    parts = key_id.split("+")
    modifier = 0
    key_parts: list[str] = []

    for i, part in enumerate(parts):
        lower = MODIFIER_ALIASES.get(part.lower(), part.lower())
        if lower in MODIFIERS and i < len(parts) - 1:
            modifier |= MODIFIERS[lower]
        else:
            key_parts.append(part)

    key = "+".join(key_parts) if key_parts else ""
    if not key:
        return None

    if len(key) > 1:
        key = normalize_key_name(key)
    elif modifier & (MODIFIERS["ctrl"] | MODIFIERS["alt"]):
        key = key.lower()

    return ParsedKeyId(modifiers=modifier, key=key)


def matches_key(event: KeyEvent, key_id: KeyId) -> bool:
    """Return ``True`` if *event* is the key named by *key_id*.

    Modifiers must match exactly: ``"enter"`` does not match Shift+Enter.
    """
    parsed = parse_key_id(key_id)
    if parsed is None:
        return False
    key = event.base_key()
    if key is None:
        return False

    event_bits = event.modifiers.bits
    if event.name is None and not (event.ctrl or event.meta):
        # Printable characters already encode shift
        event_bits &= ~MODIFIERS["shift"]

    return key == parsed.key and event_bits == parsed.modifiers
