import logging
from typing import Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

RGB = Tuple[float, float, float]
ThemeListener = Callable[[str], None]

PREFERENCES = ("light", "dark", "system")
RESOLVED_THEMES = ("light", "dark")


class ThemeSettings:
    """
    Colour-scheme preference handed to the report renderer by reference.

    ``preference`` is what the user chose (light, dark or "follow system");
    ``system`` is what the platform currently reports. Listeners registered
    with :meth:`subscribe` are told about the new resolved theme whenever
    either input change actually flips it.
    """

    def __init__(self, preference: str = "system", system: str = "light"):
        self._preference = self._check(preference, PREFERENCES)
        self._system = self._check(system, RESOLVED_THEMES)
        self._listeners: List[ThemeListener] = []

    @staticmethod
    def _check(value: str, allowed: Tuple[str, ...]) -> str:
        if value not in allowed:
            raise ValueError(f"Invalid theme value '{value}'. Expected one of {list(allowed)}")
        return value

    @property
    def preference(self) -> str:
        return self._preference

    @property
    def system(self) -> str:
        return self._system

    @property
    def resolved(self) -> str:
        return self._system if self._preference == "system" else self._preference

    def set_preference(self, preference: str) -> None:
        before = self.resolved
        self._preference = self._check(preference, PREFERENCES)
        self._notify_if_changed(before)

    def update_system_theme(self, system: str) -> None:
        """Called when the platform's colour-scheme setting changes."""
        before = self.resolved
        self._system = self._check(system, RESOLVED_THEMES)
        self._notify_if_changed(before)

    def subscribe(self, listener: ThemeListener) -> Callable[[], None]:
        """Registers ``listener``; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify_if_changed(self, before: str) -> None:
        after = self.resolved
        if after == before:
            return
        logger.debug(f"Theme changed from {before} to {after}")
        for listener in list(self._listeners):
            listener(after)

    @classmethod
    def from_request(cls, preference: Optional[str], client_hint: Optional[str], default: str = "light") -> "ThemeSettings":
        """
        Builds per-request settings from a ``theme`` query value and the
        ``Sec-CH-Prefers-Color-Scheme`` client hint. Unknown values fall back
        to ``default`` / light rather than failing the download.
        """
        pref = preference if preference in PREFERENCES else default
        system = client_hint.strip().strip('"').lower() if client_hint else "light"
        if system not in RESOLVED_THEMES:
            system = "light"
        return cls(preference=pref, system=system)


# Status colours are identical in both themes so printed reports stay comparable
STATUS_COLORS: Dict[str, RGB] = {
    "Critical": (0.91, 0.12, 0.12),
    "At Risk": (1.0, 0.75, 0.0),
    "Established": (0.0, 0.69, 0.31),
    "Leading": (0.0, 0.34, 1.0),
}

PALETTES: Dict[str, Dict[str, Optional[RGB]]] = {
    "light": {
        "page": None,  # Paper white, nothing drawn
        "text": (0.0, 0.0, 0.0),
        "muted": (0.4, 0.45, 0.55),
        "rule": (0.85, 0.9, 0.95),
        "brand": (0.0, 0.34, 1.0),
        "on_brand": (1.0, 1.0, 1.0),
    },
    "dark": {
        "page": (0.06, 0.09, 0.16),
        "text": (0.95, 0.96, 0.98),
        "muted": (0.6, 0.65, 0.72),
        "rule": (0.2, 0.25, 0.33),
        "brand": (0.0, 0.28, 0.82),
        "on_brand": (1.0, 1.0, 1.0),
    },
}


def palette_for(theme: str) -> Dict[str, Optional[RGB]]:
    return PALETTES[theme]
