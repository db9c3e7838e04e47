# debug.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict

LOGGER_NAME = "ENIGMA"


class Debug:
    _root_configured: bool = False          # class-level guard
    _file_targets: set[str] = set()

    # switches shared by every Debug() instance
    _components: Dict[str, bool] = {
        "alphabet":     False,
        "permutation":  False,
        "rotor":        False,
        "stepping":     False,
        "plugboard":    False,
        "encipher":     False,
        "config":       False,
        "driver":       False,
    }
    _enabled: bool = True

    def __init__(self, *, log_to: str | Path | None = None) -> None:
        """
        If `log_to` is given, messages also stream to that file.
        Multiple Debug() instances share the same root logger config
        and the same component switches.
        """
        if not Debug._root_configured:
            logging.basicConfig(
                level=logging.DEBUG,
                format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
            Debug._root_configured = True

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(logging.DEBUG)   # the component map is the filter
        if log_to:
            self.log_to(log_to)

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str, *args: object) -> None:
        if Debug._enabled and Debug._components.get(component, False):
            self.logger.debug("[%s] " + message, component.upper(), *args)

    def active(self, component: str) -> bool:
        """True when tracing for *component* would actually be emitted."""
        return Debug._enabled and Debug._components.get(component, False)

    def log_to(self, path: str | Path) -> None:
        """Mirror every traced message into *path* as well."""
        target = str(Path(path).resolve())
        if target in Debug._file_targets:
            return
        handler = logging.FileHandler(target, encoding="utf-8")
        handler.setFormatter(logging.Formatter(
            "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        self.logger.addHandler(handler)
        Debug._file_targets.add(target)

    def close_log(self, path: str | Path) -> None:
        """Detach and close the file handler added by `log_to(path)`."""
        target = str(Path(path).resolve())
        if target not in Debug._file_targets:
            return
        for handler in list(self.logger.handlers):
            if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
                self.logger.removeHandler(handler)
                handler.close()
        Debug._file_targets.discard(target)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._components[c] = False

    def toggle(self, component: str) -> None:
        self._require(component)
        Debug._components[component] = not Debug._components[component]

    def toggle_global(self, state: bool) -> None:
        """Switch every component on/off at once."""
        Debug._enabled = state

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return Debug._components.copy()

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in Debug._components:
            raise ValueError(f"No such component: {component!r}")

    # nicety for `print(dbg)`
    def __repr__(self) -> str:
        active = [k for k, v in Debug._components.items() if v]
        return f"<Debug enabled={Debug._enabled} active={active}>"
