"""
Servicios del sistema que la sesión recibe inyectados.

Sonido, preferencia de tema del sistema y persistencia del tema viven
aquí para que ni el motor ni la sesión dependan de la plataforma. Un
fallo de estos servicios se registra y se ignora: nunca llega al motor.
"""

from __future__ import annotations

import json
import logging
import sys
import threading
from pathlib import Path
from typing import Protocol


log = logging.getLogger(__name__)


class TonePlayer(Protocol):
    def play(self, frequency: int, duration_ms: int) -> None: ...


class ThemeStore(Protocol):
    def load(self) -> bool | None: ...

    def save(self, dark: bool) -> None: ...


# ── Sonido ───────────────────────────────────────────────────────

class NullTonePlayer:
    """No emite nada."""

    def play(self, frequency: int, duration_ms: int) -> None:
        return None


class BellTonePlayer:
    """Usa la campana de tkinter; ignora frecuencia y duración."""

    def __init__(self, widget):
        self._widget = widget

    def play(self, frequency: int, duration_ms: int) -> None:
        try:
            self._widget.bell()
        except Exception as exc:
            log.debug("Campana no disponible: %s", exc)


class WinsoundTonePlayer:
    """Emite un tono con winsound.Beep en un hilo aparte (Beep bloquea)."""

    def play(self, frequency: int, duration_ms: int) -> None:
        thread = threading.Thread(
            target=self._beep, args=(frequency, duration_ms), daemon=True
        )
        thread.start()

    @staticmethod
    def _beep(frequency: int, duration_ms: int):
        try:
            import winsound

            winsound.Beep(frequency, duration_ms)
        except (ImportError, RuntimeError) as exc:
            log.debug("Sonido no disponible: %s", exc)


def default_tone_player(widget=None) -> TonePlayer:
    if sys.platform == "win32":
        return WinsoundTonePlayer()
    if widget is not None:
        return BellTonePlayer(widget)
    return NullTonePlayer()


# ── Tema ─────────────────────────────────────────────────────────

class JsonThemeStore:
    """Guarda el tema elegido como {"theme": "dark" | "light"}."""

    def __init__(self, path: Path | str):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> bool | None:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            log.warning("No se pudo leer %s: %s", self._path, exc)
            return None

        theme = data.get("theme") if isinstance(data, dict) else None
        if theme == "dark":
            return True
        if theme == "light":
            return False
        return None

    def save(self, dark: bool) -> None:
        payload = {"theme": "dark" if dark else "light"}
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload), encoding="utf-8")
        except OSError as exc:
            log.warning("No se pudo guardar el tema en %s: %s", self._path, exc)


def system_prefers_dark() -> bool:
    """Lee la preferencia de Windows; en otras plataformas devuelve False."""
    if sys.platform != "win32":
        return False

    try:
        import winreg

        key = winreg.OpenKey(
            winreg.HKEY_CURRENT_USER,
            r"Software\Microsoft\Windows\CurrentVersion\Themes\Personalize",
        )
        with key:
            value, _ = winreg.QueryValueEx(key, "AppsUseLightTheme")
    except (ImportError, OSError) as exc:
        log.debug("Preferencia de tema no disponible: %s", exc)
        return False
    return value == 0
