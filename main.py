"""Punto de entrada de la calculadora."""

import logging
import tkinter as tk
from pathlib import Path

from calculator_engine import CalculatorEngine
from calculator_ui import CalculatorApp
from platform_services import (
    JsonThemeStore,
    NullTonePlayer,
    default_tone_player,
    system_prefers_dark,
)
from session import CalculatorSession


WINDOW_GEOMETRY = "400x640"
WINDOW_MIN_SIZE = (360, 560)
SETTINGS_PATH = Path.home() / ".calculadora" / "settings.json"
HISTORY_LIMIT = 10
ENABLE_SOUND = True
LOG_LEVEL = logging.WARNING


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    root = tk.Tk()
    root.geometry(WINDOW_GEOMETRY)
    root.minsize(*WINDOW_MIN_SIZE)

    session = CalculatorSession(
        engine=CalculatorEngine(history_limit=HISTORY_LIMIT),
        tone_player=default_tone_player(root) if ENABLE_SOUND else NullTonePlayer(),
        theme_store=JsonThemeStore(SETTINGS_PATH),
        prefers_dark=system_prefers_dark,
    )
    CalculatorApp(root, session=session)
    root.mainloop()


if __name__ == "__main__":
    main()
