"""
Reloj del juego: todos los tiempos son segundos enteros desde el epoch (UTC)
"""

import time
from typing import Callable

Clock = Callable[[], int]


def system_clock() -> int:
    """Hora actual en segundos enteros"""
    return int(time.time())
