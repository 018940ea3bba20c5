# cyclewatch/cli/keys.py
# Keyboard input for live training: background key reader & key -> action mapping
#
# * The reader thread only enqueues keys; all machine mutation stays on the loop thread
# * The terminal stays in cbreak mode from construction until close()

from __future__ import annotations

import os
import queue
import select
import sys
import threading
import time
from typing import Callable, Protocol

import readchar
from readchar import key

from ..core.machine import CycleMachine
from ..core.types import Action

# keys that toggle pause/stop <-> resume
TOGGLE_KEYS = {" ", "p"}

KEY_ACTIONS: dict[str, Action] = {
    "s": Action.START,
    "\r": Action.END_ROUND,
    "\n": Action.END_ROUND,
    "n": Action.END_ROUND,
    "f": Action.FINISH,
    "q": Action.CANCEL,
    key.ESC: Action.CANCEL,
    key.CTRL_C: Action.CANCEL,
}


# * Source of pending keypresses, polled by the runner loop
class KeySource(Protocol):
    def poll(self) -> list[str]: ...

    def close(self) -> None: ...


# * Map a key to the action it requests given what the machine currently allows
def resolve_action(machine: CycleMachine, k: str) -> Action | None:
    if k in TOGGLE_KEYS:
        available = machine.actions()
        for action in (Action.PAUSE, Action.STOP, Action.RESUME):
            if action in available:
                return action
        if Action.START in available:
            return Action.START
        return None
    return KEY_ACTIONS.get(k.lower() if len(k) == 1 else k)


# * Put the terminal in cbreak mode for the whole run; returns what to restore (None if not a tty)
def _enter_cbreak() -> tuple[int, list] | None:
    if sys.platform == "win32":
        return None
    import termios
    import tty

    try:
        fd = sys.stdin.fileno()
        if not os.isatty(fd):
            return None
        saved = termios.tcgetattr(fd)
        tty.setcbreak(fd)
    except (OSError, ValueError, termios.error):
        return None
    return fd, saved


def _restore_mode(saved: tuple[int, list] | None) -> None:
    if saved is None:
        return
    import termios

    fd, attrs = saved
    termios.tcsetattr(fd, termios.TCSADRAIN, attrs)


# wait up to timeout seconds for a key to be readable on stdin
def _stdin_ready(timeout: float) -> bool:
    if sys.platform == "win32":
        import msvcrt

        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if msvcrt.kbhit():
                return True
            time.sleep(0.01)
        return False
    ready, _, _ = select.select([sys.stdin], [], [], timeout)
    return bool(ready)


# * Reads keys w/ readchar on a daemon thread & hands them over through a queue
# the thread only calls readkey() once input is waiting, so close() can stop it & restore the terminal
class ReadcharKeySource:
    def __init__(
        self,
        ready: Callable[[float], bool] | None = None,
        wait_interval: float = 0.1,
    ) -> None:
        self._ready = ready or _stdin_ready
        self._wait_interval = wait_interval
        self._queue: queue.Queue[str] = queue.Queue()
        self._closed = threading.Event()
        self._saved_mode = _enter_cbreak()
        self._thread = threading.Thread(
            target=self._read_loop, name="cyclewatch-keys", daemon=True
        )
        self._thread.start()

    @property
    def reading(self) -> bool:
        return self._thread.is_alive()

    def _read_loop(self) -> None:
        while not self._closed.is_set():
            if not self._ready(self._wait_interval):
                continue
            try:
                k = readchar.readkey()
            except KeyboardInterrupt:
                k = key.CTRL_C
            # empty read: stdin hit EOF
            if self._closed.is_set() or not k:
                break
            self._queue.put(k)

    def poll(self) -> list[str]:
        keys: list[str] = []
        while True:
            try:
                keys.append(self._queue.get_nowait())
            except queue.Empty:
                return keys

    # stop the reader, then hand the terminal back in its original mode
    def close(self) -> None:
        if self._closed.is_set():
            return
        self._closed.set()
        if self._thread is not threading.current_thread():
            self._thread.join(timeout=self._wait_interval * 5)
        _restore_mode(self._saved_mode)
        self._saved_mode = None

