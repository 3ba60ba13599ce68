"""Non-blocking keyboard and window-focus input for the live garden."""

import os
import sys
import termios
import tty

# Terminals that support focus reporting send these once it is enabled.
FOCUS_IN = "\x1b[I"
FOCUS_OUT = "\x1b[O"
_ENABLE_FOCUS_REPORTING = "\x1b[?1004h"
_DISABLE_FOCUS_REPORTING = "\x1b[?1004l"

FOCUS_IN_EVENT = "focus-in"
FOCUS_OUT_EVENT = "focus-out"


def decode_input(buffer: str) -> list[str]:
    """Split raw terminal input into key and focus events.

    Plain characters become lowercase keys, focus reports become
    ``focus-in`` / ``focus-out``, and any other escape sequence is dropped.
    """
    events = []
    i = 0
    while i < len(buffer):
        if buffer.startswith(FOCUS_IN, i):
            events.append(FOCUS_IN_EVENT)
            i += len(FOCUS_IN)
        elif buffer.startswith(FOCUS_OUT, i):
            events.append(FOCUS_OUT_EVENT)
            i += len(FOCUS_OUT)
        elif buffer[i] == "\x1b":
            # Skip an unrecognised CSI sequence up to its final byte.
            j = i + 1
            if j < len(buffer) and buffer[j] == "[":
                j += 1
                while j < len(buffer) and not ("@" <= buffer[j] <= "~"):
                    j += 1
                j += 1
            i = j
        else:
            events.append(buffer[i].lower())
            i += 1
    return events


class KeyboardHandler:
    """Non-blocking keyboard input handler with focus reporting."""

    def __init__(self, focus_reporting: bool = True):
        self.fd = sys.stdin.fileno()
        self.old_settings = None
        self.focus_reporting = focus_reporting
        self._setup()

    def _setup(self):
        """Setup terminal for non-blocking input."""
        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except termios.error:
            # Not a terminal
            pass
        if self.focus_reporting:
            sys.stdout.write(_ENABLE_FOCUS_REPORTING)
            sys.stdout.flush()

    def get_events(self) -> list[str]:
        """Return every key and focus event waiting on stdin, without blocking."""
        import select

        chunks = []
        while select.select([sys.stdin], [], [], 0)[0]:
            chunk = os.read(self.fd, 64).decode("utf-8", errors="ignore")
            if not chunk:
                break
            chunks.append(chunk)
        return decode_input("".join(chunks))

    def stop(self):
        """Restore terminal settings."""
        if self.focus_reporting:
            sys.stdout.write(_DISABLE_FOCUS_REPORTING)
            sys.stdout.flush()
        if self.old_settings:
            try:
                termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            except termios.error:
                pass
