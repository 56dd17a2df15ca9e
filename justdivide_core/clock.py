from __future__ import annotations


class GameClock:
    """Elapsed-time counter advanced by an external once-per-second tick."""

    def __init__(self, elapsed_seconds: int = 0, running: bool = True):
        self.elapsed_seconds = elapsed_seconds
        self.running = running

    def tick(self) -> int:
        if self.running:
            self.elapsed_seconds += 1
        return self.elapsed_seconds

    def pause(self) -> None:
        self.running = False

    def resume(self) -> None:
        self.running = True

    def reset(self) -> None:
        self.elapsed_seconds = 0
        self.running = True


def format_elapsed(seconds: int) -> str:
    mins, secs = divmod(max(0, int(seconds)), 60)
    return f"{mins:02d}:{secs:02d}"
