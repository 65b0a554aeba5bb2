"""
The display capabilities the core needs from the presentation layer.

The runner and the orchestrator only ever talk to these protocols, so they can
be driven by the Rich implementation in `slycer.cli.progress_manager` or by a
recording fake in tests.
"""

from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class DisplaySink(Protocol):
    """A live progress indicator with a position, a length and a message."""

    def set_position(self, position: int) -> None: ...

    def set_length(self, length: int) -> None: ...

    def set_message(self, message: str) -> None: ...

    def inc(self, delta: int = 1) -> None: ...

    def println(self, text: str, style: str | None = None) -> None:
        """Prints a line above the live indicator without corrupting it."""
        ...

    def finish_with_message(self, message: str) -> None: ...

    def finish_and_clear(self) -> None: ...


LogBank = Sequence[DisplaySink]


def refresh_log_bank(log_bank: LogBank, lines: Sequence[str]) -> None:
    """Shows `lines` oldest first in the bank's slots and blanks the rest."""
    for index, slot in enumerate(log_bank):
        slot.set_message(lines[index] if index < len(lines) else "")


def clear_all(*sinks: DisplaySink | LogBank) -> None:
    """Finishes and clears any mix of single sinks and log banks."""
    for item in sinks:
        if isinstance(item, DisplaySink):
            item.finish_and_clear()
        else:
            for slot in item:
                slot.finish_and_clear()
