"""Record of a single renderer launch."""

from pydantic import BaseModel


class Attempt(BaseModel):
    """Outcome of one launcher attempt within a render call.

    Attributes:
        launcher: Name of the launcher that made the attempt
        command: Full command line that was (or would have been) executed
        returncode: Process exit status (None if the process never completed)
        stderr: Captured standard error text
        timed_out: Whether the attempt was killed at its deadline
    """

    launcher: str
    command: list[str]
    returncode: int | None = None
    stderr: str = ""
    timed_out: bool = False

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0
