import subprocess
import sys
from typing import Optional


class ManagedSubprocess:
    """Context manager for subprocess lifecycle with Ctrl+C and timeout handling.

    The child runs in the foreground process group and keeps the user's
    terminal, so Ctrl+C and Ctrl+Z reach it directly. On KeyboardInterrupt
    the child gets terminate_timeout seconds to exit on its own before it
    is terminated.
    """

    def __init__(
        self,
        process: subprocess.Popen,
        label: str,
        terminate_timeout: float = 5.0,
    ):
        self.process = process
        self.label = label
        self.terminate_timeout = terminate_timeout
        self.interrupted = False
        self.timed_out = False

    def __enter__(self) -> "ManagedSubprocess":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is KeyboardInterrupt:
            return self._handle_interrupt()
        return False

    def wait(self, timeout: Optional[float] = None) -> Optional[int]:
        """Wait for the process, terminating it if *timeout* seconds pass.

        Returns:
            The exit code, or None when the process was stopped for timing out.
        """
        try:
            return self.process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            print(
                f"\nTimed out after {timeout}s. Terminating {self.label} process...",
                file=sys.stderr,
            )
            self._stop()
            self.timed_out = True
            return None

    def _handle_interrupt(self) -> bool:
        print(
            f"\nInterrupted. Waiting for {self.label} process to exit...",
            file=sys.stderr,
        )
        try:
            self.process.wait(timeout=self.terminate_timeout)
        except subprocess.TimeoutExpired:
            print(f"Terminating {self.label} process...", file=sys.stderr)
            self._stop()
        print("Done.", file=sys.stderr)
        self.interrupted = True
        return True

    def _stop(self):
        self.process.terminate()
        try:
            self.process.wait(timeout=self.terminate_timeout)
        except subprocess.TimeoutExpired:
            print(
                f"Force-killing {self.label} process...",
                file=sys.stderr,
            )
            self.process.kill()
            self.process.wait()
