import subprocess
from typing import final

from clipstack.exceptions import ClipboardError

TROUBLESHOOT = """Troubleshooting:
  - Is wl-clipboard installed? (which wl-paste)
  - Are you in a Wayland session? (echo $WAYLAND_DISPLAY)
  - Is your compositor running?"""


@final
class Clipboard:
    """Thin wrapper over wl-copy / wl-paste."""

    copy_command: list[str]
    paste_command: list[str]

    def __init__(self, copy_command: str = "wl-copy", paste_command: str = "wl-paste") -> None:
        self.copy_command = [copy_command]
        self.paste_command = [paste_command, "--no-newline"]

    def copy(self, text: str) -> None:
        # stderr is inherited: wl-copy forks into the background and would hold a pipe open.
        try:
            proc = subprocess.run(
                self.copy_command,
                input=text.encode("utf-8"),
                stdout=subprocess.DEVNULL,
                check=False,
            )
        except FileNotFoundError:
            raise ClipboardError(f"Failed to run {self.copy_command[0]}.\n{TROUBLESHOOT}") from None

        if proc.returncode != 0:
            raise ClipboardError(f"{self.copy_command[0]} failed with status: {proc.returncode}")

    def paste(self) -> str:
        return self._paste_selection(primary=False)

    def paste_primary(self) -> str:
        """Reads the PRIMARY selection (mouse selection)."""
        return self._paste_selection(primary=True)

    def _paste_selection(self, primary: bool) -> str:
        command = [*self.paste_command, "--primary"] if primary else list(self.paste_command)
        try:
            proc = subprocess.run(command, capture_output=True, check=False)
        except FileNotFoundError:
            raise ClipboardError(f"Failed to run {command[0]}.\n{TROUBLESHOOT}") from None

        if proc.returncode != 0:
            stderr = proc.stderr.decode("utf-8", errors="replace")
            # Empty clipboard is not an error
            if "No selection" in stderr:
                return ""
            raise ClipboardError(f"{command[0]} failed: {stderr.strip()}")

        try:
            return proc.stdout.decode("utf-8")
        except UnicodeDecodeError:
            raise ClipboardError("Clipboard content is not valid UTF-8") from None
