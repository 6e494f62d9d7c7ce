import sys
import getpass
from pathlib import Path
from typing import List, Optional, TextIO


def get_user_input(prompt: str, secret: bool = False) -> str:
    """Read one line from the user. Secrets are read without echo."""
    if secret:
        return getpass.getpass(prompt).strip()
    try:
        return input(prompt).strip()
    except EOFError:
        return ""


def read_args_blob(stream: Optional[TextIO] = None) -> str:
    """
    Read pasted lines until an empty line or EOF. Browser consoles often wrap
    long argument lists over several lines, so the lines are joined back up.
    """
    stream = stream or sys.stdin
    lines: List[str] = []
    for line in stream:
        if not line.strip():
            if lines:
                break
            continue
        lines.append(line.strip())
    return " ".join(lines)


def read_args_file(path: str) -> str:
    with Path(path).open("r", encoding="utf-8") as f:
        return f.read().strip()


def confirm(prompt: str) -> bool:
    return get_user_input(prompt).lower() == "y"
