"""Reading and writing the member data file."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from mycash.models import Member, format_amount

DATA_FILE_NAME = "myCashData.txt"


def default_data_path() -> Path:
    """Return the data file's location in the current working directory."""
    return Path.cwd() / DATA_FILE_NAME


def load_members(path: str | Path) -> list[Member]:
    """Read members from a whitespace-separated file.

    Records are read as groups of four tokens (mobile, name, amount, pin);
    reading stops at the first incomplete or malformed record. A missing
    file yields no members.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return []

    tokens = text.split()
    members: list[Member] = []
    for start in range(0, len(tokens) - 3, 4):
        mobile, name, amount_text, pin = tokens[start : start + 4]
        try:
            amount = float(amount_text)
        except ValueError:
            break
        members.append(Member(mobile, name, amount, pin))
    return members


def save_members(path: str | Path, members: Iterable[Member]) -> None:
    """Write members one per line as 'mobile name amount pin'."""
    lines = (
        f"{m.mobile} {m.name} {format_amount(m.amount)} {m.pin}\n" for m in members
    )
    Path(path).write_text("".join(lines), encoding="utf-8")