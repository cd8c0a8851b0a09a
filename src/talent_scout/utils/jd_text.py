"""Job description text clean-up shared by the UI and the CLI."""

import re
from pathlib import Path


def normalize_jd(text: str) -> str:
    """Collapse horizontal whitespace per line and runs of blank lines."""
    lines = [re.sub(r'[ \t]+', ' ', line).strip() for line in text.splitlines()]
    return re.sub(r'\n{3,}', '\n\n', '\n'.join(lines)).strip()


def load_jd_file(file_path: str | Path) -> str:
    """Load a job description from a UTF-8 text file."""
    return normalize_jd(Path(file_path).read_text(encoding="utf-8"))
