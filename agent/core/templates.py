from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

from agent.core.errors import TemplateError
from config.settings import get_settings


TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

TEMPLATE_IDS = (
    "system_prompt",
    "greeting",
    "objectives",
    "methodology",
    "budget",
    "literature",
    "impact",
    "ethics",
    "team",
    "writing",
    "timeline",
    "default",
)


def load_templates(directory: Optional[Union[str, Path]] = None) -> Mapping[str, str]:
    """Read every template file into a read-only mapping keyed by template id.

    Each file holds one markdown block; the single trailing newline left by
    the editor is not part of the text.
    """
    base = Path(directory) if directory else TEMPLATES_DIR
    table = {}
    for template_id in TEMPLATE_IDS:
        path = base / f"{template_id}.md"
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise TemplateError(f"Missing template '{template_id}' at {path}") from exc
        if text.endswith("\n"):
            text = text[:-1]
        table[template_id] = text
    return MappingProxyType(table)


@lru_cache(maxsize=1)
def get_templates() -> Mapping[str, str]:
    return load_templates(get_settings().templates_dir)
