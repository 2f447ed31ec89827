# core/rendering.py
from datetime import date
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.i18n import _

TEMPLATE_DIR = Path(__file__).parent / "templates"

env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(['html', 'xml']),
    trim_blocks=True,
    lstrip_blocks=True
)
env.globals['_'] = _
env.globals['current_year'] = lambda: date.today().year
env.filters['join_list'] = lambda x: ', '.join(x) if isinstance(x, list) else x


def render(template_name: str, **context: Any) -> str:
    return env.get_template(template_name).render(**context)
