# core/sa/repositories/settings.py
import json
from typing import Any
from sqlalchemy.orm import Session

from core.repositories.base import SettingsStore
from ..models import Option


class SQLSettingsStore(SettingsStore):
    """SettingsStore backed by the options table. Values are stored as JSON."""

    def __init__(self, session: Session):
        self.session = session

    def _get(self, name: str) -> Option | None:
        return self.session.query(Option).filter(Option.name == name).first()

    def get_option(self, name: str, default: Any = None) -> Any:
        option = self._get(name)
        if option is None:
            return default
        return json.loads(option.value)

    def update_option(self, name: str, value: Any) -> None:
        option = self._get(name)
        if option is None:
            self.session.add(Option(name=name, value=json.dumps(value)))
        else:
            option.value = json.dumps(value)
        self.session.flush()

    def delete_option(self, name: str) -> bool:
        option = self._get(name)
        if option is None:
            return False
        self.session.delete(option)
        self.session.flush()
        return True

    def has_option(self, name: str) -> bool:
        return self._get(name) is not None
