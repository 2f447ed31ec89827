# core/hooks.py
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Protocol, Tuple, Union

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10


class Hook:
    """Names of the events the plugin subscribes to"""
    PLUGINS_LOADED = "plugins_loaded"
    INIT = "init"
    ADD_META_BOXES = "add_meta_boxes"
    SAVE_POST = "save_post"
    ADMIN_MENU = "admin_menu"
    ADMIN_INIT = "admin_init"
    DASHBOARD_SETUP = "wp_dashboard_setup"
    ADMIN_ENQUEUE_SCRIPTS = "admin_enqueue_scripts"
    PUBLIC_ENQUEUE_SCRIPTS = "wp_enqueue_scripts"
    BLOCK_EDITOR_ASSETS = "enqueue_block_editor_assets"


# Typed handler interfaces, one per event kind

class LifecycleHandler(Protocol):
    def __call__(self) -> None: ...


class SavePostHandler(Protocol):
    def __call__(self, post_id: int, request: Any) -> None: ...


class EnqueueHandler(Protocol):
    def __call__(self, assets: Any) -> None: ...


class FilterHandler(Protocol):
    def __call__(self, value: Any, *args: Any) -> Any: ...


ActionHandler = Union[LifecycleHandler, SavePostHandler, EnqueueHandler]


@dataclass(frozen=True)
class Subscription:
    """A single (hook, callback, priority, accepted args) registration"""
    hook: str
    callback: Callable[..., Any]
    priority: int = DEFAULT_PRIORITY
    accepted_args: int = 1
    kind: str = "action"

    @property
    def callback_name(self) -> str:
        owner = getattr(self.callback, "__self__", None)
        name = getattr(self.callback, "__name__", repr(self.callback))
        if owner is not None:
            return f"{type(owner).__name__}.{name}"
        return name


class HookDispatcher(ABC):
    """Interface the host side implements to receive subscriptions"""

    @abstractmethod
    def add_action(self, hook: str, callback: ActionHandler,
                   priority: int = DEFAULT_PRIORITY, accepted_args: int = 1) -> None:
        raise NotImplementedError

    @abstractmethod
    def add_filter(self, hook: str, callback: FilterHandler,
                   priority: int = DEFAULT_PRIORITY, accepted_args: int = 1) -> None:
        raise NotImplementedError


class EventDispatcher(HookDispatcher):
    """In-process dispatcher.

    Callbacks run synchronously, ordered by priority and then by the order
    they were added. Each callback receives at most ``accepted_args``
    positional arguments.
    """

    def __init__(self):
        self._actions: Dict[str, List[Tuple[int, int, Subscription]]] = {}
        self._filters: Dict[str, List[Tuple[int, int, Subscription]]] = {}
        self._sequence = 0
        self.fired: List[str] = []

    def _add(self, table, subscription: Subscription) -> None:
        self._sequence += 1
        table.setdefault(subscription.hook, []).append(
            (subscription.priority, self._sequence, subscription)
        )
        table[subscription.hook].sort(key=lambda entry: (entry[0], entry[1]))
        logger.debug("Registered %s %s -> %s (priority %d)",
                     subscription.kind, subscription.hook,
                     subscription.callback_name, subscription.priority)

    def add_action(self, hook, callback, priority=DEFAULT_PRIORITY, accepted_args=1):
        self._add(self._actions, Subscription(hook, callback, priority, accepted_args, "action"))

    def add_filter(self, hook, callback, priority=DEFAULT_PRIORITY, accepted_args=1):
        self._add(self._filters, Subscription(hook, callback, priority, accepted_args, "filter"))

    def has_action(self, hook: str) -> bool:
        return bool(self._actions.get(hook))

    def do_action(self, hook: str, *args: Any) -> None:
        """Run every action subscribed to ``hook``"""
        self.fired.append(hook)
        for _, _, subscription in list(self._actions.get(hook, [])):
            subscription.callback(*args[:subscription.accepted_args])

    def apply_filters(self, hook: str, value: Any, *args: Any) -> Any:
        """Pass ``value`` through every filter subscribed to ``hook``"""
        for _, _, subscription in list(self._filters.get(hook, [])):
            extra = args[:max(subscription.accepted_args - 1, 0)]
            value = subscription.callback(value, *extra)
        return value


class HookLoader:
    """Collects the plugin's subscriptions and registers them in one go"""

    def __init__(self):
        self._actions: List[Subscription] = []
        self._filters: List[Subscription] = []

    def add_action(self, hook: str, callback: ActionHandler,
                   priority: int = DEFAULT_PRIORITY, accepted_args: int = 1) -> None:
        self._actions.append(Subscription(hook, callback, priority, accepted_args, "action"))

    def add_filter(self, hook: str, callback: FilterHandler,
                   priority: int = DEFAULT_PRIORITY, accepted_args: int = 1) -> None:
        self._filters.append(Subscription(hook, callback, priority, accepted_args, "filter"))

    @property
    def subscriptions(self) -> List[Subscription]:
        return [*self._filters, *self._actions]

    def run(self, dispatcher: HookDispatcher) -> None:
        """Register every collected subscription with the dispatcher"""
        for sub in self._filters:
            dispatcher.add_filter(sub.hook, sub.callback, sub.priority, sub.accepted_args)
        for sub in self._actions:
            dispatcher.add_action(sub.hook, sub.callback, sub.priority, sub.accepted_args)
