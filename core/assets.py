# core/assets.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Asset:
    handle: str
    src: str
    deps: Tuple[str, ...] = ()
    version: Optional[str] = None
    media: str = "all"
    in_footer: bool = False

    @property
    def url(self) -> str:
        if self.version:
            return f"{self.src}?ver={self.version}"
        return self.src


@dataclass
class AssetRegistry:
    """Styles and scripts enqueued for one screen ("admin" or "public")"""
    context: str = "public"
    styles: Dict[str, Asset] = field(default_factory=dict)
    scripts: Dict[str, Asset] = field(default_factory=dict)

    def enqueue_style(self, handle: str, src: str, deps: Tuple[str, ...] = (),
                      version: Optional[str] = None, media: str = "all") -> None:
        self.styles.setdefault(handle, Asset(handle, src, tuple(deps), version, media=media))

    def enqueue_script(self, handle: str, src: str, deps: Tuple[str, ...] = (),
                       version: Optional[str] = None, in_footer: bool = False) -> None:
        self.scripts.setdefault(handle, Asset(handle, src, tuple(deps), version, in_footer=in_footer))

    def handles(self) -> List[str]:
        return [*self.styles, *self.scripts]
