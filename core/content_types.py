# core/content_types.py
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)


@dataclass
class PostType:
    name: str
    labels: Dict[str, str]
    public: bool = True
    has_archive: bool = False
    supports: Tuple[str, ...] = ("title", "editor")


@dataclass
class Taxonomy:
    name: str
    object_types: List[str]
    labels: Dict[str, str]
    hierarchical: bool = False
    public: bool = True


@dataclass
class MetaBox:
    id: str
    title: str
    callback: object
    screen: str
    context: str = "advanced"
    priority: str = "default"


@dataclass
class ContentTypeRegistry:
    """Post types, taxonomies and meta boxes known to the application"""
    post_types: Dict[str, PostType] = field(default_factory=dict)
    taxonomies: Dict[str, Taxonomy] = field(default_factory=dict)
    meta_boxes: Dict[str, MetaBox] = field(default_factory=dict)

    def __post_init__(self):
        # Built-in types every installation has
        self.register_post_type("post", {"name": "Posts", "singular_name": "Post"})
        self.register_taxonomy("category", "post", {"name": "Categories", "singular_name": "Category"},
                               hierarchical=True)
        self.register_taxonomy("post_tag", "post", {"name": "Tags", "singular_name": "Tag"})

    def register_post_type(self, name: str, labels: Dict[str, str], public: bool = True,
                           has_archive: bool = False,
                           supports: Tuple[str, ...] = ("title", "editor")) -> PostType:
        post_type = PostType(name, labels, public, has_archive, tuple(supports))
        self.post_types[name] = post_type
        logger.debug("Registered post type %s", name)
        return post_type

    def register_taxonomy(self, name: str, object_type: str, labels: Dict[str, str],
                          hierarchical: bool = False, public: bool = True) -> Taxonomy:
        if object_type not in self.post_types:
            raise ValueError(f"Unknown post type: {object_type}")
        taxonomy = self.taxonomies.get(name)
        if taxonomy is None:
            taxonomy = Taxonomy(name, [object_type], labels, hierarchical, public)
            self.taxonomies[name] = taxonomy
        elif object_type not in taxonomy.object_types:
            taxonomy.object_types.append(object_type)
        logger.debug("Registered taxonomy %s for %s", name, object_type)
        return taxonomy

    def add_meta_box(self, id: str, title: str, callback, screen: str,
                     context: str = "advanced", priority: str = "default") -> MetaBox:
        if screen not in self.post_types:
            raise ValueError(f"Unknown post type: {screen}")
        meta_box = MetaBox(id, title, callback, screen, context, priority)
        self.meta_boxes[id] = meta_box
        return meta_box

    def meta_boxes_for(self, screen: str) -> List[MetaBox]:
        return [box for box in self.meta_boxes.values() if box.screen == screen]

    def taxonomies_for(self, post_type: str) -> List[Taxonomy]:
        return [tax for tax in self.taxonomies.values() if post_type in tax.object_types]
