# core/blocks.py
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from markupsafe import Markup

logger = logging.getLogger(__name__)

CUSTOM_BLOCK_NAME = "wp-book/custom-wp-block"
CUSTOM_BLOCK_DEFAULT_CONTENT = "This is a custom block!"

_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9-]*/[a-z][a-z0-9-]*$")
_BLOCK_PATTERN = re.compile(
    r"<!--\s+wp:(?P<name>[a-z][a-z0-9_-]*(?:/[a-z][a-z0-9_-]*)?)\s+"
    r"(?P<attrs>\{.*?\}\s+)?"
    r"(?:(?P<void>/-->)|-->(?P<inner>.*?)<!--\s+/wp:(?P=name)\s+-->)",
    re.DOTALL,
)


@dataclass(frozen=True)
class BlockAttribute:
    type: str
    default: Any = None


@dataclass(frozen=True)
class TextControl:
    label: str
    attribute: str


@dataclass(frozen=True)
class InspectorPanel:
    title: str
    controls: List[TextControl]


@dataclass
class EditorView:
    """What the editor shows for a block: sidebar panels plus a preview"""
    panels: List[InspectorPanel]
    attributes: Dict[str, Any]
    render: Callable[[Dict[str, Any]], str]

    @property
    def preview(self) -> str:
        return self.render(self.attributes)

    def set_attributes(self, **changes: Any) -> None:
        self.attributes.update(changes)


@dataclass
class BlockType:
    name: str
    title: str
    save: Callable[[Dict[str, Any]], str]
    edit: Optional[Callable[[Dict[str, Any]], EditorView]] = None
    description: str = ""
    icon: str = ""
    category: str = "common"
    attributes: Dict[str, BlockAttribute] = field(default_factory=dict)
    editor_script: Optional[str] = None

    def default_attributes(self) -> Dict[str, Any]:
        return {name: attr.default for name, attr in self.attributes.items() if attr.default is not None}

    def with_defaults(self, attributes: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        merged = self.default_attributes()
        merged.update(attributes or {})
        return merged


@dataclass
class ParsedBlock:
    name: Optional[str]
    attributes: Dict[str, Any]
    inner_html: str


class BlockTypeRegistry:
    def __init__(self):
        self._types: Dict[str, BlockType] = {}

    def register_block_type(self, block_type: BlockType) -> BlockType:
        if not _NAME_PATTERN.match(block_type.name):
            raise ValueError(f"Block names must be namespace/name in lowercase: {block_type.name}")
        if block_type.name in self._types:
            raise ValueError(f"Block type {block_type.name} is already registered")
        self._types[block_type.name] = block_type
        logger.debug("Registered block type %s", block_type.name)
        return block_type

    def get(self, name: str) -> Optional[BlockType]:
        return self._types.get(name)

    def is_registered(self, name: str) -> bool:
        return name in self._types

    def all(self) -> List[BlockType]:
        return list(self._types.values())


def _encode_attributes(attributes: Dict[str, Any]) -> str:
    """JSON that cannot terminate the surrounding HTML comment"""
    encoded = json.dumps(attributes, separators=(",", ":"))
    for raw, escaped in (("--", "\\u002d\\u002d"), ("<", "\\u003c"), (">", "\\u003e"), ("&", "\\u0026")):
        encoded = encoded.replace(raw, escaped)
    return encoded


def serialize_block(block_type: BlockType, attributes: Optional[Dict[str, Any]] = None) -> str:
    """Saved form of a block: comment delimiters around the save() markup.

    Attributes equal to their default are left out of the comment.
    """
    values = block_type.with_defaults(attributes)
    stored = {
        name: value for name, value in (attributes or {}).items()
        if name not in block_type.attributes or block_type.attributes[name].default != value
    }
    name = block_type.name
    if name.startswith("core/"):
        name = name[len("core/"):]
    opener = f"<!-- wp:{name} "
    if stored:
        opener += _encode_attributes(stored) + " "
    return f"{opener}-->{block_type.save(values)}<!-- /wp:{name} -->"


def parse_blocks(content: str) -> List[ParsedBlock]:
    """Split post content into blocks; text between blocks becomes freeform blocks"""
    blocks: List[ParsedBlock] = []
    position = 0
    for match in _BLOCK_PATTERN.finditer(content):
        if match.start() > position:
            blocks.append(ParsedBlock(None, {}, content[position:match.start()]))
        name = match.group("name")
        if "/" not in name:
            name = f"core/{name}"
        attrs = json.loads(match.group("attrs")) if match.group("attrs") else {}
        blocks.append(ParsedBlock(name, attrs, match.group("inner") or ""))
        position = match.end()
    if position < len(content):
        blocks.append(ParsedBlock(None, {}, content[position:]))
    return blocks


def render_blocks(content: str) -> str:
    """Markup for display: saved block HTML with the delimiters removed"""
    return "".join(block.inner_html for block in parse_blocks(content))


# The plugin's block

def save_custom_block(attributes: Dict[str, Any]) -> str:
    return str(Markup('<div class="custom-block"><p>{}</p></div>').format(attributes.get("content", "")))


def edit_custom_block(attributes: Dict[str, Any]) -> EditorView:
    return EditorView(
        panels=[InspectorPanel("Settings", [TextControl("Block Content", "content")])],
        attributes=dict(attributes),
        render=save_custom_block,
    )


def custom_block_type() -> BlockType:
    return BlockType(
        name=CUSTOM_BLOCK_NAME,
        title="Custom WP Block",
        description="Block to display a custom Call to Action",
        icon="format-image",
        category="layout",
        attributes={"content": BlockAttribute(type="string", default=CUSTOM_BLOCK_DEFAULT_CONTENT)},
        editor_script="custom-wp-block",
        edit=edit_custom_block,
        save=save_custom_block,
    )
