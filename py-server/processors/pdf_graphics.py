import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from pikepdf import Array, Dictionary, Name, Operator, Pdf, Stream, unparse_content_stream

from constants.pdf_keys import (
    KEY_BBOX, KEY_COLOR_SPACE, KEY_RESOURCES, KEY_SUBTYPE, KEY_TYPE,
    VAL_FORM, VAL_PATTERN, VAL_XOBJECT,
)
from constants.pdf_operators import (
    DEVICE_COLOR_OPS, OP_CLIP, OP_CLOSE_PATH, OP_CTM, OP_DO_XOBJECT, OP_END_PATH,
    OP_FILL, OP_LINE_TO, OP_MOVE_TO, OP_RECTANGLE, OP_RESTORE_STATE, OP_SAVE_STATE,
    OP_SET_COLOR_FILL_N, OP_SET_COLOR_SPACE_FILL, OP_SET_COLOR_SPACE_STROKE,
    OP_SET_COLOR_STROKE_N, OP_SET_GRAPHICS_STATE_PARAMS, OP_SHADING,
)
from models.paint_types import Rect
from utils.pdf_transforms import AffineTransform

logger = logging.getLogger(__name__)

Instruction = Tuple[List[Any], bytes]


def _same_object(a, b) -> bool:
    if a is b:
        return True
    try:
        return a.is_indirect and b.is_indirect and a.objgen == b.objgen
    except AttributeError:
        return False


@dataclass(frozen=True)
class DocumentColor:
    """A color expressed in a PDF color space.

    For pattern colors ``color_space`` is ``/Pattern`` and ``pattern_name``
    names the pattern resource.
    """
    components: Tuple[float, ...]
    color_space: Any  # Name for device spaces, Array for ICC/Lab/etc.
    pattern_name: Optional[Name] = None

    @classmethod
    def pattern(cls, pattern_name: Name) -> 'DocumentColor':
        return cls(components=(), color_space=Name(VAL_PATTERN), pattern_name=pattern_name)

    @property
    def is_pattern(self) -> bool:
        return self.pattern_name is not None


class ResourcePool:
    """Named resources of one page, form or pattern.

    Wraps a /Resources dictionary and hands out names per category
    (``/Pattern`` -> P1, P2 ...). Registering the same object twice returns
    the same name.
    """

    PREFIXES = {
        '/Pattern': 'P',
        '/ExtGState': 'GS',
        '/XObject': 'X',
        '/Shading': 'Sh',
        '/ColorSpace': 'CS',
    }

    def __init__(self, resources: Optional[Dictionary] = None):
        self.resources = resources if resources is not None else Dictionary()
        self._registered: List[Tuple[str, Any, Name]] = []

    def add(self, category: str, obj, prefix: Optional[str] = None) -> Name:
        """Register ``obj`` under ``category`` and return its resource name."""
        for registered_category, registered_obj, name in self._registered:
            if registered_category == category and _same_object(registered_obj, obj):
                return name

        if category not in self.resources:
            self.resources[category] = Dictionary()
        category_dict = self.resources[category]

        prefix = prefix or self.PREFIXES.get(category, 'R')
        index = 1
        while f"/{prefix}{index}" in category_dict:
            index += 1
        name = Name(f"/{prefix}{index}")
        category_dict[name] = obj

        self._registered.append((category, obj, name))
        logger.debug(f"Registered {category} resource {name}")
        return name

    def names(self, category: str) -> List[str]:
        if category not in self.resources:
            return []
        return sorted(self.resources[category].keys())

    def __len__(self) -> int:
        return len(self._registered)


class ContentStreamWriter:
    """Accumulates content stream instructions as ``(operands, operator)`` tuples."""

    def __init__(self, resources: Optional[ResourcePool] = None):
        self.resources = resources if resources is not None else ResourcePool()
        self.instructions: List[Instruction] = []

    def append(self, operands: Sequence[Any], operator: bytes) -> None:
        self.instructions.append((list(operands), operator))

    def save_state(self):
        self.append([], OP_SAVE_STATE)

    def restore_state(self):
        self.append([], OP_RESTORE_STATE)

    def transform(self, transform: AffineTransform) -> None:
        self.append(transform.to_ctm(), OP_CTM)

    def add_rect(self, x: float, y: float, width: float, height: float) -> None:
        self.append([x, y, width, height], OP_RECTANGLE)

    def add_polygon(self, points: Sequence[Tuple[float, float]]) -> None:
        """Append a closed subpath through ``points``."""
        first, *rest = points
        self.append(list(first), OP_MOVE_TO)
        for point in rest:
            self.append(list(point), OP_LINE_TO)
        self.append([], OP_CLOSE_PATH)

    def fill(self) -> None:
        self.append([], OP_FILL)

    def clip(self) -> None:
        """Intersect the clip with the current path and end the path."""
        self.append([], OP_CLIP)
        self.append([], OP_END_PATH)

    def clip_after(self, index: int) -> None:
        """Insert a clip of the path built by instruction ``index`` right after it."""
        self.instructions[index + 1:index + 1] = [([], OP_CLIP), ([], OP_END_PATH)]

    def truncate(self, length: int) -> None:
        del self.instructions[length:]

    def shading_fill(self, name: Name) -> None:
        self.append([name], OP_SHADING)

    def set_graphics_state(self, name: Name) -> None:
        self.append([name], OP_SET_GRAPHICS_STATE_PARAMS)

    def draw_xobject(self, name: Name) -> None:
        self.append([name], OP_DO_XOBJECT)

    def draw_image(self, name: Name, x: float, y: float, width: float, height: float) -> None:
        """Paint an image XObject scaled into the given rectangle."""
        self.save_state()
        self.append([width, 0, 0, height, x, y], OP_CTM)
        self.draw_xobject(name)
        self.restore_state()

    def set_stroking_color(self, color: DocumentColor) -> None:
        self._set_color(color, stroking=True)

    def set_non_stroking_color(self, color: DocumentColor) -> None:
        self._set_color(color, stroking=False)

    def _set_color(self, color: DocumentColor, stroking: bool) -> None:
        components = [float(c) for c in color.components]
        space = color.color_space

        if color.is_pattern:
            op_space = OP_SET_COLOR_SPACE_STROKE if stroking else OP_SET_COLOR_SPACE_FILL
            op_color = OP_SET_COLOR_STROKE_N if stroking else OP_SET_COLOR_FILL_N
            self.append([Name(VAL_PATTERN)], op_space)
            self.append(components + [color.pattern_name], op_color)
            return

        if isinstance(space, Name) and str(space) in DEVICE_COLOR_OPS:
            stroke_op, fill_op = DEVICE_COLOR_OPS[str(space)]
            self.append(components, stroke_op if stroking else fill_op)
            return

        # ICC-based and other parameterised spaces need a named resource
        space_name = self.resources.add(KEY_COLOR_SPACE, space)
        self.append([space_name], OP_SET_COLOR_SPACE_STROKE if stroking else OP_SET_COLOR_SPACE_FILL)
        self.append(components, OP_SET_COLOR_STROKE_N if stroking else OP_SET_COLOR_FILL_N)

    def operators(self) -> List[bytes]:
        return [operator for _, operator in self.instructions]

    def to_bytes(self) -> bytes:
        return unparse_content_stream(
            [(operands, Operator(operator.decode('ascii'))) for operands, operator in self.instructions]
        )

    def __len__(self) -> int:
        return len(self.instructions)


class RenderTarget:
    """Nested drawing surface scoped to a bounding box.

    Used for tile content: a sub-renderer draws into ``writer`` and
    ``resources``, and ``to_form_xobject`` wraps the result as a Form XObject.
    """

    def __init__(self, document: Pdf, bbox: Rect):
        self.document = document
        self.bbox = bbox
        self.resources = ResourcePool()
        self.writer = ContentStreamWriter(self.resources)

    def to_form_xobject(self) -> Stream:
        form = self.document.make_stream(self.writer.to_bytes())
        form[KEY_TYPE] = Name(VAL_XOBJECT)
        form[KEY_SUBTYPE] = Name(VAL_FORM)
        form[KEY_BBOX] = Array(list(self.bbox.to_bbox()))
        form[KEY_RESOURCES] = self.resources.resources
        return form
