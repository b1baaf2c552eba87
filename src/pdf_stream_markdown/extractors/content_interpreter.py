"""
Page content-stream interpreter.

Executes a decoded operator list against a graphics state stack and produces
text runs and line segments in stream order. Every operator is executed in
isolation: a failure becomes an ``OperatorError`` in the diagnostics list and
interpretation carries on with the next operator.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Sequence, Tuple

from pypdf.errors import PyPdfError
from pypdf.generic import (
    ArrayObject,
    ByteStringObject,
    ContentStream,
    DictionaryObject,
    IndirectObject,
    NameObject,
    StreamObject,
    TextStringObject,
)

from .base import BaseExtractor
from .fonts import FontTable, decode_text, load_font_table, resolve_object
from .graphics_state import GraphicsState, Matrix
from ..errors import OperatorError
from ..models import LineSegment, TextRun, Unit

logger = logging.getLogger(__name__)

Operation = Tuple[List[Any], bytes]


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Convert 0..1 color components to ``#RRGGBB``."""
    return "#%02X%02X%02X" % tuple(
        max(0, min(255, round(component * 255))) for component in (r, g, b)
    )


@dataclass
class InterpretationResult:
    """
    Output of interpreting one page.

    Attributes:
        units: Text runs and line segments in execution order
        diagnostics: Recoverable operator failures
    """
    units: List[Unit] = field(default_factory=list)
    diagnostics: List[OperatorError] = field(default_factory=list)

    @property
    def text_runs(self) -> List[TextRun]:
        return [unit for unit in self.units if isinstance(unit, TextRun)]

    @property
    def segments(self) -> List[LineSegment]:
        return [unit for unit in self.units if isinstance(unit, LineSegment)]


@dataclass
class _Frame:
    """Lookup scope of the stream being executed (page or form XObject)."""
    fonts: FontTable
    resources: Optional[DictionaryObject]
    depth: int = 0
    active_forms: FrozenSet[Any] = frozenset()
    # Saved states below this index belong to the enclosing stream
    stack_base: int = 0


@dataclass
class _RunState:
    """Mutable interpreter state shared by a page and the forms it draws."""
    page_index: int
    pdf: Any = None
    state: GraphicsState = field(default_factory=GraphicsState)
    stack: List[GraphicsState] = field(default_factory=list)
    font_alias: Optional[str] = None
    font_name: Optional[str] = None
    font_size: Optional[float] = None
    pending_color: Optional[str] = None
    units: List[Unit] = field(default_factory=list)
    diagnostics: List[OperatorError] = field(default_factory=list)


class _OperandError(ValueError):
    """Operands of an operator are missing or of the wrong type."""


def _numbers(operands: Sequence[Any], count: int) -> List[float]:
    if len(operands) < count:
        raise _OperandError(f"expected {count} operands, got {len(operands)}")
    try:
        return [float(operand) for operand in operands[:count]]
    except (TypeError, ValueError) as exc:
        raise _OperandError(f"non-numeric operand in {list(operands[:count])!r}") from exc


def _name(operands: Sequence[Any], index: int = 0) -> str:
    if len(operands) <= index or not isinstance(operands[index], NameObject):
        raise _OperandError(f"expected a name operand at position {index}")
    return str(operands[index])


def _string_bytes(operand: Any) -> bytes:
    """Raw bytes of string operands; arrays are flattened, numbers ignored."""
    if isinstance(operand, TextStringObject):
        return operand.get_original_bytes()
    if isinstance(operand, (ByteStringObject, bytes)):
        return bytes(operand)
    if isinstance(operand, ArrayObject):
        return b"".join(_string_bytes(item) for item in operand)
    return b""


class ContentStreamInterpreter(BaseExtractor):
    """
    Interprets page content streams into text runs and line segments.

    Args:
        max_xobject_depth: Maximum nesting of form XObjects
        concat_cm: Concatenate ``cm`` onto the CTM instead of replacing it
    """

    def __init__(self, max_xobject_depth: int = 32, concat_cm: bool = False):
        self.max_xobject_depth = max_xobject_depth
        self.concat_cm = concat_cm

        self._handlers: Dict[bytes, Callable[[_RunState, _Frame, List[Any]], None]] = {
            b"BT": self._begin_text,
            b"ET": self._noop,
            b"q": self._save_state,
            b"Q": self._restore_state,
            b"cm": self._set_ctm,
            b"Tm": self._set_text_matrix,
            b"Td": self._move_text,
            b"TD": self._move_text_set_leading,
            b"TL": self._set_leading,
            b"T*": self._next_line,
            b"Tf": self._set_font,
            b"Tj": self._show_text,
            b"TJ": self._show_text,
            b"'": self._next_line_show_text,
            b'"': self._next_line_show_text,
            b"rg": self._set_fill_color,
            b"sc": self._set_fill_color,
            b"scn": self._set_fill_color,
            b"RG": self._set_stroke_color,
            b"SC": self._set_stroke_color,
            b"SCN": self._set_stroke_color,
            b"m": self._move_to,
            b"l": self._line_to,
            b"h": self._close_path,
            b"re": self._rectangle,
            b"c": self._curve_to,
            b"v": self._curve_to,
            b"y": self._curve_to,
            b"Do": self._draw_xobject,
            b"BDC": self._begin_marked_content,
        }

    def extract(self, page: Any) -> InterpretationResult:
        """
        Interpret a loaded page.

        Args:
            page: ``PageContent`` with operations, fonts, resources and reader

        Returns:
            InterpretationResult with units and diagnostics
        """
        return self.interpret(
            page.operations,
            fonts=page.fonts,
            resources=page.resources,
            page_index=page.index,
            pdf=page.pdf,
        )

    def interpret(
        self,
        operations: Sequence[Operation],
        fonts: Optional[FontTable] = None,
        resources: Optional[DictionaryObject] = None,
        page_index: int = 0,
        pdf: Any = None,
    ) -> InterpretationResult:
        """
        Interpret an operator list.

        Args:
            operations: ``(operands, operator)`` pairs as produced by pypdf's ContentStream
            fonts: Font table of the page
            resources: Resource dictionary used for XObject and property lookups
            page_index: 0-based page index, used in diagnostics
            pdf: Reader used to parse form XObject streams

        Returns:
            InterpretationResult with units and diagnostics
        """
        run = _RunState(page_index=page_index, pdf=pdf)
        frame = _Frame(fonts=dict(fonts or {}), resources=resolve_object(resources))
        self._execute(run, frame, operations)

        logger.debug(
            "Page %d: %d units, %d skipped operators",
            page_index + 1, len(run.units), len(run.diagnostics),
        )
        return InterpretationResult(units=run.units, diagnostics=run.diagnostics)

    def _execute(self, run: _RunState, frame: _Frame, operations: Sequence[Operation]) -> None:
        for operands, operator in operations:
            handler = self._handlers.get(operator)
            if handler is None:
                continue
            try:
                handler(run, frame, operands)
            except OperatorError as exc:
                self._record(run, exc)
            except (
                _OperandError, PyPdfError, NotImplementedError,
                KeyError, TypeError, ValueError, AttributeError, IndexError,
            ) as exc:
                op_name = operator.decode("latin-1")
                self._record(run, OperatorError(run.page_index, op_name, exc))

    @staticmethod
    def _record(run: _RunState, error: OperatorError) -> None:
        logger.debug("Skipping operator: %s", error)
        run.diagnostics.append(error)

    def _noop(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        pass

    # Graphics state

    def _save_state(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        run.stack.append(run.state)

    def _restore_state(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        if len(run.stack) > frame.stack_base:
            run.state = run.stack.pop()
        elif frame.depth == 0:
            run.state = GraphicsState()

    def _set_ctm(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        matrix = Matrix(*_numbers(operands, 6))
        if self.concat_cm:
            run.state = run.state.concat_ctm(matrix)
        else:
            run.state = run.state.set_ctm(matrix)

    # Text state and positioning

    def _begin_text(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        run.state = run.state.begin_text()

    def _set_text_matrix(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        run.state = run.state.set_text_matrix(Matrix(*_numbers(operands, 6)))

    def _move_text(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        run.state = run.state.move_text(*_numbers(operands, 2))

    def _move_text_set_leading(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        run.state = run.state.move_text_set_leading(*_numbers(operands, 2))

    def _set_leading(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        run.state = run.state.set_leading(_numbers(operands, 1)[0])

    def _next_line(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        run.state = run.state.next_line()

    def _set_font(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        alias = _name(operands, 0)
        size = _numbers(operands[1:], 1)[0]
        run.font_alias = alias
        run.font_size = size

        font = frame.fonts.get(alias)
        if font is None:
            raise OperatorError(run.page_index, "Tf", message=f"font {alias} not found in resources")
        run.font_name = font.base_font

    # Text showing

    def _show_text(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        raw = b"".join(_string_bytes(operand) for operand in operands)
        font = frame.fonts.get(run.font_alias) if run.font_alias else None
        text = decode_text(raw, font.encoding if font is not None else None)

        tm = run.state.tm
        x, y = run.state.text_position
        self._emit_text(run, TextRun(
            text=text,
            x=x,
            y=y,
            font_name=run.font_name,
            font_size=run.font_size * abs(tm.d) if run.font_size is not None else None,
            italic=tm.c != 0,
        ))

    def _next_line_show_text(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        run.state = run.state.next_line()
        self._show_text(run, frame, operands)

    @staticmethod
    def _emit_text(run: _RunState, text_run: TextRun) -> None:
        text_run.color = run.pending_color
        run.pending_color = None
        run.units.append(text_run)

    # Color

    def _set_fill_color(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        if len(operands) != 3:
            return
        r, g, b = _numbers(operands, 3)
        if r != 0 or g != 0 or b != 0:
            run.pending_color = rgb_to_hex(r, g, b)

    def _set_stroke_color(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        # A stroke color right after a run usually starts its underline
        if run.units and isinstance(run.units[-1], TextRun):
            run.units[-1].underlined = True

    # Path construction

    def _move_to(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        run.state = run.state.move_to(*_numbers(operands, 2))

    def _line_to(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        run.state, segment = run.state.line_to(*_numbers(operands, 2))
        run.units.append(segment)

    def _close_path(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        if run.state.current_point == run.state.subpath_start:
            return
        run.state, segment = run.state.close_path()
        run.units.append(segment)

    def _rectangle(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        run.state, edges = run.state.rectangle(*_numbers(operands, 4))
        run.units.extend(edges)

    def _curve_to(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        if len(operands) < 2:
            raise _OperandError("curve without end point")
        run.state = run.state.advance_to(*_numbers(operands[-2:], 2))

    # XObjects and marked content

    def _draw_xobject(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        name = _name(operands, 0)
        if "Im" in name:
            logger.debug("Skipping image XObject %s", name)
            return

        xobjects = resolve_object(frame.resources.get(NameObject("/XObject"))) if frame.resources else None
        if not isinstance(xobjects, DictionaryObject) or name not in xobjects:
            raise OperatorError(run.page_index, "Do", message=f"XObject {name} not found in resources")

        ref = xobjects.raw_get(name)
        xobject = resolve_object(ref)
        if not isinstance(xobject, StreamObject):
            raise OperatorError(run.page_index, "Do", message=f"XObject {name} is not a stream")

        subtype = xobject.get(NameObject("/Subtype"))
        if subtype == "/Image":
            logger.debug("Skipping image XObject %s", name)
            return
        if subtype is not None and subtype != "/Form":
            raise OperatorError(run.page_index, "Do", message=f"unsupported XObject subtype {subtype}")

        key = (ref.idnum, ref.generation) if isinstance(ref, IndirectObject) else id(xobject)
        if key in frame.active_forms:
            raise OperatorError(run.page_index, "Do", message=f"form {name} draws itself")
        if frame.depth >= self.max_xobject_depth:
            raise OperatorError(
                run.page_index, "Do",
                message=f"form {name} exceeds nesting depth {self.max_xobject_depth}",
            )

        operations = ContentStream(xobject, run.pdf).operations

        child_resources = resolve_object(xobject.get(NameObject("/Resources")))
        if not isinstance(child_resources, DictionaryObject):
            child_resources = frame.resources
        fonts = dict(frame.fonts)
        fonts.update(load_font_table(child_resources))
        # Forms run inside an implicit q/Q with their matrix applied; a Q in
        # the form never restores a state saved outside it
        saved = run.state
        base = len(run.stack)
        child = _Frame(
            fonts=fonts,
            resources=child_resources,
            depth=frame.depth + 1,
            active_forms=frame.active_forms | {key},
            stack_base=base,
        )

        form_matrix = xobject.get(NameObject("/Matrix"))
        if form_matrix is not None:
            run.state = run.state.concat_ctm(Matrix(*_numbers(form_matrix, 6)))
        try:
            self._execute(run, child, operations)
        finally:
            del run.stack[base:]
            run.state = saved

    def _begin_marked_content(self, run: _RunState, frame: _Frame, operands: List[Any]) -> None:
        if len(operands) < 2:
            raise _OperandError("BDC requires a tag and properties")

        properties = operands[1]
        if isinstance(properties, NameObject):
            named = resolve_object(frame.resources.get(NameObject("/Properties"))) if frame.resources else None
            properties = resolve_object(named.get(properties)) if isinstance(named, DictionaryObject) else None
        if not isinstance(properties, DictionaryObject):
            return

        actual = resolve_object(properties.get(NameObject("/ActualText")))
        if actual is None:
            return
        if isinstance(actual, TextStringObject):
            text = str(actual)
        else:
            text = decode_text(_string_bytes(actual))

        x, y = run.state.text_position
        self._emit_text(run, TextRun(text=text, x=x, y=y))
