import io

import pikepdf
import pytest
from pikepdf import Name

from engine.config import EngineConfig, PaintApplierOptions
from engine.paint_applier import PaintApplier
from engine.paint_engine import PaintEngine
from models.paint_types import (
    AlphaComposite, Color, CompositeRule, LinearGradientPaint, Point, Rect,
)
from utils.pdf_transforms import AffineTransform
from utils.validation import GradientStopError, PaintValidationError

from conftest import operators

RED = Color(255, 0, 0)
BLUE = Color(0, 0, 255)


@pytest.fixture
def engine():
    with PaintEngine() as paint_engine:
        yield paint_engine


def _page_operators(pdf_bytes):
    with pikepdf.open(io.BytesIO(pdf_bytes)) as pdf:
        page = pdf.pages[0]
        return [str(instruction.operator) for instruction in pikepdf.parse_content_stream(page)]


def test_solid_fill_produces_pdf(engine):
    page = engine.new_page((200, 200))
    env = engine.create_environment()
    assert engine.fill_rect(env, Rect(10, 10, 50, 50), RED) is None
    engine.commit(page, env)
    pdf_bytes = engine.to_bytes()

    assert pdf_bytes.startswith(b'%PDF')
    assert _page_operators(pdf_bytes) == ['q', 're', 'W', 'n', 'RG', 'rg', 're', 'f', 'Q']


def test_translucent_fill_registers_graphics_state(engine):
    page = engine.new_page()
    env = engine.create_environment()
    engine.fill_rect(env, Rect(0, 0, 10, 10), RED, AlphaComposite(CompositeRule.SRC_OVER, 0.5))
    engine.commit(page, env)
    assert '/GS1' in page.obj['/Resources']['/ExtGState']
    assert 'gs' in operators(env.writer)


def test_gradient_fill_paints_shading_through_clip(engine):
    page = engine.new_page()
    env = engine.create_environment()
    paint = LinearGradientPaint(Point(0, 0), Point(100, 50), [0.0, 1.0], [RED, BLUE])
    shading = engine.fill_rect(env, Rect(0, 0, 100, 50), paint)
    engine.commit(page, env)

    assert shading is not None
    assert env.resources.names('/Shading') == ['/Sh1']
    ops = operators(env.writer)
    assert ops[-2:] == ['sh', 'Q']
    assert ops.count('W') == 2
    # The extent clip precedes the gradient's transform pair
    assert ops[4:] == ['RG', 'rg', 're', 'W', 'n', 'cm', 'cm', 'sh', 'Q']
    assert env.shape_bounds is None


def test_rotated_shape_is_a_polygon(engine):
    engine.new_page()
    env = engine.create_environment()
    engine.fill_rect(env, Rect(0, 0, 10, 10), RED, transform=AffineTransform(0, 1, -1, 0, 0, 0))
    ops = operators(env.writer)
    assert 're' not in ops
    assert ops[:6] == ['q', 'm', 'l', 'l', 'l', 'h']


def test_flipped_shape_keeps_rectangle(engine):
    engine.new_page()
    env = engine.create_environment()
    transform = AffineTransform.translation(0, 100).scale(1, -1)
    engine.fill_rect(env, Rect(10, 10, 20, 30), RED, transform=transform)
    assert env.writer.instructions[1] == ([10.0, 90.0, 20.0, -30.0], b're')


def test_invalid_page_size(engine):
    with pytest.raises(PaintValidationError):
        engine.new_page((0, 100))
    with pytest.raises(PaintValidationError):
        engine.new_page((100, 20000))


def test_engine_requires_context():
    engine = PaintEngine()
    assert not engine.is_open
    with pytest.raises(RuntimeError):
        engine.new_page()
    with pytest.raises(RuntimeError):
        _ = engine.document


def test_engine_closes_on_exit():
    with PaintEngine() as engine:
        assert engine.is_open
    assert not engine.is_open
    with pytest.raises(RuntimeError):
        engine.to_bytes()


def test_disabled_paint_applier():
    config = EngineConfig(paint_applier_options=PaintApplierOptions(enabled=False))
    with PaintEngine(config=config) as engine:
        with pytest.raises(RuntimeError):
            _ = engine.paint_applier


def test_stats(engine):
    engine.new_page()
    env = engine.create_environment()
    engine.fill_rect(env, Rect(0, 0, 10, 10), Color(0, 0, 0, 128))
    engine.fill_rect(env, Rect(20, 0, 10, 10), Color(255, 0, 0, 128))
    stats = engine.get_stats()
    assert stats['pages'] == 1
    assert stats['ext_gstates'] == 1
    assert stats['ext_gstate_hits'] == 1


def test_pages_use_configured_default_size():
    with PaintEngine(config=EngineConfig(default_page_size=(300, 400))) as engine:
        page = engine.new_page()
        assert [float(v) for v in page.mediabox] == [0, 0, 300, 400]
        assert page.obj['/Type'] == Name('/Page')


def test_failed_fill_leaves_writer_untouched(engine):
    engine.new_page()
    env = engine.create_environment()
    engine.fill_rect(env, Rect(0, 0, 10, 10), RED)
    before = list(env.writer.instructions)

    paint = LinearGradientPaint(Point(0, 0), Point(100, 0), [0.6, 0.4], [RED, BLUE])
    with pytest.raises(GradientStopError):
        engine.fill_rect(env, Rect(0, 0, 100, 50), paint)

    assert env.writer.instructions == before
    assert env.shape_bounds is None
    assert env.resources.names('/Shading') == []

    engine.fill_rect(env, Rect(20, 0, 10, 10), BLUE)
    ops = operators(env.writer)
    assert ops.count('q') == ops.count('Q') == 2


def test_fill_requires_initialized_applier(engine):
    engine.new_page()
    env = engine.create_environment()
    engine.paint_applier.cleanup()
    with pytest.raises(RuntimeError, match="not initialized"):
        engine.fill_rect(env, Rect(0, 0, 10, 10), RED)
    assert len(env.writer) == 0


def test_engine_refuses_uninitialized_processors(monkeypatch):
    monkeypatch.setattr(PaintApplier, 'initialize', lambda self: None)
    engine = PaintEngine()
    with pytest.raises(RuntimeError, match="failed to initialize"):
        engine.__enter__()
    assert not engine.is_open
