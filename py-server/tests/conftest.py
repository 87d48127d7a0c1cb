"""Pytest configuration and shared fixtures for paint translation tests."""

from typing import Any

import pytest
from pikepdf import Pdf

from engine.collaborators import PaintEnvironment
from engine.config import PaintApplierOptions
from engine.paint_applier import PaintApplier
from processors.color_mapping import DeviceRGBColorMapper
from processors.image_encoding import LosslessImageEncoder
from processors.paint_state import TranslationState
from processors.pdf_graphics import ContentStreamWriter, RenderTarget
from processors.sub_rendering import NodeSubRenderer
from utils.pdf_transforms import AffineTransform


class FailingSubRenderer:
    """Sub-renderer whose delegate always raises."""

    def __init__(self):
        self.calls = 0

    def render_into(self, target: RenderTarget, node: Any) -> None:
        self.calls += 1
        raise RuntimeError("tile renderer exploded")


@pytest.fixture
def pdf():
    document = Pdf.new()
    yield document
    document.close()


@pytest.fixture
def env(pdf):
    return PaintEnvironment(
        document=pdf,
        writer=ContentStreamWriter(),
        color_mapper=DeviceRGBColorMapper(),
        image_encoder=LosslessImageEncoder(),
        sub_renderer=NodeSubRenderer(),
    )


@pytest.fixture
def state(env):
    return TranslationState(env=env, transform=AffineTransform.identity())


@pytest.fixture
def options():
    return PaintApplierOptions()


@pytest.fixture
def applier(options):
    processor = PaintApplier(options=options)
    processor.initialize()
    yield processor
    processor.cleanup()


def operators(writer):
    """Operator names of a writer as strings, e.g. ['q', 'cm', 'Q']."""
    return [op.decode('ascii') for op in writer.operators()]


def operands_of(writer, operator: bytes):
    """Operand lists of every instruction with the given operator."""
    return [operands for operands, op in writer.instructions if op == operator]
