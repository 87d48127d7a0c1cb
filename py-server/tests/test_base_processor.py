import logging

from engine.base_processor import BaseProcessor, ProcessorRegistry


class RecordingProcessor(BaseProcessor):
    def __init__(self, events, name):
        super().__init__()
        self.events = events
        self.name = name

    def initialize(self):
        self.events.append(f"init {self.name}")
        super().initialize()

    def cleanup(self):
        self.events.append(f"cleanup {self.name}")
        super().cleanup()


def test_lifecycle():
    processor = BaseProcessor()
    assert not processor.is_initialized
    assert not processor.validate_state()
    processor.initialize()
    assert processor.is_initialized
    assert processor.validate_state()
    processor.cleanup()
    assert not processor.is_initialized
    assert "not initialized" in repr(processor)


def test_registry_orders_initialization_and_cleanup():
    events = []
    registry = ProcessorRegistry()
    registry.register('first', RecordingProcessor(events, 'first'))
    registry.register('second', RecordingProcessor(events, 'second'))

    registry.initialize_all()
    assert registry.validate_all()
    registry.cleanup_all()

    assert events == ['init first', 'init second', 'cleanup second', 'cleanup first']
    assert registry.processor_names == ['first', 'second']
    assert len(registry) == 2


def test_registry_replaces_duplicates(caplog):
    registry = ProcessorRegistry()
    registry.register('paint', BaseProcessor())
    replacement = BaseProcessor()
    with caplog.at_level(logging.WARNING):
        registry.register('paint', replacement)
    assert registry.get('paint') is replacement
    assert len(registry) == 1
    assert "already registered" in caplog.text
    assert registry.get('missing') is None
