"""
Unit Tests for targets, events, errors and logging helpers

Run with: pytest tests/test_core.py -v
"""

import logging

import pytest

from propanim import (
    AnimationError,
    AttributeTarget,
    CallableSource,
    EventEmitter,
    LogContext,
    MappingTarget,
    PropertyTarget,
    UnresolvedTargetError,
    as_target,
    get_logger,
    setup_logging,
)


class TestTargets:
    """Tests for target adapters."""

    def test_mapping_target(self, box):
        target = as_target(box)
        target.set("x", 3)

        assert isinstance(target, MappingTarget)
        assert box["x"] == 3

    def test_attribute_target_nested(self, sprite):
        class Node:
            pass

        node = Node()
        node.transform = sprite
        target = as_target(node)
        target.set("transform.y", 8.0)

        assert isinstance(target, AttributeTarget)
        assert target.get("transform.y") == 8.0
        assert sprite.y == 8.0

    def test_protocol_objects_pass_through(self):
        class Store:
            def __init__(self):
                self.values = {}

            def get(self, name):
                return self.values.get(name, 0)

            def set(self, name, value):
                self.values[name] = value

        store = Store()

        assert isinstance(store, PropertyTarget)
        assert as_target(store) is store

    def test_wrapping_is_idempotent(self, box):
        target = as_target(box)

        assert as_target(target) is target

    def test_callable_source_is_read_only(self):
        source = CallableSource(lambda: 1.5)

        assert source.get() == 1.5
        with pytest.raises(TypeError):
            source.set("value", 2.0)


class TestEvents:
    """Tests for the event emitter."""

    def test_on_emit_off(self):
        emitter = EventEmitter()
        seen = []
        callback = emitter.on("ping", seen.append)

        emitter.emit("ping", 1)
        emitter.off("ping", callback)
        emitter.emit("ping", 2)

        assert seen == [1]
        assert emitter.listener_count("ping") == 0

    def test_listener_may_unsubscribe_itself(self):
        emitter = EventEmitter()
        seen = []

        def once(value):
            seen.append(value)
            emitter.off("ping", once)

        emitter.on("ping", once)
        emitter.emit("ping", 1)
        emitter.emit("ping", 2)

        assert seen == [1]


class TestErrors:
    """Tests for the exception hierarchy."""

    def test_details_in_message(self):
        error = UnresolvedTargetError("Target 'box' not found", target_name="box")

        assert isinstance(error, AnimationError)
        assert error.details == {"target": "box"}
        assert str(error) == "Target 'box' not found (target=box)"

    def test_plain_message(self):
        assert str(AnimationError("boom")) == "boom"


class TestLogging:
    """Tests for logging helpers."""

    def test_logger_names_nested(self):
        assert get_logger("custom").name == "propanim.custom"
        assert get_logger("propanim.timeline").name == "propanim.timeline"

    def test_setup_logging_replaces_handlers(self, tmp_path):
        logger = logging.getLogger("propanim")
        try:
            setup_logging(logging.INFO)
            setup_logging(logging.DEBUG, log_file=str(tmp_path / "anim.log"))

            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == 2
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()
            logger.setLevel(logging.NOTSET)

    def test_log_context_restores_level(self):
        logger = get_logger("propanim.timeline")
        logger.setLevel(logging.WARNING)

        with LogContext("propanim.timeline", logging.DEBUG):
            assert logger.level == logging.DEBUG

        assert logger.level == logging.WARNING
        logger.setLevel(logging.NOTSET)
