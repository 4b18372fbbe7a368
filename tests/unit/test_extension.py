"""Unit tests for CompressedExtension."""

from __future__ import annotations

from typing import Any

import pytest

import bundle_compressed
from bundle_compressed.config import ExtensionDescriptor, ExtractionConfig
from bundle_compressed.extension import CompressedExtension
from fakes import FakeCompilation, RecordingSink

pytestmark = pytest.mark.anyio


class DescribedSink(RecordingSink):
    """Sink tagging its payload with the extension that produced it."""

    def __init__(self, descriptor: ExtensionDescriptor) -> None:
        super().__init__()
        self.descriptor = descriptor

    def get(self) -> dict[str, Any]:
        return {"extension": self.descriptor.name, **super().get()}


class TestCompressedExtension:
    """Tests for the extension entry point."""

    async def test_handle_compilation_forwards_resources(
        self, sink: RecordingSink, scenario_graph: FakeCompilation
    ) -> None:
        """Test the compressor spec reaches the sink unchanged."""
        compressor = object()
        extension = CompressedExtension(compressor, sink)

        summary = await extension.handle_compilation(scenario_graph)

        assert summary.assets_emitted == 1
        assert sink.calls == [("h1", "main.js", b"\x01\x02", compressor)]
        assert sink.calls[0][3] is compressor

    async def test_recursive_flag_passed_through(
        self, sink: RecordingSink, scenario_graph: FakeCompilation
    ) -> None:
        """Test recursive=False limits the walk to the root."""
        extension = CompressedExtension("gzip", sink)

        summary = await extension.handle_compilation(scenario_graph, recursive=False)

        assert summary.compilations == 1

    def test_get_returns_sink_payload(self, sink: RecordingSink) -> None:
        """Test get() delegates to the sink."""
        extension = CompressedExtension("gzip", sink)
        sink.handle_resource("h1", "main.js", b"x", "gzip")

        assert extension.get() == {"resources": ["main.js"]}

    def test_default_descriptor(self, sink: RecordingSink) -> None:
        """Test descriptor defaults to package metadata."""
        extension = CompressedExtension("gzip", sink)

        assert extension.descriptor == ExtensionDescriptor()

    def test_custom_config_and_descriptor(self, sink: RecordingSink) -> None:
        """Test config and descriptor can be supplied."""
        config = ExtractionConfig(recursive=False)
        descriptor = ExtensionDescriptor(name="custom")

        extension = CompressedExtension("gzip", sink, config=config, descriptor=descriptor)

        assert extension.config is config
        assert extension.descriptor.name == "custom"

    async def test_sink_factory_receives_descriptor(
        self, scenario_graph: FakeCompilation
    ) -> None:
        """Test the sink is built from the descriptor and get() returns its payload."""
        descriptor = ExtensionDescriptor(name="custom", homepage="https://example.org")
        built: list[ExtensionDescriptor] = []

        def factory(received: ExtensionDescriptor) -> DescribedSink:
            built.append(received)
            return DescribedSink(received)

        extension = CompressedExtension.from_sink_factory(
            "gzip", factory, descriptor=descriptor
        )
        await extension.handle_compilation(scenario_graph)

        assert built == [descriptor]
        assert extension.descriptor is descriptor
        assert extension.get() == {"extension": "custom", "resources": ["main.js"]}

    def test_sink_factory_default_descriptor(self) -> None:
        """Test the factory receives package metadata when no descriptor is given."""
        extension = CompressedExtension.from_sink_factory("gzip", DescribedSink)

        assert extension.sink.descriptor == ExtensionDescriptor()  # type: ignore[attr-defined]


class TestPublicApi:
    """Tests for lazy package exports."""

    def test_lazy_exports(self) -> None:
        """Test every name in __all__ resolves."""
        for name in bundle_compressed.__all__:
            assert getattr(bundle_compressed, name) is not None

    def test_unknown_attribute(self) -> None:
        """Test unknown attributes raise AttributeError."""
        with pytest.raises(AttributeError):
            bundle_compressed.does_not_exist  # noqa: B018
