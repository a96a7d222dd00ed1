from __future__ import annotations

import pytest

from modelgen.errors import PluginError, TransformError
from modelgen.plugin import CompositePlugin, Plugin, PluginRegistry, SmoothNormalsPlugin, TransformPlugin
from modelgen.transforms import Scale, Translate
from modelgen.types import Model

from .helpers import assert_vec_close, length, normals, positions


class CountingPlugin(Plugin):
    def __init__(self, name: str = "count"):
        self.name = name
        self.description = "Counts how often it ran"
        self.calls = 0

    def process(self, model: Model) -> None:
        self.calls += 1


def test_register_get_list():
    registry = PluginRegistry()
    assert len(registry) == 0
    registry.register(TransformPlugin("lift", "Move up by one", Translate(0, 1, 0)))
    registry.register(SmoothNormalsPlugin())
    assert len(registry) == 2
    assert "lift" in registry
    assert "smooth_normals" in registry
    assert "missing" not in registry
    assert registry.get("missing") is None
    assert registry.get("lift").description == "Move up by one"
    assert registry.list() == [
        ("lift", "Move up by one"),
        ("smooth_normals", "Smooths vertex normals by averaging face normals"),
    ]


def test_register_same_name_replaces():
    registry = PluginRegistry()
    first, second = CountingPlugin("p"), CountingPlugin("p")
    registry.register(first)
    registry.register(second)
    assert len(registry) == 1
    assert registry.get("p") is second


def test_process_runs_named_plugin(unit_cube):
    registry = PluginRegistry()
    registry.register(TransformPlugin("lift", "Move up by one", Translate(0, 1, 0)))
    before = positions(unit_cube)
    registry.process("lift", unit_cube)
    for p, q in zip(positions(unit_cube), before):
        assert_vec_close(p, (q[0], q[1] + 1.0, q[2]))


def test_process_unknown_plugin(unit_cube):
    with pytest.raises(PluginError, match="nope"):
        PluginRegistry().process("nope", unit_cube)


def test_transform_errors_propagate_through_plugins(unit_cube):
    registry = PluginRegistry()
    registry.register(TransformPlugin("flatten", "Bad scale", Scale(1, 0, 1)))
    with pytest.raises(TransformError):
        registry.process("flatten", unit_cube)


def test_composite_runs_in_order(unit_cube):
    combo = CompositePlugin("grow_then_move", "Scale then translate")
    combo.add(TransformPlugin("grow", "", Scale.uniform(2.0))).add(TransformPlugin("move", "", Translate(1, 0, 0)))
    before = positions(unit_cube)
    combo.process(unit_cube)
    for p, q in zip(positions(unit_cube), before):
        assert_vec_close(p, (q[0] * 2.0 + 1.0, q[1] * 2.0, q[2] * 2.0))


def test_composite_stops_at_first_failure(unit_cube):
    tail = CountingPlugin()
    combo = (CompositePlugin("broken", "")
             .add(TransformPlugin("move", "", Translate(1, 0, 0)))
             .add(TransformPlugin("bad", "", Scale(0, 1, 1)))
             .add(tail))
    with pytest.raises(TransformError):
        combo.process(unit_cube)
    assert tail.calls == 0
    assert unit_cube.mesh.vertices[0].position == (0.5, -0.5, 0.5)


def test_composite_can_nest():
    inner = CompositePlugin("inner", "").add(CountingPlugin("a"))
    counter = inner.plugins[0]
    outer = CompositePlugin("outer", "").add(inner).add(inner)
    outer.process(Model())
    assert counter.calls == 2


def test_smooth_normals_plugin(unit_cube):
    for v in unit_cube.mesh.vertices:
        v.normal = (0.0, 0.0, 0.0)
    SmoothNormalsPlugin().process(unit_cube)
    for n in normals(unit_cube):
        assert length(n) == pytest.approx(1.0)
