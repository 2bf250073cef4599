"""Tests for binding context layers into the registry."""

from __future__ import annotations

from kiln.binding import CachedValue, GroupToggle, InteractivePrompt, StaticValue, bind
from kiln.core.models import ContextLayer, RunState
from kiln.registry import FunctionRegistry

from .conftest import ScriptedPrompter


class _Values:
    """Resolve registry entries by key, as a template would when using them."""

    def __init__(self, registry):
        self._registry = registry

    def __getitem__(self, key):
        return self._registry.resolve(key)()


def _bind(layers, *, use_defaults_only, prompter=None, state=None):
    state = state if state is not None else RunState()
    registry = bind(
        [ContextLayer(name=f"layer{i}", values=v) for i, v in enumerate(layers)],
        FunctionRegistry(),
        use_defaults_only=use_defaults_only,
        prompter=prompter or ScriptedPrompter(),
        state=state,
    )
    return registry, state


class TestDefaultsMode:
    def test_scalars_and_lists_resolve_to_defaults(self):
        registry, _ = _bind(
            [{"name": "Acme", "license": ["MIT", "Apache-2.0"], "port": 8080}],
            use_defaults_only=True,
        )
        values = _Values(registry)
        assert values["name"] == "Acme"
        assert values["license"] == "MIT"
        assert values["port"] == 8080
        assert isinstance(registry.resolve("name"), CachedValue)

    def test_group_toggle_is_false_and_members_use_defaults(self):
        prompter = ScriptedPrompter()
        registry, _ = _bind(
            [{"advanced": {"port": 8080, "driver": ["postgres", "sqlite"]}}],
            use_defaults_only=True,
            prompter=prompter,
        )
        values = _Values(registry)
        assert isinstance(registry.resolve("advanced"), StaticValue)
        assert values["advanced"] is False
        assert values["port"] == 8080
        assert values["driver"] == "postgres"
        assert prompter.calls == []

    def test_resolution_records_used_keys(self):
        registry, state = _bind(
            [{"name": "Acme", "unused": "x", "grp": {"member": 1}}],
            use_defaults_only=True,
        )
        values = _Values(registry)
        values["name"]
        values["grp"]
        values["member"]
        assert state.used_keys == {"name", "member"}

    def test_later_layer_overrides_earlier_one(self):
        registry, state = _bind(
            [{"name": "Acme", "port": 80}, {"name": "Widget"}],
            use_defaults_only=True,
        )
        values = _Values(registry)
        assert values["name"] == "Widget"
        assert values["port"] == 80
        assert state.used_keys == {"name", "port"}

    def test_stored_layer_overrides_group_member_by_key(self):
        registry, _ = _bind(
            [{"advanced": {"port": 8080}}, {"port": 9090}],
            use_defaults_only=True,
        )
        assert _Values(registry)["port"] == 9090


class TestInteractiveMode:
    def test_scalar_prompts_once_and_records_input(self):
        prompter = ScriptedPrompter({"name": "Widget"})
        registry, state = _bind([{"name": "Acme"}], use_defaults_only=False, prompter=prompter)
        values = _Values(registry)
        assert values["name"] == "Widget"
        assert values["name"] == "Widget"
        assert prompter.calls == ["name"]
        assert state.user_input == {"name": "Widget"}
        assert isinstance(registry.resolve("name"), InteractivePrompt)

    def test_false_toggle_never_prompts_members(self):
        prompter = ScriptedPrompter({"advanced": False})
        registry, state = _bind(
            [{"advanced": {"port": 8080, "driver": ["postgres", "sqlite"]}}],
            use_defaults_only=False,
            prompter=prompter,
        )
        values = _Values(registry)
        assert values["port"] == 8080
        assert values["driver"] == "postgres"
        assert prompter.calls == ["advanced"]
        assert state.user_input == {"advanced": False}

    def test_true_toggle_prompts_members(self):
        prompter = ScriptedPrompter({"advanced": True, "port": 9090})
        registry, state = _bind(
            [{"advanced": {"port": 8080}}],
            use_defaults_only=False,
            prompter=prompter,
        )
        assert _Values(registry)["port"] == 9090
        assert prompter.calls == ["advanced", "port"]
        assert state.user_input == {"advanced": True, "port": 9090}

    def test_toggle_is_memoized_per_group(self):
        prompter = ScriptedPrompter({"advanced": True, "host": "db", "port": 5432})
        registry, _ = _bind(
            [{"advanced": {"host": "localhost", "port": 8080}}],
            use_defaults_only=False,
            prompter=prompter,
        )
        values = _Values(registry)
        values["host"]
        values["port"]
        values["host"]
        assert prompter.calls == ["advanced", "host", "port"]
        assert isinstance(registry.resolve("advanced"), GroupToggle)

    def test_unreferenced_values_are_never_prompted(self):
        prompter = ScriptedPrompter({"name": "Widget"})
        registry, _ = _bind(
            [{"name": "Acme", "other": "x"}], use_defaults_only=False, prompter=prompter
        )
        _Values(registry)["name"]
        assert prompter.calls == ["name"]


class TestEntries:
    def test_cached_value_takes_first_list_element(self):
        state = RunState()
        assert CachedValue("k", ["a", "b"], state)() == "a"
        assert CachedValue("empty", [], state)() == ""

    def test_gated_prompt_with_false_toggle_returns_first_default(self):
        state = RunState()
        prompter = ScriptedPrompter({"grp": False})
        toggle = GroupToggle("grp", prompter, state)
        entry = InteractivePrompt("k", ["a", "b"], prompter, state, toggle=toggle)
        assert entry() == "a"
        assert prompter.calls == ["grp"]

    def test_gated_prompt_with_true_toggle_asks(self):
        state = RunState()
        prompter = ScriptedPrompter({"grp": True, "k": "b"})
        toggle = GroupToggle("grp", prompter, state)
        entry = InteractivePrompt("k", ["a", "b"], prompter, state, toggle=toggle)
        assert entry() == "b"
        assert prompter.calls == ["grp", "k"]
