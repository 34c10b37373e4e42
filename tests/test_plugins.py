from __future__ import annotations

from unitcheck import Registrations, Registry, create_registry, equal, run


def test_registrations_apply_in_declaration_order() -> None:
    registrations = Registrations(name="math")

    @registrations.test("Math", tags=["fast"])
    def addition():
        return equal(2 + 2, 4)

    @registrations.test("Math", "Subtraction")
    def _subtraction():
        return equal(2 - 1, 5)

    registrations.suite("Math", tags=["arith"], setup=lambda: None)

    registry = Registry()
    assert registry.suites == {}

    registrations.apply(registry)

    suite = registry.suites["Math"]
    assert suite.test_names() == ("addition", "Subtraction")
    assert suite.tests[0][1].tags == ["fast"]
    assert suite.tags == ["arith"]
    assert suite.setup is not None
    assert addition().success is True


def test_declaring_tests_does_not_touch_any_registry() -> None:
    registrations = Registrations()

    @registrations.add
    def _register(registry: Registry) -> None:
        registry.add_test("Core", "Noop", body=lambda: equal(1, 1))

    assert len(registrations) == 1
    assert Registry().suites == {}


def test_create_registry_completes_registration_before_returning() -> None:
    registrations = Registrations()

    @registrations.test("Math", "Addition")
    def _addition():
        return equal(2 + 2, 4)

    registry = create_registry([registrations], load_entrypoints=False)

    summary = registry.run()
    assert summary.total == 1
    assert summary.passed == 1


def test_entrypoint_plugins_are_registered(monkeypatch) -> None:
    registrations = Registrations(name="external")

    @registrations.test("External", "Loaded")
    def _loaded():
        return equal(1, 1)

    class _EntryPoint:
        name = "external"

        def load(self):
            return registrations

    def _fake_entry_points(*, group: str):
        assert group == "unitcheck.suites"
        return [_EntryPoint()]

    monkeypatch.setattr(
        "unitcheck.engine.registry.entry_points", _fake_entry_points
    )

    registry = create_registry()

    assert registry.count_tests() == 1
    assert registry.suites["External"].test_names() == ("Loaded",)


def test_run_builds_query_from_keywords() -> None:
    registry = Registry()
    registry.add_test("Math", "Addition", tags=["fast"], body=lambda: equal(2 + 2, 4))
    registry.add_test("Math", "Subtraction", body=lambda: equal(2 - 1, 5))
    registry.add_test("Core", "Noop", tags=["fast"], body=lambda: equal(1, 1))

    summary = run(registry, suites="MATH", tags=["fast"])

    assert summary.total == 1
    assert summary.passed == 1
    assert [record.name for record in summary.records] == ["Addition"]
