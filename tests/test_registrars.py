"""
Category registrars (registrars.py)

Tests the registrar table and the generalized registration procedure.
"""

import pytest

from autowire.diagnostics import EventType
from autowire.faults import ResolutionFault
from autowire.markers import Managed
from autowire.registrars import (
    BOOTSTRAP_REGISTRARS,
    RUN_REGISTRARS,
    Category,
    QueryKind,
    Registrar,
    qualified_name,
)
from autowire.scanner import TypeIndex


def registrar_for(category):
    return next(r for r in BOOTSTRAP_REGISTRARS + RUN_REGISTRARS if r.category is category)


# ============================================================================
# Table
# ============================================================================

class TestRegistrarTable:

    def test_run_order(self):
        assert [r.category for r in RUN_REGISTRARS] == [
            Category.HEALTH_CHECK,
            Category.PROVIDER,
            Category.INJECTABLE_PROVIDER,
            Category.RESOURCE,
            Category.TASK,
            Category.MANAGED,
        ]

    def test_bootstrap_only_bundles(self):
        assert [r.category for r in BOOTSTRAP_REGISTRARS] == [Category.BUNDLE]

    def test_every_category_once(self):
        categories = [r.category for r in BOOTSTRAP_REGISTRARS + RUN_REGISTRARS]
        assert sorted(c.value for c in categories) == sorted(c.value for c in Category)

    def test_types_registered_for_injectable_providers_and_resources(self):
        by_type = {r.category for r in RUN_REGISTRARS if r.registers_type}
        assert by_type == {Category.INJECTABLE_PROVIDER, Category.RESOURCE}

    def test_tag_queries(self):
        tagged = {r.category for r in RUN_REGISTRARS if r.query is QueryKind.TAGGED}
        assert tagged == {Category.PROVIDER, Category.RESOURCE}


# ============================================================================
# Discovery
# ============================================================================

class TestDiscover:

    def test_filters_abstract(self):
        from petstore.services.database import Database

        index = TypeIndex(["petstore.services"])
        assert registrar_for(Category.MANAGED).discover(index) == [Database]

    def test_sorted_by_qualified_name(self):
        index = TypeIndex(["petstore"])
        found = registrar_for(Category.RESOURCE).discover(index)
        assert [qualified_name(c) for c in found] == [
            "petstore.admin.AdminPetResource",
            "petstore.resources.pets.PetResource",
            "petstore.resources.users.UserResource",
        ]

    def test_protocol_provider_dropped(self):
        from petstore.providers import JsonErrorMapper

        index = TypeIndex(["petstore.providers"])
        assert registrar_for(Category.PROVIDER).discover(index) == [JsonErrorMapper]

    def test_flagged_abstract_dropped(self):
        from petstore.providers import JsonNegotiator

        index = TypeIndex(["petstore.providers"])
        assert registrar_for(Category.INJECTABLE_PROVIDER).discover(index) == [JsonNegotiator]


# ============================================================================
# Registration
# ============================================================================

class TestRegister:

    def test_instances_resolved_through_injector(self, injector, environment, diagnostics):
        from petstore.ops.tasks import PurgeCacheTask, ReindexTask

        index = TypeIndex(["petstore.ops"])
        added = registrar_for(Category.TASK).register(index, injector, environment, diagnostics, "run")

        assert added == [PurgeCacheTask, ReindexTask]
        assert injector.resolved == [PurgeCacheTask, ReindexTask]
        tasks = environment.registered("register_task")
        assert [type(t) for t in tasks] == [PurgeCacheTask, ReindexTask]

    def test_bound_instance_is_registered(self, injector, environment, diagnostics):
        from petstore.ops.health import DatabaseHealthCheck

        check = DatabaseHealthCheck()
        injector.bind_instance(DatabaseHealthCheck, check)
        index = TypeIndex(["petstore.ops"])
        registrar_for(Category.HEALTH_CHECK).register(index, injector, environment, diagnostics, "run")

        assert environment.registered("register_health_check") == [check]

    def test_types_bypass_injector(self, injector, environment, diagnostics):
        from petstore.resources.pets import PetResource
        from petstore.resources.users import UserResource

        index = TypeIndex(["petstore.resources"])
        registrar_for(Category.RESOURCE).register(index, injector, environment, diagnostics, "run")

        assert environment.registered("register_resource") == [PetResource, UserResource]
        assert injector.resolved == []

    def test_emits_event_per_registration(self, injector, environment, diagnostics, recorder):
        from petstore.resources.pets import PetResource
        from petstore.resources.users import UserResource

        index = TypeIndex(["petstore.resources"])
        registrar_for(Category.RESOURCE).register(index, injector, environment, diagnostics, "run")

        assert recorder.registrations() == [("resource", PetResource), ("resource", UserResource)]
        assert all(e.phase == "run" for e in recorder.events)

    def test_resolution_failure_aborts_category(self, injector, environment, diagnostics, recorder):
        from petstore.ops.tasks import PurgeCacheTask

        injector.fail(PurgeCacheTask, RuntimeError("no connection"))
        index = TypeIndex(["petstore.ops"])

        with pytest.raises(ResolutionFault) as exc_info:
            registrar_for(Category.TASK).register(index, injector, environment, diagnostics, "run")

        fault = exc_info.value
        assert fault.type is PurgeCacheTask
        assert fault.category == "task"
        assert isinstance(fault.__cause__, RuntimeError)
        assert "no connection" in str(fault)
        # ReindexTask sorts after PurgeCacheTask and is never reached
        assert environment.calls == []
        assert recorder.registrations() == []

    def test_resolution_fault_passes_through(self, injector, environment, diagnostics):
        from petstore.ops.tasks import PurgeCacheTask

        original = ResolutionFault(PurgeCacheTask, KeyError("binding"))
        injector.fail(PurgeCacheTask, original)
        index = TypeIndex(["petstore.ops"])

        with pytest.raises(ResolutionFault) as exc_info:
            registrar_for(Category.TASK).register(index, injector, environment, diagnostics, "run")
        assert exc_info.value is original

    def test_host_errors_propagate_unchanged(self, injector, diagnostics):
        class RejectingHost:
            def manage(self, managed):
                raise ValueError("duplicate")

        index = TypeIndex(["petstore.services"])
        with pytest.raises(ValueError, match="duplicate"):
            registrar_for(Category.MANAGED).register(index, injector, RejectingHost(), diagnostics, "run")

    def test_custom_row(self, injector, environment, diagnostics):
        from petstore.services.database import Database

        row = Registrar(Category.MANAGED, Managed, QueryKind.SUBTYPES, "manage")
        index = TypeIndex(["petstore.services"])
        assert row.register(index, injector, environment, diagnostics, "run") == [Database]
        assert isinstance(environment.registered("manage")[0], Database)

    def test_event_type(self, injector, environment, diagnostics, recorder):
        index = TypeIndex(["petstore.services"])
        registrar_for(Category.MANAGED).register(index, injector, environment, diagnostics, "run")
        assert [e.type for e in recorder.events] == [EventType.REGISTRATION]
