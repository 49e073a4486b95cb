import pytest

import teamsnap
from teamsnap.collection import Collection, Descriptor

from conftest import MEMBERS, ROOT


class StubRunner(object):

    def __init__(self, result=None):
        self.result = {} if result is None else result
        self.calls = []

    def run(self, via, href, args=None):
        self.calls.append((via, href, args))
        return self.result


def echo_loader(document):
    return [document]


class TestOperation:
    SEARCH = Descriptor("search", "http://api.test/teams/search",
                        ("id", "team_id", "user_id"))

    def test_call(self):
        runner = StubRunner({"items": []})
        operation = teamsnap.Operation(self.SEARCH, "GET", runner,
                                       echo_loader)
        assert operation(id=1, user_id=2) == [{"items": []}]
        assert runner.calls == [
            ("GET", "http://api.test/teams/search", {"id": 1, "user_id": 2})
        ]

    def test_no_arguments(self):
        runner = StubRunner()
        teamsnap.Operation(self.SEARCH, "GET", runner, echo_loader)()
        assert runner.calls == [("GET", "http://api.test/teams/search", {})]

    def test_invalid_argument(self):
        runner = StubRunner()
        operation = teamsnap.Operation(self.SEARCH, "GET", runner,
                                       echo_loader)
        with pytest.raises(teamsnap.ArgumentError) as exc:
            operation(id=1, foo="bar")
        assert str(exc.value) == ("Invalid argument(s). Valid argument(s) "
                                  "are ['id', 'team_id', 'user_id']")
        assert runner.calls == []

    def test_argument_error_is_type_error(self):
        operation = teamsnap.Operation(self.SEARCH, "GET", StubRunner(),
                                       echo_loader)
        with pytest.raises(TypeError):
            operation(foo="bar")

    def test_repr(self):
        operation = teamsnap.Operation(self.SEARCH, "GET", StubRunner(),
                                       echo_loader)
        assert repr(operation) == (
            "<Operation: GET search(id, team_id, user_id)>")


class TestNamespace:
    def test_operations_as_attributes(self):
        namespace = teamsnap.Namespace()
        operation = teamsnap.Operation(
            Descriptor("recent", "http://x/recent"), "GET", StubRunner(),
            echo_loader)
        namespace.add_operation(operation)
        assert namespace.recent is operation
        assert "recent" in dir(namespace)

    def test_missing(self):
        with pytest.raises(AttributeError, match="nope"):
            teamsnap.Namespace().nope

    def test_shadowed_operation_in_operations(self):
        namespace = teamsnap.Namespace()
        operation = teamsnap.Operation(
            Descriptor("add_operation", "http://x/add"), "POST",
            StubRunner(), echo_loader)
        namespace.add_operation(operation)
        assert namespace.add_operation != operation
        assert namespace.operations["add_operation"] is operation


class TestRegistry:
    def test_register(self):
        registry = teamsnap.Registry()
        rtype, created = registry.register("Team", "teams",
                                           "http://api.test/teams")
        assert created
        assert (rtype.name, rtype.rel, rtype.href) == (
            "Team", "teams", "http://api.test/teams")
        assert registry["Team"] is rtype
        assert list(registry) == ["Team"]
        assert len(registry) == 1

    def test_register_existing(self):
        registry = teamsnap.Registry()
        first, _ = registry.register("Team", "teams", "http://api.test/teams")
        again, created = registry.register("Team", "team", "http://other")
        assert not created
        assert again is first
        assert first.href == "http://api.test/teams"

    def test_ensure(self):
        registry = teamsnap.Registry()
        rtype = registry.ensure("Event")
        assert registry.ensure("Event") is rtype
        assert rtype.href is None


class TestResourceType:
    def make_type(self, found):
        rtype = teamsnap.ResourceType("Team", "teams")
        rtype.add_operation(teamsnap.Operation(
            Descriptor("search", "http://x/search", ("id",)), "GET",
            StubRunner(), lambda _: found))
        return rtype

    def test_schema_before_items(self):
        assert teamsnap.ResourceType("Team").schema is None

    def test_entity_class_fixed_by_first_sample(self):
        rtype = teamsnap.ResourceType("Team")
        cls = rtype.entity_class_for({"id": 1})
        assert rtype.entity_class_for({"id": 2, "name": "x"}) is cls
        assert list(rtype.schema) == ["href", "id"]

    def test_find(self):
        rtype = self.make_type(["first", "second"])
        assert rtype.can_find
        assert rtype.find(1) == "first"

    def test_find_nothing(self):
        rtype = self.make_type([])
        with pytest.raises(teamsnap.NotFoundError) as exc:
            rtype.find(0)
        assert str(exc.value) == "Could not find a Team with an id of '0'."
        assert isinstance(exc.value, LookupError)

    def test_find_without_search(self):
        rtype = teamsnap.ResourceType("Team")
        assert not rtype.can_find
        with pytest.raises(AttributeError, match="search"):
            rtype.find(1)

    def test_repr(self):
        assert repr(teamsnap.ResourceType("Team")) == "<ResourceType: Team>"


class TestRegisterEndpoints:
    def test_queries_then_commands(self):
        owner = teamsnap.Namespace()
        teamsnap.register_endpoints(
            owner, Collection.load(MEMBERS["collection"]), StubRunner(),
            echo_loader)
        assert list(owner.operations) == ["search", "disable_member"]
        assert owner.search.via == "GET"
        assert owner.disable_member.via == "POST"
        assert owner.disable_member.params == ("member_id",)

    def test_excluded_skipped(self):
        owner = teamsnap.Namespace()
        teamsnap.register_endpoints(
            owner, Collection.load(ROOT["collection"]), StubRunner(),
            echo_loader)
        assert list(owner.operations) == ["recent_members"]
