"""Tests for ViewModel."""

import pytest

from bindx import StaticDirector, UnknownMethodError, ViewModel


class TestViewModel:
    def test_attribute_aliasing(self):
        vm = ViewModel({"name": "Ann", "age": 30})
        assert vm.name == "Ann"
        vm.age = 31
        assert vm.get("age") == 31

    def test_attribute_write_notifies(self):
        vm = ViewModel({"count": 0})
        log = []
        vm.bind("count", log.append)
        vm.count = 1
        assert log == [1]

    def test_nested_paths(self):
        vm = ViewModel({"user": {"name": "Ann"}})
        vm.set("user.name", "Bea")
        assert vm.get("user.name") == "Bea"

    def test_update_writes_each_path(self):
        vm = ViewModel({"x": 0, "y": 0})
        log = []
        vm.bind("x", lambda v: log.append(("x", v)))
        vm.bind("y", lambda v: log.append(("y", v)))
        vm.update({"x": 1, "y": 2})
        assert log == [("x", 1), ("y", 2)]

    def test_unknown_attribute(self):
        vm = ViewModel({"a": 1})
        with pytest.raises(AttributeError):
            vm.nope

    def test_plain_attributes_stay_off_the_data(self):
        vm = ViewModel({"a": 1})
        vm.extra = 5
        assert vm.extra == 5
        assert "extra" not in vm.data

    def test_snapshot(self):
        vm = ViewModel({"user": {"name": "Ann"}, "tags": ["x"]})
        assert vm.snapshot() == {"user": {"name": "Ann"}, "tags": ["x"]}

    def test_repr(self):
        assert "ViewModel(keys=['a'])" == repr(ViewModel({"a": 1}))


class TestComputed:
    def _vm(self):
        return ViewModel(
            {"first": "Ann", "last": "Lee"},
            computed={"full": lambda vm: f"{vm.first} {vm.last}"},
        )

    def test_reads_current_inputs(self):
        vm = self._vm()
        assert vm.full == "Ann Lee"
        vm.first = "Bea"
        assert vm.full == "Bea Lee"

    def test_binding_tracks_inputs(self):
        vm = self._vm()
        log = []
        vm.bind("full", log.append)
        vm.last = "Kim"
        assert log == ["Ann Kim"]

    def test_read_only(self):
        vm = self._vm()
        with pytest.raises(AttributeError):
            vm.set("full", "x")
        with pytest.raises(AttributeError):
            vm.full = "x"

    def test_in_snapshot(self):
        assert self._vm().snapshot()["full"] == "Ann Lee"

    def test_collision_with_data_key(self):
        data = {"full": "kept"}
        with pytest.raises(ValueError, match="collides"):
            ViewModel(data, computed={"full": lambda vm: "x"})
        assert data["full"].peek() == "kept"

    def test_has_no_dep_of_its_own(self):
        vm = self._vm()
        assert vm.data["full"].dep is None
        assert len(vm.data["first"].dep) == 0



class TestMethods:
    def test_bound_to_viewmodel(self):
        vm = ViewModel(
            {"name": "Ann"},
            methods={"greet": lambda vm, who: f"{vm.name} greets {who}"},
        )
        assert vm.greet("Bo") == "Ann greets Bo"
        assert vm.method("greet")("Cy") == "Ann greets Cy"

    def test_unknown_method(self):
        vm = ViewModel({})
        with pytest.raises(UnknownMethodError):
            vm.method("nope")


class TestMount:
    def test_mount_with_director(self):
        node = object()
        values = {}
        vm = ViewModel(
            {"n": 1},
            director=lambda vm: StaticDirector(
                vm.data,
                {node: [("model", "n")]},
                set_value=lambda target, v: values.__setitem__(target, v),
                methods=vm.methods,
            ),
        )
        created = vm.mount(node)
        assert len(created) == 1
        assert values[node] == 1
        vm.n = 2
        assert values[node] == 2

    def test_mount_without_director(self):
        with pytest.raises(RuntimeError):
            ViewModel({}).mount(object())
