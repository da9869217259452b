from naming.proxy.params import NAMESPACE_ID, ParameterSet


def test_values_are_stringified():
    params = ParameterSet([("enable", True), ("healthy", False), ("port", 8080), ("weight", 1.0), ("x", None)])

    assert params.items() == [
        ("enable", "true"),
        ("healthy", "false"),
        ("port", "8080"),
        ("weight", "1.0"),
        ("x", ""),
    ]


def test_duplicates_kept_in_order():
    params = ParameterSet().add("tag", "a").add("ip", "1.1.1.1").add("tag", "b")

    assert [v for k, v in params if k == "tag"] == ["a", "b"]
    assert params.get("tag") == "a"
    assert len(params) == 3


def test_put_collapses_to_single_entry():
    params = ParameterSet([(NAMESPACE_ID, "a"), ("serviceName", "s"), (NAMESPACE_ID, "b")])

    params.put(NAMESPACE_ID, "ns")

    assert params.items() == [(NAMESPACE_ID, "ns"), ("serviceName", "s")]


def test_put_appends_missing_key():
    params = ParameterSet([("serviceName", "s")]).put(NAMESPACE_ID, "ns")

    assert params.items() == [("serviceName", "s"), (NAMESPACE_ID, "ns")]
    assert params.get("missing") is None


def test_equality_follows_order():
    assert ParameterSet([("a", "1"), ("b", "2")]) == ParameterSet().add("a", "1").add("b", "2")
    assert ParameterSet([("a", "1"), ("b", "2")]) != ParameterSet([("b", "2"), ("a", "1")])
