"""Unit tests for cycle breaking across content types.

Schema: A{name, b -> B, c -> C}, B{name, a -> A}, C{name, a -> A}.
Links of A are resolved in declaration order (b before c).
"""

from typedcms.delivery.resolution import EntryStore, ResolutionCache


def _graph(factory) -> EntryStore:
    return factory.store(
        [
            factory.entry("a1", "nodeA", name="A", b=factory.link("b1"), c=factory.link("c1")),
            factory.entry("b1", "nodeB", name="B", a=factory.link("a1")),
            factory.entry("c1", "nodeC", name="C", a=factory.link("a1")),
        ]
    )


def test_two_node_cycle_terminates(cycle_resolver, factory, cache):
    a = cycle_resolver.resolve_one("nodeA", "a1", _graph(factory), cache)

    assert a.name == "A"
    assert a.b.name == "B"
    assert a.b.a.name == "A"
    # The copy of A held by B was taken before any link of A was set.
    assert a.b.a.b is None
    assert a.b.a.c is None


def test_fields_after_reentry_point_stay_default(cycle_resolver, factory, cache):
    a = cycle_resolver.resolve_one("nodeA", "a1", _graph(factory), cache)

    # c is populated on A itself, but not on the copy reached through b.
    assert a.c.name == "C"
    assert a.c.a.name == "A"
    assert a.c.a.b is not None
    assert a.c.a.b.name == "B"
    assert a.c.a.c is None


def test_partial_population_is_reproducible(cycle_resolver, factory):
    first = cycle_resolver.resolve_one("nodeA", "a1", _graph(factory), ResolutionCache())
    second = cycle_resolver.resolve_one("nodeA", "a1", _graph(factory), ResolutionCache())

    assert first is not second
    assert (first.b.a.b, first.b.a.c) == (second.b.a.b, second.b.a.c) == (None, None)
    assert first.c.a.b.name == second.c.a.b.name == "B"


def test_same_cache_returns_same_object(cycle_resolver, factory, cache):
    store = _graph(factory)
    first = cycle_resolver.resolve_one("nodeA", "a1", store, cache)
    second = cycle_resolver.resolve_one("nodeA", "a1", store, cache)

    assert first is second
    assert cache.hits >= 1


def test_starting_point_changes_partial_shape(cycle_resolver, factory, cache):
    b = cycle_resolver.resolve_one("nodeB", "b1", _graph(factory), cache)

    assert b.a.name == "A"
    # A was completed while resolving from B; its b points back at a partial B.
    assert b.a.b.name == "B"
    assert b.a.b.a is None
    assert b.a.c.name == "C"


def test_three_node_cycle(factory):
    from typedcms.delivery.resolution import EntryResolver
    from typedcms.delivery.schema import ContentModelRegistry

    def _node(ct_id: str, next_id: str) -> dict:
        return {
            "sys": {"id": ct_id},
            "name": ct_id,
            "fields": [
                {"id": "name", "type": "Symbol"},
                {
                    "id": "next",
                    "type": "Link",
                    "linkType": "Entry",
                    "validations": [{"linkContentType": [next_id]}],
                },
            ],
        }

    registry = ContentModelRegistry.from_api([_node("x", "y"), _node("y", "z"), _node("z", "x")])
    store = factory.store(
        [
            factory.entry("x1", "x", name="x1", next=factory.link("y1")),
            factory.entry("y1", "y", name="y1", next=factory.link("z1")),
            factory.entry("z1", "z", name="z1", next=factory.link("x1")),
        ]
    )

    x = EntryResolver(registry).resolve_one("x", "x1", store, ResolutionCache())

    assert [x.name, x.next.name, x.next.next.name, x.next.next.next.name] == ["x1", "y1", "z1", "x1"]
    assert x.next.next.next.next is None
