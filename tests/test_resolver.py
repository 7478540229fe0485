from dependencies.models import SOURCE_CACHED, SOURCE_PATTERN, SOURCE_REMOTE, SOURCE_STATIC
from dependencies.resolver import DependencyResolver
from memory.cache import ResolutionCache


def test_static_names_never_call_remote(resolver, stub_client):
    record = resolver.resolve("Kubernetes")
    assert record.source == SOURCE_STATIC
    assert record.dependencies == ["Docker", "Linux", "YAML"]
    assert stub_client.infer_calls == []


def test_pattern_names_never_call_remote(resolver, stub_client):
    record = resolver.resolve("Vue.js")
    assert record.source == SOURCE_PATTERN
    assert stub_client.infer_calls == []


def test_static_table_beats_patterns(resolver):
    # "Next.js" is covered by both; the catalog entry has a third enable
    record = resolver.resolve("next.js")
    assert record.source == SOURCE_STATIC
    assert "Static Site Generation" in record.enables


def test_unknown_name_goes_remote_once_then_cached(resolver, stub_client):
    first = resolver.resolve("Underwater Basket Weaving")
    second = resolver.resolve("underwater basket weaving")

    assert first.source == SOURCE_REMOTE
    assert second.source == SOURCE_CACHED
    assert second.skill_name == first.skill_name
    assert stub_client.infer_calls == ["Underwater Basket Weaving"]


def test_mutating_remote_result_leaves_cache_intact(stub_client):
    stub_client.records["svelte"] = {"dependencies": ["JavaScript"], "enables": ["SvelteKit"]}
    resolver = DependencyResolver(stub_client, cache=ResolutionCache())

    first = resolver.resolve("Svelte")
    first.dependencies.clear()
    first.enables.append("Mutated")

    second = resolver.resolve("Svelte")
    assert second.source == SOURCE_CACHED
    assert second.dependencies == ["JavaScript"]
    assert second.enables == ["SvelteKit"]


def test_resolve_is_idempotent_on_content(resolver):
    first = resolver.resolve("Kubernetes")
    second = resolver.resolve("Kubernetes")
    assert first.to_dict() == second.to_dict()


def test_record_fields_always_in_range(resolver, stub_client):
    stub_client.records["overclocked skill"] = {
        "dependencies": [], "description": "x", "difficulty": 99,
        "estimated_hours": -5, "enables": [], "category": "general",
    }
    record = resolver.resolve("Overclocked Skill")
    assert record.difficulty == 10
    assert record.estimated_hours == 1


def test_resolve_many(resolver, stub_client):
    records = resolver.resolve_many(["Docker", "Quantum Knitting"])
    assert [r.source for r in records] == [SOURCE_STATIC, SOURCE_REMOTE]
    assert stub_client.infer_calls == ["Quantum Knitting"]


def test_separate_caches_do_not_share(stub_client):
    a = DependencyResolver(stub_client, cache=ResolutionCache())
    b = DependencyResolver(stub_client, cache=ResolutionCache())
    a.resolve("Quantum Knitting")
    b.resolve("Quantum Knitting")
    assert stub_client.infer_calls == ["Quantum Knitting", "Quantum Knitting"]


def test_default_cache_created_when_omitted(stub_client):
    resolver = DependencyResolver(stub_client)
    resolver.resolve("Quantum Knitting")
    assert len(resolver.cache) == 1
