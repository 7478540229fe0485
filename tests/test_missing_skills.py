import pytest

from memory.models import LEARNING, PROFICIENT, WANT_TO_LEARN
from recommender.missing_skills import (
    discover_missing_skills,
    discover_missing_skills_from_rules,
    discover_missing_skills_hybrid,
    get_category_for_skill,
    is_complex_skill,
)


def test_rules_find_missing_catalog_prerequisites(make_skill):
    skills = [make_skill("Kubernetes", PROFICIENT), make_skill("Docker", LEARNING)]
    missing = discover_missing_skills_from_rules(skills)

    by_name = {m.name: m for m in missing}
    assert set(by_name) == {"Linux", "YAML", "Containerization"}

    linux = by_name["Linux"]
    assert linux.id == "rule-s1-linux"
    assert linux.confidence == "high"
    assert linux.source == "rules"
    assert linux.parent_skill == "Kubernetes"
    assert linux.category == "infrastructure"
    assert linux.reason.startswith("Required for Kubernetes - ")


def test_rules_skip_want_to_learn_and_unknown(make_skill):
    skills = [make_skill("Kubernetes", WANT_TO_LEARN), make_skill("Underwater Basket Weaving", PROFICIENT)]
    assert discover_missing_skills_from_rules(skills) == []


def test_rules_dedupe_shared_prerequisites(make_skill):
    skills = [make_skill("Kubernetes", PROFICIENT), make_skill("Ansible", PROFICIENT)]
    names = [m.name for m in discover_missing_skills_from_rules(skills)]
    assert names.count("Linux") == 1


def test_category_lookup():
    assert get_category_for_skill("YAML") == "other"
    assert get_category_for_skill("Load Balancing") == "networking"
    assert get_category_for_skill("C++") == "programming"
    assert get_category_for_skill("Go") == "programming"


def test_complex_skills():
    assert is_complex_skill("Kubernetes")
    assert is_complex_skill("React Hooks")
    assert not is_complex_skill("Email Marketing")


def test_hybrid_marks_agreement(make_skill, stub_client):
    stub_client.suggestions["kubernetes"] = [
        {"name": "Linux", "reason": "Nodes run Linux", "confidence": "medium", "category": "infrastructure"},
        {"name": "Networking", "reason": "Pods talk over the network", "confidence": "high", "category": "networking"},
        {"name": "Docker", "reason": "Already known", "confidence": "high", "category": "devops"},
    ]
    skills = [make_skill("Kubernetes", PROFICIENT), make_skill("Docker", LEARNING)]

    missing = discover_missing_skills_hybrid(skills, stub_client)
    by_name = {m.name: m for m in missing}

    assert stub_client.suggest_calls == ["Kubernetes", "Docker"]
    assert "Docker" not in by_name

    linux = by_name["Linux"]
    assert linux.source == "hybrid"
    assert linux.confidence == "high"
    assert linux.reason.endswith("(Confirmed by AI analysis)")

    networking = by_name["Networking"]
    assert networking.source == "llm"
    assert networking.id == "llm-kubernetes-1"

    assert missing[0].source == "hybrid"
    assert len(missing) <= 10


def test_hybrid_limits_remote_analyses(make_skill, stub_client):
    skills = [
        make_skill(name, PROFICIENT)
        for name in ("Kubernetes", "Docker", "Terraform", "Ansible", "React")
    ]
    discover_missing_skills_hybrid(skills, stub_client)
    assert len(stub_client.suggest_calls) == 3


def test_discover_dispatches_by_mode(make_skill, stub_client):
    skills = [make_skill("Kubernetes", PROFICIENT)]

    assert all(m.source == "rules" for m in discover_missing_skills(skills, stub_client, mode="rules"))
    assert stub_client.suggest_calls == []

    stub_client.suggestions["kubernetes"] = [
        {"name": "Helm Charts", "reason": "Packaging", "confidence": "low", "category": "devops"},
    ]
    llm_only = discover_missing_skills(skills, stub_client, mode="llm")
    assert [m.name for m in llm_only] == ["Helm Charts"]


def test_discover_rejects_unknown_mode(stub_client):
    with pytest.raises(ValueError, match="Unknown discovery mode"):
        discover_missing_skills([], stub_client, mode="magic")
