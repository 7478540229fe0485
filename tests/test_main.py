import pytest

import main
from dependencies.resolver import DependencyResolver
from memory.cache import ResolutionCache
from memory.models import LEARNING, PROFICIENT
from memory.store import SkillStore


@pytest.fixture
def session(monkeypatch, stub_client):
    monkeypatch.setattr(main, "store", SkillStore())
    monkeypatch.setattr(main, "resolver", DependencyResolver(stub_client, cache=ResolutionCache()))
    monkeypatch.setattr(main, "client", stub_client)
    return main.store


def test_add_skill_attaches_checklist(session):
    result = main.add_skill("Docker")
    assert result["name"] == "Docker"
    assert result["proficiency"] == "Want to Learn"
    assert len(result["checklist"]) == 5


def test_add_duplicate_skill(session):
    main.add_skill("Python")
    assert "error" in main.add_skill("python")
    assert len(session) == 1


def test_update_proficiency_rejects_unknown_tier(session):
    skill_id = main.add_skill("Docker")["id"]
    assert main.update_skill_proficiency(skill_id, "Guru").startswith("Invalid proficiency")
    assert main.update_skill_proficiency(skill_id, LEARNING)["proficiency"] == LEARNING


def test_consistency_tool(session):
    k8s = main.add_skill("Kubernetes")["id"]
    main.update_skill_proficiency(k8s, PROFICIENT)

    warnings = main.check_skill_consistency()
    assert {w["id"] for w in warnings} == {f"{k8s}-missing-docker", f"{k8s}-missing-linux", f"{k8s}-missing-yaml"}
    assert main.get_skill_warnings_tool(k8s) == warnings


def test_profile_flows_into_context(session):
    main.update_user_profile(years_of_experience=5, current_role="Frontend Developer")
    main.add_skill("React")

    profile = main.get_skill_profile()["profile"]
    assert profile["yearsOfExperience"] == 5
    assert profile["currentRole"] == "Frontend Developer"
    assert profile["existingSkills"] == ["React"]


def test_dependencies_tool(session):
    assert main.get_skill_dependencies("Kubernetes")["source"] == "static_table"


def test_learning_path_tool(session):
    steps = main.get_learning_path(["Docker"])
    assert [s["skill_name"] for s in steps] == ["Linux", "Containerization", "Docker"]


def test_discover_missing_skills_tool(session):
    assert main.discover_missing_skills("nonsense").startswith("Invalid mode")
    assert main.discover_missing_skills("rules") == []


def test_remove_skill_tool(session):
    parent = main.add_skill("Frontend")["id"]
    main.add_skill("React", parent_id=parent)
    assert main.remove_skill(parent) == {"removed": ["Frontend", "React"]}
    assert len(session) == 0


def test_toggle_checklist_tool(session):
    skill = main.add_skill("Docker")
    item_id = skill["checklist"][0]["id"]
    assert main.toggle_checklist_item(skill["id"], item_id)["completed"] is True
    assert "error" in main.toggle_checklist_item(skill["id"], "missing")
