"""
Tests for skill readiness, admin analytics and placements.
"""

import pytest

from app.core.exceptions import ConflictError, NotFoundError
from app.services.admin_service import AdminService
from app.services.catalog_service import CatalogService
from app.services.placement_service import PlacementService
from app.services.readiness_service import (
    SkillReadinessService, readiness_label, readiness_score
)


class TestReadiness:

    def test_demand_counts_only_active_jobs(self, catalog, make_job):
        make_job(required_skill_ids=[catalog["Python"], catalog["SQL"]])
        make_job(required_skill_ids=[catalog["Python"]])
        make_job(required_skill_ids=[catalog["React"]], status="inactive")

        demand = SkillReadinessService().get_skill_demand()
        assert demand == {catalog["Python"]: 2, catalog["SQL"]: 1}

    def test_readiness_for_student(self, catalog, make_job, make_student):
        make_job(required_skill_ids=[catalog["Python"], catalog["SQL"]])
        make_job(required_skill_ids=[catalog["Python"], catalog["React"]])
        student = make_student(skill_ids=[catalog["SQL"], catalog["Communication"]])

        result = SkillReadinessService().get_readiness(student)

        # In demand: Python (2), React (1), SQL (1); student owns SQL
        assert result["readiness_score"] == 33
        assert result["label"] == "Needs Work"
        names = [s["skill"]["name"] for s in result["skills"]]
        assert names == ["Python", "React", "SQL", "Communication"]
        assert [s["skill"]["name"] for s in result["strengths"]] == ["SQL"]
        assert [s["skill"]["name"] for s in result["improvements"]] == ["Python", "React"]

    def test_no_demand(self, catalog, make_student):
        with_skills = make_student(skill_ids=[catalog["Python"]])
        without_skills = make_student(full_name="Meera Iyer")

        service = SkillReadinessService()
        assert service.get_readiness(with_skills)["readiness_score"] == 50
        assert service.get_readiness(without_skills)["readiness_score"] == 0

    @pytest.mark.parametrize("score,label", [(100, "Strong"), (70, "Strong"), (69, "Moderate"), (40, "Moderate"), (39, "Needs Work")])
    def test_labels(self, score, label):
        assert readiness_label(score) == label

    def test_score_ignores_skills_without_demand(self):
        skills = [
            {"skill": {"id": "a"}, "demand_count": 3, "is_owned": True},
            {"skill": {"id": "b"}, "demand_count": 1, "is_owned": False},
            {"skill": {"id": "c"}, "demand_count": 0, "is_owned": True},
        ]
        assert readiness_score(skills, owns_any_skill=True) == 50

    def test_improvements_capped_at_five(self, db, make_job, make_student):
        catalog = CatalogService()
        skill_ids = [catalog.create_skill(f"Skill {i}", "technical")["id"] for i in range(7)]
        make_job(required_skill_ids=skill_ids)

        result = SkillReadinessService().get_readiness(make_student())
        assert len(result["improvements"]) == 5
        assert result["readiness_score"] == 0


class TestAdmin:

    def test_overview(self, catalog, make_job, make_student):
        make_job()
        make_job(status="inactive")
        placed = make_student()
        make_student(full_name="Meera Iyer")
        job = make_job(title="Analyst")
        PlacementService().create_placement(placed, job["id"])

        assert AdminService().get_overview() == {
            "total_students": 2,
            "active_jobs": 2,
            "total_placements": 1,
        }

    def test_student_directory(self, catalog, make_student):
        make_student(full_name="Asha Rao", branch="CSE", skill_ids=[catalog["Python"], catalog["SQL"]],
                     interest_ids=[catalog["Data Science"]])
        make_student(full_name="Vikram Singh", branch="ME", year=None, cgpa=None)

        students = AdminService().list_students()
        assert [s["full_name"] for s in students] == ["Asha Rao", "Vikram Singh"]
        asha, vikram = students
        assert (asha["skills_count"], asha["interests_count"], asha["profile_completion"]) == (2, 1, 100)
        assert (vikram["skills_count"], vikram["interests_count"], vikram["profile_completion"]) == (0, 0, 33)

    def test_directory_completion_counts_skills_and_interests(self, make_student):
        make_student(full_name="No Extras")

        student = AdminService().list_students()[0]
        assert student["profile_completion"] == 67

    def test_search_treats_wildcards_literally(self, make_student):
        make_student(full_name="Anna_Bell")
        make_student(full_name="Annaxbell")

        service = AdminService()
        assert [s["full_name"] for s in service.list_students(search="a_b")] == ["Anna_Bell"]
        assert service.list_students(search="%") == []

    def test_student_directory_filters(self, make_student):
        make_student(full_name="Asha Rao", branch="CSE")
        make_student(full_name="Vikram Singh", branch="ME")

        service = AdminService()
        assert [s["full_name"] for s in service.list_students(search="vik")] == ["Vikram Singh"]
        assert [s["full_name"] for s in service.list_students(search="cse")] == ["Asha Rao"]
        assert [s["full_name"] for s in service.list_students(branch="ME")] == ["Vikram Singh"]

    def test_analytics(self, catalog, make_job, make_student):
        make_job(required_skill_ids=[catalog["Python"], catalog["SQL"]])
        make_job(required_skill_ids=[catalog["Python"]], status="inactive")
        make_student(branch="CSE")
        make_student(full_name="Meera Iyer", branch="CSE")
        make_student(full_name="Vikram Singh", branch=None)

        analytics = AdminService().get_analytics()

        assert analytics["top_skills"] == [{"name": "Python", "count": 2}, {"name": "SQL", "count": 1}]
        assert analytics["branch_distribution"] == [
            {"name": "CSE", "count": 2}, {"name": "Unknown", "count": 1}
        ]
        assert analytics["placement_stats"] == {"placed": 0, "active": 3}


class TestPlacements:

    def test_create_and_list(self, make_job, make_student):
        job = make_job(title="SDE Intern", company_name="Acme")
        student = make_student(full_name="Asha Rao")

        placement = PlacementService().create_placement(student, job["id"], placed_by="admin-1")

        assert placement["student_name"] == "Asha Rao"
        assert placement["job_title"] == "SDE Intern"
        assert placement["company_name"] == "Acme"
        assert placement["placed_by"] == "admin-1"
        assert [p["id"] for p in PlacementService().list_placements()] == [placement["id"]]

    def test_student_placed_once(self, make_job, make_student):
        job = make_job()
        student = make_student()
        PlacementService().create_placement(student, job["id"])

        with pytest.raises(ConflictError):
            PlacementService().create_placement(student, make_job(title="Other")["id"])

    def test_unknown_student_or_job(self, make_job, make_student):
        with pytest.raises(NotFoundError):
            PlacementService().create_placement("ghost", make_job()["id"])
        with pytest.raises(NotFoundError):
            PlacementService().create_placement(make_student(), "missing")

    def test_available_students_excludes_placed(self, make_job, make_student):
        placed = make_student(full_name="Asha Rao")
        make_student(full_name="Meera Iyer")
        PlacementService().create_placement(placed, make_job()["id"])

        available = PlacementService().list_available_students()
        assert [s["full_name"] for s in available] == ["Meera Iyer"]
