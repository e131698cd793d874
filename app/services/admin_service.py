"""
Admin Service - placement cell overview, student directory, analytics.

Returns plain data; charts are drawn by the client.
"""

from typing import List, Optional

from app.db.postgres import execute_raw_sql, like_pattern
from app.services.profile_service import completion_percentage

TOP_SKILLS_LIMIT = 10


def _count(sql: str, params: dict = None) -> int:
    rows = execute_raw_sql(sql, params)
    return int(rows[0]["n"]) if rows else 0


class AdminService:

    def count_students(self) -> int:
        return _count("SELECT COUNT(*) AS n FROM user_roles WHERE role = 'student'")

    def count_active_jobs(self) -> int:
        return _count("SELECT COUNT(*) AS n FROM job_postings WHERE status = 'active'")

    def count_placements(self) -> int:
        return _count("SELECT COUNT(*) AS n FROM placements")

    def get_overview(self) -> dict:
        return {
            "total_students": self.count_students(),
            "active_jobs": self.count_active_jobs(),
            "total_placements": self.count_placements(),
        }

    def list_students(self, search: Optional[str] = None, branch: Optional[str] = None) -> List[dict]:
        """
        Profiles of users with the student role, with skill/interest counts.

        search matches name or branch (case-insensitive), branch is exact.
        """
        sql = """
            SELECT p.user_id, p.full_name, p.branch, p.year, p.cgpa,
                   (SELECT COUNT(*) FROM user_skills us WHERE us.user_id = p.user_id) AS skills_count,
                   (SELECT COUNT(*) FROM user_interests ui WHERE ui.user_id = p.user_id) AS interests_count
            FROM profiles p
            JOIN user_roles r ON r.user_id = p.user_id AND r.role = 'student'
            WHERE 1 = 1
        """
        params = {}

        if search:
            sql += " AND (LOWER(p.full_name) LIKE :search ESCAPE '\\' OR LOWER(p.branch) LIKE :search ESCAPE '\\')"
            params["search"] = like_pattern(search)
        if branch:
            sql += " AND p.branch = :branch"
            params["branch"] = branch

        sql += " ORDER BY p.full_name"

        students = []
        for r in execute_raw_sql(sql, params):
            skills_count, interests_count = int(r["skills_count"]), int(r["interests_count"])
            checks = [r["full_name"], r["branch"], r["year"], r["cgpa"], skills_count, interests_count]
            students.append({
                **r,
                "skills_count": skills_count,
                "interests_count": interests_count,
                "profile_completion": completion_percentage(sum(1 for c in checks if c), len(checks)),
            })
        return students

    def get_top_skills(self, limit: int = TOP_SKILLS_LIMIT) -> List[dict]:
        """Skills most often listed as required, across all postings."""
        rows = execute_raw_sql(f"""
            SELECT s.name, COUNT(*) AS n
            FROM job_required_skills jrs JOIN skills s ON jrs.skill_id = s.id
            GROUP BY s.name
            ORDER BY n DESC, s.name
            LIMIT {int(limit)}
        """)
        return [{"name": r["name"], "count": int(r["n"])} for r in rows]

    def get_branch_distribution(self) -> List[dict]:
        rows = execute_raw_sql("""
            SELECT COALESCE(branch, 'Unknown') AS name, COUNT(*) AS n
            FROM profiles
            GROUP BY COALESCE(branch, 'Unknown')
            ORDER BY n DESC, name
        """)
        return [{"name": r["name"], "count": int(r["n"])} for r in rows]

    def get_analytics(self) -> dict:
        placed = self.count_placements()
        return {
            "top_skills": self.get_top_skills(),
            "branch_distribution": self.get_branch_distribution(),
            "placement_stats": {
                "placed": placed,
                "active": self.count_students() - placed,
            },
        }


def get_admin_service() -> AdminService:
    """Get admin service instance."""
    return AdminService()
