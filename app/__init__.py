"""
Student Placement Portal
Profiles, job postings, placements and weighted job recommendations.

Architecture:
- Relational store: profiles, catalog, job postings, placements
- MongoDB: recommendation logs (append-only documents)
- Scorer: pure function shared by the service and the /score endpoint
"""

__version__ = "1.0.0"
