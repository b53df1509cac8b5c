"""
Pytest configuration and shared fixtures.
"""

import os

os.environ.setdefault("JOBLY_ENV", "test")

import pytest
from typing import Dict, Any, List

from jobly.database import Store, init_database
from jobly.repositories import JobRepository


COMPANIES = [
    ("c1", "C1", 1, "Desc1", "http://c1.img"),
    ("c2", "C2", 2, "Desc2", "http://c2.img"),
    ("c3", "C3", 3, "Desc3", "http://c3.img"),
]

JOBS = [
    ("Job1", 100, "0.1", "c1"),
    ("Job2", 200, "0.2", "c1"),
    ("Job3", 300, "0", "c1"),
    ("Job4", None, None, "c1"),
]


@pytest.fixture
def store(tmp_path) -> Store:
    """Empty database with the schema created."""
    db_store = Store.from_url(f"sqlite:///{tmp_path / 'jobly_test.db'}")
    init_database(db_store.engine)
    yield db_store
    db_store.dispose()


@pytest.fixture
def job_ids(store) -> List[int]:
    """Seed companies c1-c3 and jobs Job1-Job4; return the job ids in order."""
    for handle, name, num_employees, description, logo_url in COMPANIES:
        store.execute(
            """INSERT INTO companies (handle, name, num_employees, description, logo_url)
               VALUES ($1, $2, $3, $4, $5)""",
            [handle, name, num_employees, description, logo_url],
        )

    ids = []
    for title, salary, equity, company_handle in JOBS:
        rows = store.execute(
            """INSERT INTO jobs (title, salary, equity, company_handle)
               VALUES ($1, $2, $3, $4)
               RETURNING id""",
            [title, salary, equity, company_handle],
        )
        ids.append(rows[0]["id"])
    return ids


@pytest.fixture
def jobs(store, job_ids) -> JobRepository:
    """Job repository over the seeded database."""
    return JobRepository(store)


@pytest.fixture
def new_job() -> Dict[str, Any]:
    """Valid input for JobRepository.create()."""
    return {
        "title": "Job",
        "salary": 1000,
        "equity": "0.1",
        "companyHandle": "c1",
    }
