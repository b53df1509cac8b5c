"""
Companies Repository.

Responsibilities:
- Read a single company by handle.

Non-Responsibilities:
- No writes; companies are managed outside the jobs layer.

Invariant:
Returned dicts use logical field names (numEmployees, logoUrl).
"""

from typing import Any, Dict

from ..database import Store
from ..errors import NotFoundError
from ..sql import ColumnMapper

COMPANY_COLUMNS = ColumnMapper({
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
})

COMPANY_FIELDS = ("handle", "name", "description", "numEmployees", "logoUrl")


class CompanyRepository:

    def __init__(self, store: Store, columns: ColumnMapper = COMPANY_COLUMNS):
        self.store = store
        self.columns = columns

    def get(self, handle: str) -> Dict[str, Any]:
        """Return {handle, name, description, numEmployees, logoUrl}."""
        rows = self.store.execute(
            f"""SELECT {self.columns.select_list(COMPANY_FIELDS)}
                FROM companies
                WHERE handle = $1""",
            [handle],
        )
        if not rows:
            raise NotFoundError(f"No company: {handle}")
        return rows[0]
