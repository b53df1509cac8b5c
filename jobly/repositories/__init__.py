from .companies import CompanyRepository, COMPANY_COLUMNS
from .jobs import JobRepository, JOB_COLUMNS

__all__ = ["CompanyRepository", "COMPANY_COLUMNS", "JobRepository", "JOB_COLUMNS"]
