import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__
from .database import Store, init_database
from .env import get_database_url, get_log_dir, get_log_level, load_env
from .errors import JoblyError
from .logger import get_logger
from .repositories import JobRepository
from .schema import (
    coerce_search_params,
    validate_job_search,
    validate_job_update,
    validate_new_job,
)


def _store(args: argparse.Namespace) -> Store:
    return Store.from_url(args.database_url or get_database_url())


def _load_json(path_str: str) -> Dict[str, Any]:
    input_path = Path(path_str)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _fail_invalid(errors: List[str]) -> None:
    print("Invalid:")
    for e in errors:
        print(f" - {e}")
    raise SystemExit(2)


def _emit(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, default=str))


def cmd_init_db(args: argparse.Namespace) -> None:
    store = _store(args)
    init_database(store.engine)
    print(f"Initialized database: {store.engine.url.render_as_string(hide_password=True)}")


def cmd_create(args: argparse.Namespace) -> None:
    data = _load_json(args.input)
    errors = validate_new_job(data)
    if errors:
        _fail_invalid(errors)
    job = JobRepository(_store(args)).create(data)
    _emit({"job": job})


def cmd_list(args: argparse.Namespace) -> None:
    # Mirrors a query string: every value arrives as text
    query = {}
    if args.title is not None:
        query["title"] = args.title
    if args.min_salary is not None:
        query["minSalary"] = args.min_salary
    if args.has_equity:
        query["hasEquity"] = "true"

    criteria = coerce_search_params(query)
    errors = validate_job_search(criteria)
    if errors:
        _fail_invalid(errors)
    jobs = JobRepository(_store(args)).find_all(criteria)
    _emit({"jobs": jobs})


def cmd_get(args: argparse.Namespace) -> None:
    job = JobRepository(_store(args)).get(args.id)
    _emit({"job": job})


def cmd_update(args: argparse.Namespace) -> None:
    data = _load_json(args.input)
    errors = validate_job_update(data)
    if errors:
        _fail_invalid(errors)
    job = JobRepository(_store(args)).update(args.id, data)
    _emit({"job": job})


def cmd_remove(args: argparse.Namespace) -> None:
    JobRepository(_store(args)).remove(args.id)
    _emit({"deleted": args.id})


def main(argv: Optional[List[str]] = None):
    # Load .env if present (DATABASE_URL, LOG_LEVEL, LOG_DIR)
    load_env()
    # Module loggers were built at import time, before .env was read
    logger = get_logger()
    logger.set_level(get_log_level())
    log_dir = get_log_dir()
    if log_dir is not None:
        logger.set_log_dir(log_dir)

    parser = argparse.ArgumentParser(prog="jobly", description="Jobly jobs data-access CLI")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--database-url", help="SQLAlchemy database URL (or set DATABASE_URL)")
    parser.add_argument("--metrics", action="store_true", help="Log a metrics summary after the command")

    subparsers = parser.add_subparsers(dest="command")
    ini = subparsers.add_parser("init-db", help="Create the companies and jobs tables")
    ini.set_defaults(func=cmd_init_db)

    cre = subparsers.add_parser("create", help="Create a job from a JSON file {title, salary, equity, companyHandle}")
    cre.add_argument("--input", required=True, help="Path to job JSON input")
    cre.set_defaults(func=cmd_create)

    lst = subparsers.add_parser("list", help="List jobs, optionally filtered")
    lst.add_argument("--title", help="Case-insensitive substring of the job title")
    lst.add_argument("--min-salary", help="Minimum salary (inclusive)")
    lst.add_argument("--has-equity", action="store_true", help="Only jobs with equity > 0")
    lst.set_defaults(func=cmd_list)

    get = subparsers.add_parser("get", help="Show a job with its company")
    get.add_argument("--id", type=int, required=True, help="Job id")
    get.set_defaults(func=cmd_get)

    upd = subparsers.add_parser("update", help="Patch a job from a JSON file {title, salary, equity}")
    upd.add_argument("--id", type=int, required=True, help="Job id")
    upd.add_argument("--input", required=True, help="Path to patch JSON input")
    upd.set_defaults(func=cmd_update)

    rem = subparsers.add_parser("remove", help="Delete a job")
    rem.add_argument("--id", type=int, required=True, help="Job id")
    rem.set_defaults(func=cmd_remove)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if not hasattr(args, "func"):
        parser.print_help()
        return

    try:
        args.func(args)
    except JoblyError as e:
        raise SystemExit(f"Error ({e.status}): {e.message}")
    finally:
        if args.metrics:
            logger.log_metrics_summary()


if __name__ == "__main__":
    main()
