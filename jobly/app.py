import argparse
from pathlib import Path
from typing import List, Optional

from storage.repositories import CompanyRepository, JobRepository

from . import __version__
from .auth import create_token
from .config import get_settings
from .database import close_database, init_database
from .logger import configure_logger
from .seed import load_seed_file, seed


def cmd_init_db(args: argparse.Namespace) -> None:
    db = init_database(args.database_url)
    print(f"Database ready: {db.url}")


def cmd_serve(args: argparse.Namespace) -> None:
    import uvicorn

    port = args.port or get_settings().port
    uvicorn.run("jobly.api.app:app", host=args.host, port=port, reload=args.reload)


def cmd_seed(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    data = load_seed_file(input_path)
    db = init_database(args.database_url)
    counts = seed(db, data, dry_run=args.dry_run)
    print(
        f"Done. companies={counts['companies']} jobs={counts['jobs']} "
        f"skipped={counts['skipped']} errors={counts['errors']}"
    )


def cmd_token(args: argparse.Namespace) -> None:
    print(create_token(args.username, is_admin=args.admin))


def cmd_companies(args: argparse.Namespace) -> None:
    repo = CompanyRepository(init_database(args.database_url))
    companies = repo.find_all({
        "name": args.name,
        "minEmployees": args.min_employees,
        "maxEmployees": args.max_employees,
    })
    if not companies:
        print("No companies found.")
        return
    print(f"Found {len(companies)} companies:\n")
    for c in companies:
        print(f"{c['handle']}: {c['name']}")
        print(f"  Employees: {c['numEmployees']}")
        print(f"  Logo: {c['logoUrl']}")
        print()


def cmd_jobs(args: argparse.Namespace) -> None:
    repo = JobRepository(init_database(args.database_url))
    jobs = repo.find_all({
        "title": args.title,
        "minSalary": args.min_salary,
        "hasEquity": args.has_equity,
    })
    if not jobs:
        print("No jobs found.")
        return
    print(f"Found {len(jobs)} jobs:\n")
    for j in jobs:
        print(f"#{j['id']}: {j['title']} @ {j['companyHandle']}")
        print(f"  Salary: {j['salary']}")
        print(f"  Equity: {j['equity']}")
        print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jobly", description="Jobly companies and jobs API")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--database-url", help="SQLAlchemy URL (default: DATABASE_URL or sqlite:///data/jobly.db)")

    subparsers = parser.add_subparsers(dest="command")

    ini = subparsers.add_parser("init-db", help="Create the companies and jobs tables")
    ini.set_defaults(func=cmd_init_db)

    srv = subparsers.add_parser("serve", help="Run the HTTP API with uvicorn")
    srv.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    srv.add_argument("--port", type=int, help="Port (default: PORT or 3001)")
    srv.add_argument("--reload", action="store_true", help="Reload on code changes")
    srv.set_defaults(func=cmd_serve)

    sed = subparsers.add_parser("seed", help="Load companies and jobs from a JSON file")
    sed.add_argument("--input", required=True, help="Path to seed JSON")
    sed.add_argument("--dry-run", action="store_true", help="Validate without writing")
    sed.set_defaults(func=cmd_seed)

    tok = subparsers.add_parser("token", help="Print a signed bearer token")
    tok.add_argument("--username", required=True, help="Username claim")
    tok.add_argument("--admin", action="store_true", help="Grant admin")
    tok.set_defaults(func=cmd_token)

    cmp_ = subparsers.add_parser("companies", help="List companies")
    cmp_.add_argument("--name", help="Case-insensitive name substring")
    cmp_.add_argument("--min-employees", type=int, help="Minimum employee count")
    cmp_.add_argument("--max-employees", type=int, help="Maximum employee count")
    cmp_.set_defaults(func=cmd_companies)

    jbs = subparsers.add_parser("jobs", help="List jobs")
    jbs.add_argument("--title", help="Case-insensitive title substring")
    jbs.add_argument("--min-salary", type=int, help="Minimum salary")
    jbs.add_argument("--has-equity", action="store_true", help="Only jobs with non-zero equity")
    jbs.set_defaults(func=cmd_jobs)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    configure_logger(get_settings())

    if hasattr(args, "func"):
        try:
            args.func(args)
        finally:
            close_database()
        return

    parser.print_help()


if __name__ == "__main__":
    main()
