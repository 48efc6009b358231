"""
Tests for the jobly command line.
"""

import json

import pytest

from jobly import __version__
from jobly.app import main
from jobly.auth import decode_token


@pytest.fixture
def seed_file(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps({
        "companies": [
            {"handle": "acme", "name": "Acme", "description": "Anvils", "numEmployees": 40},
            {"handle": "beta", "name": "Beta", "description": "Betas", "numEmployees": 4},
        ],
        "jobs": [
            {"title": "Engineer", "salary": 100000, "equity": "0.01", "companyHandle": "acme"},
            {"title": "Tester", "salary": 50000, "companyHandle": "beta"},
        ],
    }))
    return path


class TestCli:
    def test_version(self, capsys):
        main(["--version"])

        assert capsys.readouterr().out.strip() == __version__

    def test_init_db(self, tmp_path, capsys):
        db_path = tmp_path / "cli.db"

        main(["--database-url", f"sqlite:///{db_path}", "init-db"])

        assert db_path.exists()
        assert "Database ready" in capsys.readouterr().out

    def test_seed_and_list(self, db_url, seed_file, capsys):
        main(["--database-url", db_url, "seed", "--input", str(seed_file)])
        assert "companies=2 jobs=2 skipped=0 errors=0" in capsys.readouterr().out

        main(["--database-url", db_url, "companies", "--min-employees", "10"])
        out = capsys.readouterr().out
        assert "Found 1 companies" in out
        assert "acme: Acme" in out

        main(["--database-url", db_url, "jobs", "--has-equity"])
        out = capsys.readouterr().out
        assert "Found 1 jobs" in out
        assert "Engineer @ acme" in out

    def test_seed_missing_file(self, db_url, tmp_path):
        with pytest.raises(SystemExit):
            main(["--database-url", db_url, "seed", "--input", str(tmp_path / "missing.json")])

    def test_empty_listing(self, db_url, capsys):
        main(["--database-url", db_url, "companies", "--name", "zzz"])

        assert "No companies found." in capsys.readouterr().out

    def test_token(self, capsys):
        main(["token", "--username", "boss", "--admin"])

        token = capsys.readouterr().out.strip().splitlines()[-1]
        assert decode_token(token) == {"username": "boss", "isAdmin": True}
