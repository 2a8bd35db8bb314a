"""
Tests for the command-line interface.
"""

import json

import pytest

from saned.app import main


@pytest.fixture
def profiles_file(tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps([
        {"id": "subject", "first_name": "Ahmed", "email": "ahmed@example.com",
         "role": "startup", "location": "Dubai", "tags": ["ai", "fintech"]},
        {"id": "twin", "first_name": "Layla", "email": "layla@example.com",
         "role": "startup", "location": "Dubai", "tags": ["ai", "fintech", "health"]},
        {"id": "other", "first_name": "Khalid", "email": "khalid@example.com",
         "role": "corporate", "location": "Dhahran", "organization": "Saudi Aramco"},
        {"first_name": "", "email": "broken@example.com"},
    ]))
    return path


@pytest.fixture
def cli_db(tmp_path, profiles_file, capsys):
    db = tmp_path / "cli.db"
    main(["import-users", "--input", str(profiles_file), "--db", str(db)])
    capsys.readouterr()
    return db


class TestCli:
    """Test CLI commands end to end against a temporary database."""

    def test_version(self, capsys):
        main(["--version"])
        assert capsys.readouterr().out.strip() == "0.1.0"

    def test_init_db(self, tmp_path, capsys):
        db = tmp_path / "nested" / "new.db"
        main(["init-db", "--db", str(db)])
        assert db.exists()
        assert "Database ready" in capsys.readouterr().out

    def test_import_reports_counts(self, tmp_path, profiles_file, capsys):
        db = tmp_path / "import.db"
        main(["import-users", "--input", str(profiles_file), "--db", str(db)])
        assert "new=3 existing=0 invalid=1" in capsys.readouterr().out

        main(["import-users", "--input", str(profiles_file), "--db", str(db)])
        assert "new=0 existing=3 invalid=1" in capsys.readouterr().out

    def test_validate(self, tmp_path, capsys):
        good = tmp_path / "good.json"
        good.write_text(json.dumps({"first_name": "Sara", "email": "sara@example.com"}))
        main(["validate", "--input", str(good)])
        assert "Valid" in capsys.readouterr().out

        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"first_name": "Sara", "email": "nope"}))
        with pytest.raises(SystemExit) as exc:
            main(["validate", "--input", str(bad)])
        assert exc.value.code == 2

    def test_matches(self, cli_db, capsys):
        main(["matches", "--user", "subject", "--db", str(cli_db)])
        out = capsys.readouterr().out
        assert "Top 2 matches" in out
        assert "Score: 83" in out
        assert "Both startups with shared interests in ai and fintech." in out

    def test_matches_unknown_user(self, cli_db):
        with pytest.raises(SystemExit) as exc:
            main(["matches", "--user", "ghost", "--db", str(cli_db)])
        assert "not found" in str(exc.value.code)

    def test_prefer_and_history(self, cli_db, capsys):
        main(["prefer", "--user", "subject", "--target", "other", "--preference", "like", "--db", str(cli_db)])
        assert "= like" in capsys.readouterr().out

        main(["history", "--user", "subject", "--db", str(cli_db)])
        out = capsys.readouterr().out
        assert "[like] Khalid" in out
        assert "You showed interest in this profile" in out

    def test_prefer_rejects_pending(self, cli_db):
        with pytest.raises(SystemExit) as exc:
            main(["prefer", "--user", "subject", "--target", "other", "--preference", "pending", "--db", str(cli_db)])
        assert exc.value.code == 2

    def test_list_users(self, cli_db, capsys):
        main(["list-users", "--db", str(cli_db)])
        out = capsys.readouterr().out
        assert "Found 3 users" in out
        assert "Role: Startup" in out

    def test_missing_database(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["history", "--user", "subject", "--db", str(tmp_path / "missing.db")])
        assert "Database not found" in str(exc.value.code)
