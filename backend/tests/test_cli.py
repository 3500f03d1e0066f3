# Overview: Pytest coverage for the flask CLI command groups.

import pytest

from venuehub.models import Organization, Profile, User


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


class TestOrgCommands:

    def test_create_and_list(self, runner, db_session):
        result = runner.invoke(args=["orgs", "create", "--name", "Acme Events"])
        assert result.exit_code == 0
        assert "PASS Created organization: Acme Events" in result.output

        org = db_session.query(Organization).filter_by(name="Acme Events").one()

        result = runner.invoke(args=["orgs", "list"])
        assert result.exit_code == 0
        assert f"{org.id}  Acme Events" in result.output

    def test_list_empty(self, runner, db_session):
        result = runner.invoke(args=["orgs", "list"])
        assert "No organizations found" in result.output

    def test_create_blank_name_fails(self, runner, db_session):
        result = runner.invoke(args=["orgs", "create", "--name", "  "])
        assert result.exit_code == 1
        assert "FAIL Missing required fields: name" in result.output


class TestUserCommands:

    def args(self, org_id, **overrides):
        options = {
            "--email": "root@venuehub.local",
            "--password": "Sup3r$ecret",
            "--name": "Root Admin",
            "--org-id": org_id,
            "--role": "super_admin",
        }
        options.update(overrides)
        args = ["users", "create"]
        for key, value in options.items():
            args.extend([key, value])
        return args

    def test_create_super_admin(self, runner, db_session, org_a):
        result = runner.invoke(args=self.args(org_a.id))

        assert result.exit_code == 0, result.output
        assert "PASS Created user: root@venuehub.local" in result.output

        user = db_session.query(User).filter_by(email="root@venuehub.local").one()
        profile = db_session.get(Profile, user.id)
        assert profile.role == "super_admin"
        assert profile.organization_id == org_a.id

    def test_unknown_organization(self, runner, db_session):
        result = runner.invoke(args=self.args("missing-org"))

        assert result.exit_code == 1
        assert "FAIL Organization not found" in result.output
        assert db_session.query(User).count() == 0

    def test_weak_password(self, runner, db_session, org_a):
        result = runner.invoke(args=self.args(org_a.id, **{"--password": "password"}))

        assert result.exit_code == 1
        assert "FAIL Password must contain at least one uppercase letter" in result.output

    def test_invalid_role_rejected_by_cli(self, runner, db_session, org_a):
        result = runner.invoke(args=self.args(org_a.id, **{"--role": "admin"}))

        assert result.exit_code == 2
        assert db_session.query(User).count() == 0


class TestSystemCommands:

    def test_init_db(self, runner, db_session):
        result = runner.invoke(args=["system", "init-db"])
        assert result.exit_code == 0
        assert "PASS Database tables created" in result.output
